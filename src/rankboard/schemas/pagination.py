# src/rankboard/schemas/pagination.py

"""Pagination window shared by the list endpoints."""

from pydantic import BaseModel, Field

from rankboard.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, MIN_PAGE_SIZE


class Page(BaseModel):
    """Zero-based page window.

    Attributes:
        number: Zero-based page index
        size: Number of rows per page
    """

    number: int = Field(0, ge=0)
    size: int = Field(DEFAULT_PAGE_SIZE, ge=MIN_PAGE_SIZE, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return self.number * self.size

    @classmethod
    def normalize(cls, page: int | None, size: int | None) -> "Page":
        """Build a window from raw 1-based query values without rejecting any.

        Pages below 1 become the first page. A size that is missing or
        outside the permitted bounds falls back to the default size.
        """
        number = max((page or 0) - 1, 0)
        if size is None or not MIN_PAGE_SIZE <= size <= MAX_PAGE_SIZE:
            size = DEFAULT_PAGE_SIZE
        return cls(number=number, size=size)
