"""Database and ranking store access."""
