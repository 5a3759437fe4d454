# src/rankboard/config.py

"""Runtime settings read from the environment."""

import os

# Redis instance holding the precomputed ranking sorted sets
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Prefix shared by every ranking index key, e.g. "ripple:leaderboard:std"
RANKING_KEY_NAMESPACE = os.getenv("RANKING_KEY_NAMESPACE", "ripple")

# Upper bound on concurrent rank-of-member lookups per request
RANK_LOOKUP_CONCURRENCY = int(os.getenv("RANK_LOOKUP_CONCURRENCY", "16"))

# Deadline for a whole leaderboard request, in seconds
LEADERBOARD_TIMEOUT_SECONDS = float(os.getenv("LEADERBOARD_TIMEOUT_SECONDS", "5.0"))

# Page size bounds; out-of-range sizes fall back to the default
DEFAULT_PAGE_SIZE = 50
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 500
