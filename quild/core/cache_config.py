"""Cache configuration and TTL settings"""

# Cache TTL (Time To Live) configurations in seconds
CACHE_TTL = {
    # Rankings change on every lesson completion; events invalidate them earlier
    "leaderboard": 120,       # 2 minutes
}

# Cache key patterns
CACHE_KEYS = {
    "leaderboard": "leaderboard:{}",
}

CACHE_PATTERNS = {
    "leaderboard": "leaderboard:*",
}
