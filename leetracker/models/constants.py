"""Constants for LeeTracker.

This module centralizes magic numbers and default values used throughout the application.
"""

# Difficulty vocabulary (fixed enumeration)
DIFFICULTY_LEVELS = ("Easy", "Medium", "Hard")

# Analytics
TOP_TAGS_LIMIT = 10
DEFAULT_LEADERBOARD_LIMIT = 10
DEFAULT_POPULAR_LIMIT = 10
RECENT_SUMMARIES_LIMIT = 30

# Pagination
DEFAULT_PAGE_SIZE = 10

# Verification
VERIFICATION_METHOD_PROFILE_BIO = "PROFILE_BIO"
VERIFICATION_CODE_TTL_HOURS = 24
VERIFICATION_CODE_RANDOM_LENGTH = 6
