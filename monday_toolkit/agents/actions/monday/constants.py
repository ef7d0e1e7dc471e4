# API version that exposes beta endpoints (smart search, user context)
DEV_API_VERSION = "dev"

SEARCH_TIMEOUT_SECONDS = 10
SEARCH_LIMIT = 100
LOAD_INTO_MEMORY_LIMIT = 10000
