from config.loader import get_config_loader

config = get_config_loader()

# Backend selection (the only deployment-specific value)
API_URL = config.get_url("API_URL", "http://localhost:8080")

LOG_LEVEL = config.get_str("LOG_LEVEL", "info")

# Internal auth endpoints (fixed by the backend, not user configurable)
AUTH_LOGIN_PATH = "/api/v1/internal/auth/login"
AUTH_REFRESH_PATH = "/api/v1/internal/auth/refresh"
AUTH_ME_PATH = "/api/v1/internal/auth/me"
LOGIN_REDIRECT = "/login"

# Admin REST roots
ADMIN_BASE_PATH = "/admin"
USERS_BASE_PATH = "/api/v1/internal/admin/users"
UPLOAD_IMAGE_PATH = "/admin/uploads/product-image"
SEARCH_REINDEX_PATH = "/api/affiliate/admin/search/reindex"

# Credential persistence
# The access token and refresh token expire independently, like the
# auth_token / refresh_token cookies of the web dashboard
TOKEN_FILE = config.get_path("TOKEN_FILE", "~/.storefront-admin/credentials.json")
ACCESS_TOKEN_TTL_DAYS = config.get_int("ACCESS_TOKEN_TTL_DAYS", 7, minimum=0)
REFRESH_TOKEN_TTL_DAYS = config.get_int("REFRESH_TOKEN_TTL_DAYS", 30, minimum=0)

# Paging
DEFAULT_PAGE_SIZE = config.get_int("DEFAULT_PAGE_SIZE", 10, minimum=1)
ADVERTISER_PAGE_SIZE = config.get_int("ADVERTISER_PAGE_SIZE", 20, minimum=1)

# Activity feed (STOMP over websocket)
WS_PATH = config.get_str("WS_PATH", "/ws/websocket")
AUDIT_TOPIC = config.get_str("AUDIT_TOPIC", "/topic/auditlog")
ACTIVITY_FEED_SIZE = config.get_int("ACTIVITY_FEED_SIZE", 10, minimum=1)
WS_RECONNECT_DELAY = config.get_float("WS_RECONNECT_DELAY", 5.0, minimum=0.0)

# Debug log written by the CLI when --debug is given
DEBUG_LOG_FILE = config.get_path("DEBUG_LOG_FILE", "admin_debug.log")
