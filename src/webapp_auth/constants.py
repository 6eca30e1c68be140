# ==========================================
# 1. Service Principal Environment Variables
# ==========================================
ENV_CLIENT_ID = "CLIENT_ID"
ENV_CLIENT_SECRET = "CLIENT_SECRET"
ENV_TENANT_ID = "TENANT_ID"
ENV_SUBSCRIPTION_ID = "SUBSCRIPTION_ID"

REQUIRED_ENV_VARS = [
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_TENANT_ID,
    ENV_SUBSCRIPTION_ID,
]

DEFAULT_ENV_FILE = ".env"

# ==========================================
# 2. Azure Defaults
# ==========================================
DEFAULT_REGION = "eastus"
WEB_APP_DOMAIN_SUFFIX = ".azurewebsites.net"

# Standard S1, Windows workers
APP_SERVICE_PLAN_SKU = {"name": "S1", "tier": "Standard", "capacity": 1}
NET_FRAMEWORK_VERSION = "v4.6"

# Poller timeout for long-running operations (seconds)
LRO_TIMEOUT = 900

# ==========================================
# 3. Resource Naming
# ==========================================
RESOURCE_GROUP_PREFIX = "rg1NEMV_"
WEB_APP_NAME_MAX_LENGTH = 60
RANDOM_SUFFIX_LENGTH = 8

# ==========================================
# 4. Identity Provider Keys
# ==========================================
PROVIDER_AAD = "aad"
PROVIDER_FACEBOOK = "facebook"
PROVIDER_GOOGLE = "google"
PROVIDER_MICROSOFT = "microsoft"

AAD_ISSUER_TEMPLATE = "https://login.microsoftonline.com/{tenant_id}/v2.0"
