# Short code settings
DEFAULT_CODE_LENGTH = 5
MAX_CODE_GENERATION_ATTEMPTS = 5

# Masked link base URL when neither LINK_BASE_URL nor API Gateway provide one
DEFAULT_BASE_URL = 'http://localhost:3000'

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'
LINK_BASE_URL_ENV = 'LINK_BASE_URL'
LINK_BACKEND_ENV = 'LINK_BACKEND'

# AppConfig: identifiers of the deployed configuration document
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'

# Local runs: Redis connection details (active backend is read from LINK_BACKEND)
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # noqa: S105

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
MISSING_CODE = 'MISSING_CODE'
MISSING_URL = 'MISSING_URL'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_EXPIRATION = 'INVALID_EXPIRATION'
INVALID_PASSWORD = 'INVALID_PASSWORD'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
LINK_FORBIDDEN = 'LINK_FORBIDDEN'

# Log events
LINK_CREATED = 'LINK_CREATED'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
LINK_INVALIDATED = 'LINK_INVALIDATED'
STATS_RETRIEVED = 'STATS_RETRIEVED'
