"""Constants used in business logic."""

# Number of tokens every user gets at the beginning of each calendar day
DEFAULT_DAILY_ALLOWANCE = 100

# Calendar days are computed in this time zone unless configured otherwise
DEFAULT_QUOTA_TIMEZONE = "UTC"

# Storage used when no quota storage is configured
DEFAULT_SQLITE_DB_PATH = "/tmp/daily-token-quota.db"

# Number of user IDs retrieved by one page of the stale records scan
DEFAULT_LIST_PAGE_SIZE = 1000

# Number of user IDs written by one bulk reset statement; SQLite limits the
# number of bound parameters per statement
DEFAULT_BULK_RESET_CHUNK_SIZE = 500

# Batch reconciliation is idempotent, so running it more often than once per
# day only shortens the staleness window
DEFAULT_SCHEDULER_PERIOD = 3600

# Authentication constants
DEFAULT_VIRTUAL_PATH = "/quota-access"
DEFAULT_USER_NAME = "quota-user"
DEFAULT_USER_UID = "00000000-0000-0000-0000-000"
# default value for token when no token is provided
NO_USER_TOKEN = ""
AUTH_MOD_NOOP = "noop"
AUTH_MOD_NOOP_WITH_TOKEN = "noop-with-token"
# Supported authentication modules
SUPPORTED_AUTHENTICATION_MODULES = frozenset(
    {
        AUTH_MOD_NOOP,
        AUTH_MOD_NOOP_WITH_TOKEN,
    }
)
DEFAULT_AUTHENTICATION_MODULE = AUTH_MOD_NOOP

# PostgreSQL connection constants
# See: https://www.postgresql.org/docs/current/libpq-connect.html#LIBPQ-CONNECT-SSLMODE
POSTGRES_DEFAULT_SSL_MODE = "prefer"
# See: https://www.postgresql.org/docs/current/libpq-connect.html#LIBPQ-CONNECT-GSSENCMODE
POSTGRES_DEFAULT_GSS_ENCMODE = "prefer"

# Message returned to the UI when reconciliation can not complete
UNABLE_TO_LOAD_QUOTA = "Unable to load quota"

# Configuration file used when none is given on the command line
DEFAULT_CONFIGURATION_FILE = "daily-token-quota.yaml"

# Environment variable used to pass configuration path to Uvicorn workers
CONFIGURATION_PATH_ENV_VARIABLE = "DAILY_TOKEN_QUOTA_CONFIG_PATH"
