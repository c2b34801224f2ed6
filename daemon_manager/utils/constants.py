"""Application constants and configuration."""

# Application metadata
APP_NAME = "Daemon Manager"
APP_VERSION = "0.3.0"

# Environment variables
CONFIG_PATH_ENV = "DAEMON_MANAGER_CONFIG_PATH"
ADDR_ENV = "DAEMON_MANAGER_ADDR"
LOG_FILE_ENV = "DAEMON_MANAGER_LOG_FILE"
LOG_LEVEL_ENV = "DAEMON_MANAGER_LOG_LEVEL"

# Paths
DEFAULT_CONFIG_FILE = "services.yaml"

# Server defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

# Query defaults
DEFAULT_QUERY_TIMEOUT = 10  # seconds
DEFAULT_LOG_LINES = 100
SYSTEMCTL_PATH = "systemctl"
JOURNALCTL_PATH = "journalctl"

# systemd properties read for each service
PROP_MAIN_PID = "MainPID"
PROP_STATUS_ERRNO = "StatusErrno"
PROP_START_TIMESTAMP = "ExecMainStartTimestampMonotonic"
UNIT_PROPERTIES = ("Id", "LoadState", "ActiveState", "SubState", "UnitFileState")
