"""
ltc Constants

Centralized constants for magic values, defaults, and messages.
"""

from datetime import timedelta
from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit categories."""

    SUCCESS = 0
    UNEXPECTED = 1
    INVALID_SYNTAX = 3
    COMMAND_FAILED = 4
    BAD_DOCKER = 6
    PLACEMENT_ERROR = 7
    SIGNAL = 130


# Default Port Configuration
DEFAULT_EXPOSED_PORT = 8080
MAX_PORT = 65535

# Default Resource Configuration
DEFAULT_CPU_WEIGHT = 100
MIN_CPU_WEIGHT = 1
MAX_CPU_WEIGHT = 100
DEFAULT_MEMORY_MB = 128
DEFAULT_DISK_MB = 0
DEFAULT_INSTANCES = 1
DEFAULT_WORKING_DIR = "/"

# Polling Configuration
DEFAULT_POLLING_TIMEOUT = timedelta(minutes=2)
DEFAULT_MONITOR_TIMEOUT = timedelta(seconds=1)
POLLING_INTERVAL = timedelta(seconds=1)

# Environment
PROCESS_GUID_ENV = "PROCESS_GUID"

# Command line
START_COMMAND_TERMINATOR = "--"

# Config Configuration
CONFIG_HOME_ENV = "LATTICE_CLI_HOME"
DEFAULT_CONFIG_DIR = "~/.lattice"
CONFIG_FILENAME = "config.yml"
LOGS_DIRNAME = "logs"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Registry Configuration
DEFAULT_DOCKER_REGISTRY = "registry-1.docker.io"
DEFAULT_IMAGE_TAG = "latest"
REGISTRY_TIMEOUT = 30

# Receptor API Configuration
RECEPTOR_TIMEOUT = 10
LOG_TAIL_INTERVAL = 1.0

# Error Messages
ERROR_INVALID_PORT = (
    "Invalid port specified. Ports must be a comma-delimited list of "
    "integers between 0-65535."
)
ERROR_MALFORMED_ROUTE = "Malformed route. Routes must be of the format port:route"
ERROR_MONITOR_PORT_NOT_EXPOSED = (
    "Must have an exposed port that matches the monitored port"
)
ERROR_APP_AND_IMAGE_REQUIRED = "APP_NAME and DOCKER_IMAGE are required"
ERROR_TERMINATOR_REQUIRED = "'--' Required before start command"
ERROR_INVALID_CPU_WEIGHT = "Invalid CPU Weight"
ERROR_NO_START_COMMAND = "Unable to determine start command from image metadata."
ERROR_PLACEMENT = (
    "Error, could not place all instances: insufficient resources. "
    "Try requesting fewer instances or reducing the requested memory or disk capacity."
)
ERROR_SCALE_USAGE = "Please enter 'ltc scale APP_NAME NUMBER_OF_INSTANCES'"
ERROR_SCALE_INSTANCES = "Number of Instances must be an integer"
ERROR_NO_TARGET = "ltc is not targeted"
