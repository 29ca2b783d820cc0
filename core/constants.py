"""
Constants and configuration values for Magick Flow.
Centralizes all magic characters, defaults and message templates.
"""


# Geometry Constants
class GeometryConstants:
    """Suffixes and separators of the ImageMagick geometry syntax."""

    SIZE_SEPARATOR = "x"
    PERCENT = "%"
    AREA = "@"
    IGNORE_ASPECT = "!"
    ONLY_SHRINK = ">"
    ONLY_ENLARGE = "<"
    FILL_AREA = "^"

    # Offset defaults when only one axis is given
    DEFAULT_OFFSET = 0

    # Definition subkeys resolved through the geometry formatter
    GEOMETRY_SUBKEYS = ("size", "offset")


# Unsharp Constants
class UnsharpDefaults:
    """Default parameters for the -unsharp option."""

    SIGMA = 2
    RADIUS = 0
    GAIN = 1.0
    THRESHOLD = 0.05


# Command Constants
class CommandConstants:
    """Constants related to command assembly and execution."""

    DEFAULT_COMMAND = "convert"

    FLAG_PREFIX = "-"
    RESET_PREFIX = "+"
    TOKEN_SEPARATOR = " "
    QUOTE = "'"
    ESCAPED_QUOTE = "'\\''"

    OUTPUT_ENCODING = "utf-8"


# History Constants
class HistoryConstants:
    """Constants related to the execution history buffer."""

    DEFAULT_BUFFER_SIZE = 100
    MIN_BUFFER_SIZE = 1
    MAX_BUFFER_SIZE = 10000

    # Stored stdout/stderr are truncated to keep the buffer small
    MAX_OUTPUT_CHARS = 4096
    RUN_ID_PREFIX = "run_"


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    DEFAULT_LIMIT = 10
    MAX_LIMIT = 100
    MIN_LIMIT = 1

    API_VERSION = "v1"


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    ENV_PREFIX = "MAGICK_FLOW_"
    DEFAULT_HOST = "0.0.0.0"
    DEFAULT_PORT = 8100


# Error Messages
class ErrorMessages:
    """Standard error messages."""

    RUN_NOT_FOUND = "Run {run_id} not found"
    EXECUTION_FAILED = "Command failed with exit code {returncode}: {command}"
    SPAWN_FAILED = "Failed to spawn command: {error}"
    INITIALIZATION_FAILED = "Failed to initialize {component}: {error}"
