"""
Constants for chuk-mcp-hillshade server.

All magic strings, default shading parameters, and configuration values live here.
"""


class ServerConfig:
    NAME = "chuk-mcp-hillshade"
    VERSION = "0.1.0"
    DESCRIPTION = "Relief Shading (Hillshade) Rendering MCP Server for Terrain Height Fields"


class StorageProvider:
    MEMORY = "memory"
    S3 = "s3"
    FILESYSTEM = "filesystem"


class SessionProvider:
    MEMORY = "memory"
    REDIS = "redis"


class EnvVar:
    ARTIFACTS_PROVIDER = "CHUK_ARTIFACTS_PROVIDER"
    BUCKET_NAME = "BUCKET_NAME"
    REDIS_URL = "REDIS_URL"
    ARTIFACTS_PATH = "CHUK_ARTIFACTS_PATH"
    AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
    AWS_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
    AWS_ENDPOINT_URL_S3 = "AWS_ENDPOINT_URL_S3"
    MCP_STDIO = "MCP_STDIO"
    RENDER_WORKERS = "HILLSHADE_RENDER_WORKERS"


class RenderStrategy:
    BATCH = "batch"
    FRAME = "frame"


ALL_STRATEGIES = [RenderStrategy.BATCH, RenderStrategy.FRAME]
DEFAULT_STRATEGY = RenderStrategy.BATCH

# Shading parameter defaults (initial slider positions)
DEFAULT_AMBIENT = 0.2
DEFAULT_DIFFUSE = 0.0
DEFAULT_SPECULAR = 1.0
DEFAULT_EXAGGERATION = 5.0
DEFAULT_AZIMUTH = 0.0
DEFAULT_ELEVATION_ANGLE = 45.0

# Names in uniform-block order
PARAMETER_NAMES = [
    "exaggeration",
    "azimuth",
    "elevation_angle",
    "ambient",
    "diffuse",
    "specular",
]

# Kernel constants
NORMAL_Z = 2.0  # assumes unit horizontal pixel spacing on both axes
VIEW_VECTOR = (0.0, 0.0, 1.0)
DEGENERATE_NORMAL = (0.0, 0.0, 1.0)

# Field geometry
MIN_FIELD_SIZE = 3
BORDER_WIDTH = 1

# Output encoding
INTENSITY_SCALE = 255.0
OPAQUE_ALPHA = 255
OUTPUT_FORMATS = ["png"]

# Execution
DEFAULT_WORKERS = 1
MAX_WORKERS = 32


class ErrorMessages:
    FIELD_NOT_2D = "Elevation grid must be 2-D, got {} dimension(s)"
    FIELD_TOO_SMALL = "Elevation grid must be at least {0}x{0}, got {1}x{2}"
    FIELD_NOT_FINITE = "Elevation grid contains {} non-finite value(s)"
    FIELD_RAGGED = "Elevation rows must all have the same length"
    SAMPLE_OUT_OF_RANGE = "Sample ({}, {}) outside height field of {} rows x {} cols"
    NOT_INTERIOR = "Pixel ({}, {}) is not interior; valid rows 1..{}, cols 1..{}"
    UNKNOWN_PARAMETER = "Unknown shading parameter(s): {}. Available: {}"
    UNKNOWN_STRATEGY = "Unknown render strategy '{}'. Available: {}"
    INVALID_WORKERS = "workers must be between 1 and {}, got {}"
    OUT_SHAPE_MISMATCH = "Output buffer shape {} does not match expected {}"
    NO_FIELD_LOADED = "No height field loaded. Call hillshade_load_field first."
    NO_ARTIFACT_STORE = (
        "No artifact store available. Configure CHUK_ARTIFACTS_PROVIDER "
        "environment variable (memory, filesystem, or s3)."
    )


class SuccessMessages:
    FIELD_LOADED = "Height field loaded ({} rows x {} cols, {} interior pixels)"
    PARAMETERS = "Current shading parameters"
    PARAMETERS_UPDATED = "Updated {} parameter(s): {}"
    RENDER_COMPLETE = (
        "Hillshade rendered ({} shape, strategy {}, azimuth {:.0f}, elevation {:.0f})"
    )
    PIXEL_SHADE = "Pixel ({}, {}) intensity {:.4f}"
    STATUS = "Hillshade MCP Server v{} (field loaded: {}, storage: {})"
