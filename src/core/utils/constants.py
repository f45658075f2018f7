"""Global constants used throughout the application.

This module centralizes the key prefixes, error codes, environment variable
names and API Gateway settings shared by the deletion service.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Configuration Errors
ERROR_CODE_CONFIGURATION_MISSING = "CONFIGURATION_MISSING"

# Object Storage Errors
ERROR_CODE_OBJECT_STORE = "OBJECT_STORE_ERROR"
ERROR_CODE_OBJECT_DELETE_FAILED = "OBJECT_DELETE_FAILED"

# Metadata Store Errors
ERROR_CODE_METADATA_STORE = "METADATA_STORE_ERROR"
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT = "METADATA_INVALID_FORMAT"
ERROR_CODE_METADATA_INVALID_STATE = "METADATA_INVALID_STATE"

# Messaging Errors
ERROR_CODE_MESSAGE_DELETE_FAILED = "MESSAGE_DELETE_FAILED"


# ============================================================================
# Storage Key Prefixes
# ============================================================================

IMAGE_KEY_PREFIX: Final = "img:"
VIDEO_KEY_PREFIX: Final = "vid:"
AUDIO_KEY_PREFIX: Final = "aud:"
DOCUMENT_KEY_PREFIX: Final = "doc:"
R2_KEY_PREFIX: Final = "r2:"
BARE_KEY_PREFIX: Final = ""

# Lookup order matters: the first prefix with a record wins.
KNOWN_KEY_PREFIXES: Final[tuple[str, ...]] = (
    IMAGE_KEY_PREFIX,
    VIDEO_KEY_PREFIX,
    AUDIO_KEY_PREFIX,
    DOCUMENT_KEY_PREFIX,
    R2_KEY_PREFIX,
    BARE_KEY_PREFIX,
)

# ============================================================================
# Metadata Record Fields
# ============================================================================

STORAGE_TYPE_R2 = "r2"
STORAGE_TYPE_TELEGRAM = "telegram"

METADATA_TABLE_KEY_ATTRIBUTE = "kv_key"
METADATA_TABLE_VALUE_ATTRIBUTE = "value"
METADATA_TABLE_METADATA_ATTRIBUTE = "metadata"

# ============================================================================
# Response Messages
# ============================================================================

MESSAGE_NOT_FOUND = "File metadata not found."
MESSAGE_R2_DELETED = "Deleted from R2 and KV."
MESSAGE_TELEGRAM_DELETED = "Deleted from Telegram and KV."
MESSAGE_TELEGRAM_BEST_EFFORT = "KV metadata deleted (Telegram deletion best-effort)."
WARNING_TELEGRAM_NOT_DELETED = (
    "Telegram deletion failed or messageId missing, but KV metadata was forcibly deleted."
)

# ============================================================================
# Telegram
# ============================================================================

DEFAULT_TELEGRAM_API_BASE_URL = "https://api.telegram.org"
TELEGRAM_DELETE_MESSAGE_METHOD = "deleteMessage"

# ============================================================================
# Metrics
# ============================================================================

METRICS_NAMESPACE = "MediaAssetDeletion"
METRIC_ASSETS_DELETED = "AssetsDeleted"
METRIC_TELEGRAM_DELETE_FAILURES = "TelegramDeleteFailures"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

PATH_PARAM_FILE_ID = "file_id"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_ASSET_METADATA_TABLE_NAME = "ASSET_METADATA_TABLE_NAME"
ENV_R2_BUCKET_NAME = "R2_BUCKET_NAME"
ENV_R2_ENDPOINT_URL = "R2_ENDPOINT_URL"
ENV_TG_BOT_TOKEN = "TG_BOT_TOKEN"
ENV_TG_CHAT_ID = "TG_CHAT_ID"
ENV_TELEGRAM_API_BASE_URL = "TELEGRAM_API_BASE_URL"
ENV_TELEGRAM_TIMEOUT_SECONDS = "TELEGRAM_TIMEOUT_SECONDS"
