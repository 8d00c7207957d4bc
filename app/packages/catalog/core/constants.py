"""Shared constants for the catalog package."""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_UNPROCESSABLE_ENTITY = 422
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

PATH_SEPARATOR = "/"
LEVEL_KEYS = ("level1", "level2", "level3", "level4", "level5")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

RAW_SCHEMA_FILE = "raw_schema.json"
RAW_USER_DATA_FILE = "raw_user_data.json"
TRANSFORMED_SCHEMA_FILE = "transformed_schema.json"
TRANSFORMED_USER_DATA_FILE = "transformed_user_data.json"
PATH_MAPPINGS_FILE = "path_mappings.json"

MAX_PAGE_SIZE = 200

DEFAULT_XDM_SCHEMA_NAME = "Raw User Profile"
IDENTITY_PATH_PREFIX = "userDetails/identity"
