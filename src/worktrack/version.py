VERSION = "0.1.0"
APP_SCHEMA_VERSION = "1.0.0"
