"""Core constants: default tags, built-in tag keys and comment delimiters."""

# Tag list used when none is configured.
DEFAULT_TAGS = ("application",)

# Built-in tag keys (registry defaults or populated by producers).
TAG_APPLICATION = "application"
TAG_PID = "pid"
TAG_TRACE_ID = "trace_id"
TAG_SPAN_ID = "span_id"
TAG_DB_HOST = "db_host"
TAG_DATABASE = "database"
TAG_SOCKET = "socket"
TAG_PATH = "path"
TAG_METHOD = "method"
TAG_REQUEST_ID = "request_id"
TAG_JOB = "job"
TAG_CONTROLLER = "controller"
TAG_ACTION = "action"

# Context key holding the ASGI scope of the current request.
CONTEXT_ASGI_SCOPE = "asgi_scope"

# Rendered comment layout: /*key:value,key:value*/
COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
TAG_SEPARATOR = ","
KEY_VALUE_SEPARATOR = ":"
