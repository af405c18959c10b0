"""
Constants for data format defaults and parser factory configuration keys.
"""

# =============================================================================
# Builder Limits
# =============================================================================

# Ceiling for buffered reads when no overrun limit is supplied (1 MiB)
MAX_OVERRUN_LIMIT = 1048576

# Max data length sentinel meaning "no limit" (SDC_JSON, AVRO, PROTOBUF)
UNBOUNDED_DATA_LEN = -1

DEFAULT_CHARSET = "UTF-8"
DEFAULT_FILE_PATTERN_IN_ARCHIVE = "*"
DEFAULT_STAGE_GROUP = "DATA_FORMAT"
DEFAULT_RESOURCES_DIR = "resources"

# =============================================================================
# Per-format Defaults
# =============================================================================

DEFAULT_TEXT_MAX_LINE_LEN = 1024
DEFAULT_JSON_MAX_OBJECT_LEN = 4096
DEFAULT_CSV_MAX_OBJECT_LEN = 1024
DEFAULT_XML_MAX_OBJECT_LEN = 4096
DEFAULT_LOG_MAX_OBJECT_LEN = 1024
DEFAULT_MAX_STACK_TRACE_LINES = 50

DEFAULT_CSV_DELIMITER = "|"
DEFAULT_CSV_ESCAPE = "\\"
DEFAULT_CSV_QUOTE = '"'

# Common log format as a regular expression (host ident user [time] "request" status bytes)
DEFAULT_REGEX = (
    r"^(\S+) (\S+) (\S+) \[([\w:/]+\s[+\-]\d{4})\] "
    r'"(\S+) (\S+) (\S+)" (\d{3}) (\d+)'
)
DEFAULT_APACHE_CUSTOM_LOG_FORMAT = '%h %l %u %t "%r" %>s %b'
DEFAULT_GROK_PATTERN = "%{COMMONAPACHELOG}"
DEFAULT_LOG4J_CUSTOM_FORMAT = "%r [%t] %-5p %c %x - %m%n"

# =============================================================================
# Parser Factory Configuration Keys
# =============================================================================

# Delimited
CSV_SKIP_START_LINES_KEY = "csv.skip_start_lines"
CSV_DELIMITER_KEY = "csv.delimiter"
CSV_ESCAPE_KEY = "csv.escape"
CSV_QUOTE_KEY = "csv.quote"

# XML
XML_RECORD_ELEMENT_KEY = "xml.record_element"

# Avro
AVRO_SCHEMA_KEY = "avro.schema"
AVRO_SCHEMA_IN_MESSAGE_KEY = "avro.schema_in_message"

# Protobuf
PROTO_DESCRIPTOR_FILE_KEY = "protobuf.descriptor_file"
PROTO_MESSAGE_TYPE_KEY = "protobuf.message_type"
PROTO_DELIMITED_KEY = "protobuf.delimited"

# Log
LOG_RETAIN_ORIGINAL_LINE_KEY = "log.retain_original_line"
LOG_APACHE_CUSTOM_FORMAT_KEY = "log.apache_custom_format"
LOG_REGEX_KEY = "log.regex"
LOG_FIELD_PATH_TO_GROUP_KEY = "log.field_path_to_group"
LOG_GROK_PATTERN_DEFINITION_KEY = "log.grok_pattern_definition"
LOG_GROK_PATTERN_KEY = "log.grok_pattern"
LOG_LOG4J_FORMAT_KEY = "log.log4j_format"
LOG_ON_PARSE_ERROR_KEY = "log.on_parse_error"
LOG_MAX_STACK_TRACE_LINES_KEY = "log.max_stack_trace_lines"
