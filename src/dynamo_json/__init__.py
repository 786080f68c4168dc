"""
DynamoDB JSON Transformer - Convert DynamoDB typed JSON into plain JSON.

Every value in the input is wrapped in a type tag such as {"S": "text"}
or {"N": "42"}; the transformer unwraps and coerces each one.
"""

__version__ = "1.0.0"

from .dispatcher import Dispatcher, sanitize_key, transform_json
from .rules import (
    TRANSFORM_RULES,
    format_bool,
    format_list,
    format_map,
    format_null,
    format_num,
    format_string,
)
from .transformer import DynamoJSONTransformer
from .types import (
    ConfigError,
    MalformedSchemaError,
    OutputError,
    ParseError,
    TransformError,
    TransformResult,
)

__all__ = [
    "DynamoJSONTransformer",
    "Dispatcher",
    "transform_json",
    "sanitize_key",
    "TRANSFORM_RULES",
    "format_string",
    "format_num",
    "format_bool",
    "format_null",
    "format_map",
    "format_list",
    "TransformError",
    "ConfigError",
    "ParseError",
    "MalformedSchemaError",
    "OutputError",
    "TransformResult",
]
