"""Core type definitions for the DynamoDB JSON transformer."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


# A parsed JSON document node. Objects at every level are read as
# "field name -> tagged value" pairs by the dispatcher.
JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JSONObject = Dict[str, JSONValue]

# A rule receives the payload of a tagged value together with the dispatcher
# that owns it, so that structural rules can recurse.
TransformationRule = Callable[[Any, Any], JSONValue]


class ErrorType(Enum):
    """Enumeration of error types."""
    CONFIG = "config"
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    SCHEMA = "schema"
    OUTPUT = "output"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    message: str
    suggested_action: str


@dataclass
class TransformResult:
    """Result of a file transformation."""
    success: bool
    json_string: str
    errors: Optional[List[str]] = None
    metrics: Optional[Any] = None


class TransformError(Exception):
    """Base exception for transformation errors."""

    def __init__(self, message: str, error_type: ErrorType,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context or {}


class ConfigError(TransformError):
    """The input file name is not JSON-named or the file cannot be read."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.CONFIG, context)


class ParseError(TransformError):
    """The input is not valid JSON or its root is not an object."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.SYNTAX,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_type, context)


class MalformedSchemaError(TransformError):
    """A tagged value carries a payload of the wrong shape for its tag."""

    def __init__(self, tag: str, expected: str, actual: Any):
        actual_name = type_name(actual)
        super().__init__(
            f"malformed schema: tag '{tag}' expects {expected} payload, got {actual_name}",
            ErrorType.SCHEMA,
            context={"tag": tag, "expected": expected, "actual": actual_name},
        )
        self.tag = tag
        self.expected = expected
        self.actual = actual_name


class OutputError(TransformError):
    """The transformed document cannot be serialized."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.OUTPUT, context)


_JSON_TYPE_NAMES = (
    (bool, "boolean"),
    (str, "string"),
    ((int, float), "number"),
    (dict, "object"),
    (list, "array"),
)


def type_name(value: Any) -> str:
    """Return the JSON name of a parsed value's type."""
    if value is None:
        return "null"
    for python_type, name in _JSON_TYPE_NAMES:
        if isinstance(value, python_type):
            return name
    return type(value).__name__


def expect_string(tag: str, payload: Any) -> str:
    """Return payload if it is a string, else raise MalformedSchemaError."""
    if not isinstance(payload, str):
        raise MalformedSchemaError(tag, "string", payload)
    return payload


def expect_object(tag: str, payload: Any) -> Dict[str, Any]:
    """Return payload if it is an object, else raise MalformedSchemaError."""
    if not isinstance(payload, dict):
        raise MalformedSchemaError(tag, "object", payload)
    return payload


def expect_array(tag: str, payload: Any) -> List[Any]:
    """Return payload if it is an array, else raise MalformedSchemaError."""
    if not isinstance(payload, list):
        raise MalformedSchemaError(tag, "array", payload)
    return payload
