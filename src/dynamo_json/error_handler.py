"""Error handling implementation for the DynamoDB JSON transformer."""

import json
import logging
from typing import Any, List, Optional

from .types import (
    ErrorResponse,
    ErrorType,
    TransformError,
    ValidationError,
    ValidationResult,
    type_name,
)


JSON_NAME_MARKER = ".json"


class ErrorHandler:
    """
    Error handler for transformer operations.

    Validates configuration and input text before they reach the engine,
    and turns transformation errors into responses the CLI can print.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_config_path(self, path: str) -> ValidationResult:
        """
        Validate the name of the input file.

        The name only has to contain ".json" somewhere, so "my.jsonfile"
        is accepted while "schema.txt" is not.

        Args:
            path: Input file name

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not path:
            errors.append(ValidationError(
                type=ErrorType.CONFIG,
                message="config file path cannot be empty",
                location="config"
            ))
        elif JSON_NAME_MARKER not in path:
            errors.append(ValidationError(
                type=ErrorType.CONFIG,
                message="config file is not a JSON file",
                location="config"
            ))
        elif not path.endswith(JSON_NAME_MARKER):
            warnings.append(f"config file name '{path}' does not end with {JSON_NAME_MARKER}")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def validate_input(self, json_string: str) -> ValidationResult:
        """
        Validate input JSON text.

        Args:
            json_string: JSON text to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            data = json.loads(json_string, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except ValueError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="Invalid JSON syntax: document is nested too deeply",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if not isinstance(data, dict):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root element must be a JSON object, got {type_name(data)}",
                location="root"
            ))
        elif not data:
            warnings.append("Root object is empty")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def handle_transform_error(self, error: TransformError) -> ErrorResponse:
        """
        Handle a transformation error.

        Every transformation error aborts the run, so the response is never
        recoverable; it carries the message to report and a hint.

        Args:
            error: TransformError to handle

        Returns:
            ErrorResponse for the caller to report
        """
        self.logger.error(f"Transformation error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.CONFIG:
            action = "Check that --config names a readable file whose name contains '.json'."
        elif error.error_type in (ErrorType.SYNTAX, ErrorType.STRUCTURE):
            action = "Check that the file holds a single JSON object."
        elif error.error_type == ErrorType.SCHEMA:
            action = (f"Fix the payload of the '{error.context.get('tag')}' tag; "
                      f"it must be {error.context.get('expected')}.")
        elif error.error_type == ErrorType.OUTPUT:
            action = "Check for numbers that have no JSON representation, such as NaN or Infinity."
        else:
            action = "Unknown error type. Please check logs and retry."

        return ErrorResponse(
            can_recover=False,
            message=str(error),
            suggested_action=action
        )

    @staticmethod
    def error_messages(result: ValidationResult) -> List[str]:
        """Return the messages of a validation result's errors."""
        return [error.message for error in result.errors]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")
