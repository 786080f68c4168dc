"""Input supplier: reads and parses DynamoDB typed JSON documents."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .error_handler import ErrorHandler
from .types import ConfigError, ParseError


class SchemaParser:
    """
    Parser for typed JSON input files.

    Checks the file name, reads the file and parses its content into the
    generic object the dispatcher consumes.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse_file(self, file_name: str) -> Dict[str, Any]:
        """
        Read and parse a typed JSON file.

        Args:
            file_name: Path of the input file

        Returns:
            Parsed top-level object

        Raises:
            ConfigError: If the name does not contain ".json" or the file cannot be read
            ParseError: If the content is not a JSON object
        """
        path_validation = self.error_handler.validate_config_path(file_name)
        if not path_validation.is_valid:
            raise ConfigError(
                "; ".join(self.error_handler.error_messages(path_validation)),
                context={"path": file_name}
            )
        for warning in path_validation.warnings:
            self.logger.warning(warning)

        try:
            raw = Path(file_name).read_bytes()
        except OSError as e:
            reason = e.strerror or str(e)
            raise ConfigError(f"open {file_name}: {reason.lower()}",
                              context={"path": file_name}) from e

        try:
            json_string = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ParseError(f"config file is not valid UTF-8: {e.reason}",
                             context={"path": file_name}) from e

        data = self.parse(json_string)
        self.logger.info(f"Parsed {file_name} ({len(raw)} bytes, {len(data)} top-level fields)")
        return data

    def parse(self, json_string: str) -> Dict[str, Any]:
        """
        Parse JSON text whose root must be an object.

        Args:
            json_string: JSON text to parse

        Returns:
            Parsed top-level object

        Raises:
            ParseError: If the text is not valid JSON or its root is not an object
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            first_error = validation_result.errors[0]
            messages = self.error_handler.error_messages(validation_result)
            raise ParseError(
                f"Invalid JSON input: {'; '.join(messages)}",
                error_type=first_error.type,
                context={"location": first_error.location}
            )
        for warning in validation_result.warnings:
            self.logger.debug(warning)

        return json.loads(json_string)
