"""Main DynamoDB JSON transformer implementation."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Mapping, Optional

from .dispatcher import Dispatcher
from .error_handler import ErrorHandler
from .io.output_writer import OutputWriter
from .parser import SchemaParser
from .profiler import PerformanceProfiler
from .types import (
    ErrorType,
    JSONObject,
    ParseError,
    TransformationRule,
    TransformError,
    TransformResult,
    type_name,
)


class DynamoJSONTransformer:
    """
    Converts DynamoDB typed JSON documents into plain JSON.

    Wires together the input parser, the dispatcher with its rule table,
    the output writer and an optional profiler.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 rules: Optional[Mapping[str, TransformationRule]] = None,
                 enable_profiling: bool = True):
        """
        Initialize the transformer.

        Args:
            logger: Optional logger instance shared by all components
            rules: Optional mapping of type tag to rule (defaults to the built-in rules)
            enable_profiling: Collect timing and memory metrics for each run
        """
        self.logger = logger or logging.getLogger(__name__)

        self.error_handler = ErrorHandler(self.logger)
        self.parser = SchemaParser(self.error_handler, self.logger)
        self.dispatcher = Dispatcher(rules, self.logger)
        self.writer = OutputWriter(self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

    def transform(self, document: Any) -> JSONObject:
        """
        Transform an already parsed typed document.

        Args:
            document: Parsed top-level object

        Returns:
            Plain object

        Raises:
            ParseError: If document is not an object or nests too deeply
            MalformedSchemaError: If a tag carries a payload of the wrong shape
        """
        if not isinstance(document, dict):
            raise ParseError(
                f"Root element must be a JSON object, got {type_name(document)}",
                error_type=ErrorType.STRUCTURE
            )
        try:
            return self.dispatcher.transform(document)
        except RecursionError as e:
            raise ParseError(
                "document is nested too deeply",
                error_type=ErrorType.STRUCTURE
            ) from e

    def transform_string(self, json_string: str) -> str:
        """
        Parse, transform and serialize typed JSON text.

        Args:
            json_string: Typed JSON text

        Returns:
            Compact plain JSON text

        Raises:
            TransformError: If any stage fails
        """
        with self._profile("transform_string") as profiler:
            if profiler:
                profiler.record_input(len(json_string.encode("utf-8")))
            output = self.transform(self.parser.parse(json_string))
            result = self.writer.serialize(output)
            if profiler:
                profiler.record_output(len(result.encode("utf-8")))
        return result

    def transform_file(self, file_name: str) -> TransformResult:
        """
        Read, transform and serialize a typed JSON file.

        Errors are reported in the result rather than raised.

        Args:
            file_name: Path of the input file

        Returns:
            TransformResult with the output text or the error messages
        """
        self.logger.info(f"Starting transformation of {file_name}")

        try:
            with self._profile("transform_file") as profiler:
                document = self.parser.parse_file(file_name)
                if profiler:
                    profiler.record_input(Path(file_name).stat().st_size)
                    profiler.sample_performance()

                output = self.transform(document)
                if profiler:
                    profiler.sample_performance()

                json_string = self.writer.serialize(output)
                if profiler:
                    profiler.record_output(len(json_string.encode("utf-8")))
        except TransformError as e:
            response = self.error_handler.handle_transform_error(e)
            return TransformResult(
                success=False,
                json_string="",
                errors=[response.message],
                metrics=self._last_metrics()
            )

        self.logger.info(f"Transformed {file_name} into {len(output)} top-level fields")
        return TransformResult(
            success=True,
            json_string=json_string,
            metrics=self._last_metrics()
        )

    @contextmanager
    def _profile(self, operation_name: str):
        if self.profiler is None:
            yield None
            return
        with self.profiler.profile_operation(operation_name) as profiler:
            yield profiler

    def _last_metrics(self):
        return self.profiler.last_metrics if self.profiler else None
