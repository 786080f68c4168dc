"""Output consumer: serializes transformed documents as compact JSON."""

import json
import logging
import math
import re
from decimal import Decimal
from typing import Any, Optional, TextIO

import click

from ..types import JSONValue, OutputError


# Characters escaped inside strings so the output is safe to embed in HTML.
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")

# Magnitudes in this range print in plain decimal notation, others with an exponent.
_PLAIN_NOTATION_MIN = 1e-6
_PLAIN_NOTATION_LIMIT = 1e21


def replace_surrogates(text: str) -> str:
    """Replace unpaired UTF-16 surrogates, which UTF-8 cannot encode, with U+FFFD."""
    return _LONE_SURROGATE.sub("\ufffd", text)


def format_float(value: float) -> str:
    """
    Format a float with the fewest digits that read back to the same value.

    Plain decimal notation is used for magnitudes from 1e-6 up to 1e21, so
    integral floats print as integers. Other magnitudes use an exponent
    without zero padding, e.g. ``1e-7`` and ``1e+21``.

    Raises:
        OutputError: If value is NaN or infinite
    """
    if not math.isfinite(value):
        raise OutputError(f"json: unsupported value: {value}")

    text = repr(value)
    magnitude = abs(value)
    if magnitude != 0 and (magnitude < _PLAIN_NOTATION_MIN or magnitude >= _PLAIN_NOTATION_LIMIT):
        mantissa, exponent = text.split("e")
        if exponent.startswith("-0"):
            exponent = "-" + exponent[2:]
        return f"{mantissa}e{exponent}"

    text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


class OutputWriter:
    """
    Writer for transformed documents.

    Produces one line of compact JSON with sorted keys, and echoes it to
    standard output unless another stream is given.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the output writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def serialize(self, output: JSONValue) -> str:
        """
        Serialize a plain document to compact JSON text.

        Args:
            output: Transformed document

        Returns:
            JSON text without insignificant whitespace

        Raises:
            OutputError: If the document holds a value JSON cannot represent
        """
        try:
            text = self._encode(output)
        except RecursionError as e:
            raise OutputError("json: document is nested too deeply") from e

        for char, escape in _HTML_ESCAPES.items():
            text = text.replace(char, escape)
        return text

    def write(self, text: str, stream: Optional[TextIO] = None):
        """
        Write serialized JSON text as one line.

        Args:
            text: Output of serialize
            stream: Target stream (defaults to standard output)
        """
        click.echo(text, file=stream)
        self.logger.debug(f"Wrote {len(text.encode('utf-8'))} bytes of output")

    def _encode(self, value: Any) -> str:
        if isinstance(value, dict):
            fields = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise OutputError(f"json: unsupported type: map key {type(key).__name__}")
                fields[replace_surrogates(key)] = item
            members = (
                f"{self._encode(key)}:{self._encode(fields[key])}"
                for key in sorted(fields)
            )
            return "{" + ",".join(members) + "}"
        if isinstance(value, list):
            return "[" + ",".join(self._encode(item) for item in value) + "]"
        if isinstance(value, str):
            return json.dumps(replace_surrogates(value), ensure_ascii=False)
        if isinstance(value, float):
            return format_float(value)
        if value is None or isinstance(value, (bool, int)):
            return json.dumps(value)
        raise OutputError(f"json: unsupported type: {type(value).__name__}")
