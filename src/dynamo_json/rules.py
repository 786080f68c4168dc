"""Per-tag transformation rules for DynamoDB typed JSON."""

import functools
import math
import re
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Union

from .types import (
    JSONObject,
    JSONValue,
    TransformationRule,
    expect_array,
    expect_object,
    expect_string,
)


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# The Gregorian calendar repeats every 400 years (146097 days).
_CYCLE_YEARS = 400
_CYCLE_SECONDS = 146097 * 86400

_RFC3339_PATTERN = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:[.,][0-9]+)?"
    r"(?:(?P<utc>Z)|(?P<sign>[+-])(?P<offset_hour>[0-9]{2}):(?P<offset_minute>[0-9]{2}))"
)

_INFINITY_PATTERN = re.compile(r"[+-]?inf(?:inity)?", re.IGNORECASE)

# Hexadecimal mantissa with a mandatory binary exponent, e.g. 0x1.8p3
_HEX_FLOAT_PATTERN = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)

_TRUE_VALUES = frozenset({"1", "t", "true"})


def rfc3339_to_epoch(value: str) -> int:
    """
    Convert an RFC3339 timestamp into Unix epoch seconds.

    Fractional seconds are accepted but discarded, they never change the
    epoch second a timestamp falls in. Year 0000 lies outside datetime's
    range, so it is moved one calendar cycle forward and the cycle's
    length is taken off the result again.

    Raises:
        ValueError: If value is not an RFC3339 timestamp
    """
    match = _RFC3339_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")

    if match.group("utc"):
        tz = timezone.utc
    else:
        offset_hour = int(match.group("offset_hour"))
        offset_minute = int(match.group("offset_minute"))
        if offset_hour >= 24 or offset_minute >= 60:
            raise ValueError(f"time zone offset out of range: {value!r}")
        offset = timedelta(hours=offset_hour, minutes=offset_minute)
        if match.group("sign") == "-":
            offset = -offset
        tz = timezone(offset)

    year = int(match.group("year"))
    cycles = 1 if year == 0 else 0

    # datetime enforces the calendar and clock ranges
    timestamp = datetime(
        year + cycles * _CYCLE_YEARS,
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
        int(match.group("minute")),
        int(match.group("second")),
        tzinfo=tz,
    )
    return (timestamp - _EPOCH) // timedelta(seconds=1) - cycles * _CYCLE_SECONDS


def format_string(value: Any) -> Union[str, int]:
    """Transform an ``S`` payload, converting RFC3339 timestamps to Unix epoch seconds."""
    text = expect_string("S", value)
    try:
        return rfc3339_to_epoch(text)
    except ValueError:
        return text


def format_num(value: Any) -> float:
    """Transform an ``N`` payload into a float, substituting 0.0 when it does not parse."""
    text = expect_string("N", value)
    # float() tolerates whitespace, digit separators and non-ASCII digits
    if not text.isascii() or text != text.strip() or "_" in text:
        return 0.0

    if _HEX_FLOAT_PATTERN.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError:
            return 0.0

    try:
        number = float(text)
    except ValueError:
        return 0.0
    if math.isnan(number) and text[0] in "+-":
        # only an unsigned nan literal is a number
        return 0.0
    if math.isinf(number) and not _INFINITY_PATTERN.fullmatch(text):
        # out of range for a 64-bit float
        return 0.0
    return number


def format_bool(value: Any) -> bool:
    """Transform a ``BOOL`` payload."""
    return expect_string("BOOL", value) in _TRUE_VALUES


def format_null(value: Any) -> None:
    """Transform a ``NULL`` payload. The payload content is ignored."""
    return None


def format_map(value: Any, dispatcher) -> JSONObject:
    """Transform an ``M`` payload by dispatching over its fields."""
    return dispatcher.transform(expect_object("M", value))


def format_list(value: Any, dispatcher) -> List[JSONValue]:
    """
    Transform an ``L`` payload.

    Each element that is an object is decoded as a tagged value and kept
    when it decodes to an object. An object element carrying no known tag
    is dispatched as a field map. Everything else is dropped.

    Args:
        value: The list payload
        dispatcher: Dispatcher used for nested objects

    Returns:
        New list of plain objects
    """
    items = expect_array("L", value)
    output = []

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            dispatcher.logger.debug(f"Dropping non-object list element at index {index}")
            continue

        matched, decoded = dispatcher.decode_tagged_value(item)
        if not matched:
            output.append(dispatcher.transform(item))
        elif isinstance(decoded, dict):
            output.append(decoded)
        else:
            dispatcher.logger.debug(f"Dropping list element at index {index}: decoded to a non-object")

    return output


def _scalar(rule: Callable[[Any], JSONValue]) -> TransformationRule:
    """Adapt a scalar rule to the (payload, dispatcher) rule signature."""

    @functools.wraps(rule)
    def apply(value: Any, dispatcher) -> JSONValue:
        return rule(value)

    return apply


TRANSFORM_RULES: Mapping[str, TransformationRule] = MappingProxyType({
    "S": _scalar(format_string),
    "N": _scalar(format_num),
    "BOOL": _scalar(format_bool),
    "NULL": _scalar(format_null),
    "M": format_map,
    "L": format_list,
})
