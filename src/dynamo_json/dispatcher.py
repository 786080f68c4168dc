"""Recursive dispatcher that routes tagged values to their transformation rules."""

import logging
from typing import Any, Mapping, Optional, Tuple

from .rules import TRANSFORM_RULES
from .types import JSONObject, JSONValue, TransformationRule


def sanitize_key(key: str) -> str:
    """Trim leading and trailing whitespace from a key."""
    return key.strip()


class Dispatcher:
    """
    Dispatcher for DynamoDB typed JSON objects.

    Walks the entries of an object, resolves the rule for each entry's
    type tag and stores the rule's result under the entry's own key.
    Entries that are not tagged values are omitted from the output, while
    a payload of the wrong shape for a known tag raises
    MalformedSchemaError and aborts the whole transformation.
    """

    def __init__(self, rules: Optional[Mapping[str, TransformationRule]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the dispatcher.

        Args:
            rules: Mapping of type tag to rule (defaults to TRANSFORM_RULES)
            logger: Optional logger instance
        """
        self.rules = TRANSFORM_RULES if rules is None else rules
        self.logger = logger or logging.getLogger(__name__)

    def transform(self, input_map: Mapping[str, Any]) -> JSONObject:
        """
        Transform an object of tagged values into a plain object.

        Args:
            input_map: Object mapping field names to tagged values

        Returns:
            New plain object

        Raises:
            MalformedSchemaError: If a known tag carries a payload of the wrong shape
        """
        output = {}

        for key, value in input_map.items():
            key = sanitize_key(key)
            if not key:
                self.logger.debug("Dropping entry with an empty key")
                continue

            out_map = {}
            if isinstance(value, dict):
                matched, result = self.decode_tagged_value(value)
                if matched:
                    out_map[key] = result

            if out_map:
                output.update(out_map)
            else:
                self.logger.debug(f"Dropping field '{key}': not a recognized tagged value")

        return output

    def decode_tagged_value(self, tagged: Mapping[str, Any]) -> Tuple[bool, JSONValue]:
        """
        Apply the rule for the type tag of a tagged value.

        When several recognized tags share one object, each rule runs and
        the last one in iteration order wins.

        Args:
            tagged: Object of the form {tag: payload}

        Returns:
            Tuple of (matched, result); result is None when no tag matched
        """
        matched = False
        result = None

        for tag, payload in tagged.items():
            rule = self.rules.get(sanitize_key(tag))
            if rule is not None:
                result = rule(payload, self)
                matched = True

        return matched, result


_default_dispatcher = Dispatcher()


def transform_json(input_map: Mapping[str, Any]) -> JSONObject:
    """Transform an object of tagged values with the default rule table."""
    return _default_dispatcher.transform(input_map)
