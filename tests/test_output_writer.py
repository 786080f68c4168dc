"""Tests for the output writer."""

import io
import math

import pytest

from dynamo_json.io import OutputWriter
from dynamo_json.types import ErrorType, OutputError


class TestOutputWriter:
    """Tests for OutputWriter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.writer = OutputWriter()

    def test_serialize_compact_sorted(self):
        """Test output has no whitespace and sorted keys."""
        output = {"b": "x", "a": {"d": [1.5, None], "c": True}}

        assert self.writer.serialize(output) == '{"a":{"c":true,"d":[1.5,null]},"b":"x"}'

    def test_serialize_integral_floats(self):
        """Test integral floats print without a fractional part."""
        output = {"n": 3.0, "neg": -2.0, "zero": 0.0, "epoch": 946684800}

        assert self.writer.serialize(output) == '{"epoch":946684800,"n":3,"neg":-2,"zero":0}'

    def test_serialize_large_floats_keep_exponent(self):
        """Test floats at or beyond 1e21 keep exponent notation."""
        assert self.writer.serialize({"n": 1e21}) == '{"n":1e+21}'

    def test_serialize_small_floats_plain_notation(self):
        """Test magnitudes down to 1e-6 print in plain decimal notation."""
        output = {"a": 1.5e-05, "b": 1e-06, "c": -0.00012}

        assert self.writer.serialize(output) == '{"a":0.000015,"b":0.000001,"c":-0.00012}'

    def test_serialize_tiny_floats_short_exponent(self):
        """Test magnitudes below 1e-6 use an exponent without zero padding."""
        output = {"a": 1e-07, "b": 2.5e-10, "c": -1e-100}

        assert self.writer.serialize(output) == '{"a":1e-7,"b":2.5e-10,"c":-1e-100}'

    def test_serialize_large_integral_floats_shortest_digits(self):
        """Test integral floats beyond 2**53 print their shortest digits."""
        output = {"a": float(2 ** 60), "b": 1e20}

        assert self.writer.serialize(output) == (
            '{"a":1152921504606847000,"b":100000000000000000000}'
        )

    def test_serialize_negative_zero(self):
        """Test negative zero keeps its sign."""
        assert self.writer.serialize({"n": -0.0}) == '{"n":-0}'

    def test_serialize_lone_surrogates_replaced(self):
        """Test unpaired surrogates in keys and values become U+FFFD."""
        output = {"k\ud800": "x\udfffy", "ok": "\U0001f600"}

        result = self.writer.serialize(output)

        assert result == '{"k\ufffd":"x\ufffdy","ok":"\U0001f600"}'
        assert result.encode("utf-8")

    def test_serialize_deep_nesting(self):
        """Test a document nested past the recursion limit is an output error."""
        output = {}
        for _ in range(5000):
            output = {"a": output}

        with pytest.raises(OutputError, match="nested too deeply"):
            self.writer.serialize(output)

    def test_serialize_fractional_floats(self):
        """Test non-integral floats keep their shortest representation."""
        assert self.writer.serialize({"n": 0.1, "m": -3.25}) == '{"m":-3.25,"n":0.1}'

    def test_serialize_html_characters_escaped(self):
        """Test <, > and & are escaped inside strings."""
        result = self.writer.serialize({"a<b": "x & y > z"})

        assert result == '{"a\\u003cb":"x \\u0026 y \\u003e z"}'

    def test_serialize_line_separators_escaped(self):
        """Test U+2028 and U+2029 are escaped."""
        result = self.writer.serialize({"a": "x\u2028y\u2029"})

        assert result == '{"a":"x\\u2028y\\u2029"}'

    def test_serialize_keeps_unicode(self):
        """Test non-ASCII characters are written as UTF-8."""
        assert self.writer.serialize({"名前": "Zoë"}) == '{"名前":"Zoë"}'

    def test_serialize_empty(self):
        """Test an empty document."""
        assert self.writer.serialize({}) == "{}"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_serialize_non_finite(self, value):
        """Test numbers without a JSON representation are rejected."""
        with pytest.raises(OutputError, match="unsupported value") as exc_info:
            self.writer.serialize({"a": [{"b": value}]})

        assert exc_info.value.error_type == ErrorType.OUTPUT

    def test_serialize_non_serializable(self):
        """Test values that are not JSON types are rejected."""
        with pytest.raises(OutputError):
            self.writer.serialize({"a": object()})

    def test_serialize_does_not_mutate(self):
        """Test integral float normalization leaves the document untouched."""
        output = {"n": 3.0}

        self.writer.serialize(output)

        assert isinstance(output["n"], float)

    def test_write_to_stream(self):
        """Test writing one line to a stream."""
        stream = io.StringIO()

        self.writer.write('{"a":"x"}', stream=stream)

        assert stream.getvalue() == '{"a":"x"}\n'

    def test_write_to_stdout(self, capsys):
        """Test writing defaults to standard output."""
        self.writer.write(self.writer.serialize({"n": 1.0}))

        assert capsys.readouterr().out == '{"n":1}\n'
