"""Tests for the command-line interface."""

import json
from pathlib import Path

from click.testing import CliRunner

from dynamo_json import __version__
from dynamo_json.cli import main


class TestCLI:
    """Tests for the dynamo-json command."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def _write(self, name, data):
        Path(name).write_text(json.dumps(data), encoding="utf-8")

    def test_default_config(self):
        """Test schema.json is read when --config is omitted."""
        with self.runner.isolated_filesystem():
            self._write("schema.json", {"a": {"S": "x"}, "n": {"N": "3"}})

            result = self.runner.invoke(main, [])

        assert result.exit_code == 0
        assert result.stdout == '{"a":"x","n":3}\n'

    def test_config_option(self):
        """Test --config names the input file."""
        with self.runner.isolated_filesystem():
            self._write("items.json", {"a": {"M": {"b": {"S": "x"}}}})

            result = self.runner.invoke(main, ["--config", "items.json"])

        assert result.exit_code == 0
        assert result.stdout == '{"a":{"b":"x"}}\n'

    def test_config_substring_name(self):
        """Test a file whose name only contains .json is accepted."""
        with self.runner.isolated_filesystem():
            self._write("my.jsonfile", {"a": {"BOOL": "1"}})

            result = self.runner.invoke(main, ["--config", "my.jsonfile"])

        assert result.exit_code == 0
        assert result.stdout == '{"a":true}\n'

    def test_non_json_name(self):
        """Test a non-JSON file name prints an error line and exits 0."""
        with self.runner.isolated_filesystem():
            self._write("schema.txt", {"a": {"S": "x"}})

            result = self.runner.invoke(main, ["--config", "schema.txt"])

        assert result.exit_code == 0
        assert result.stdout == "error : config file is not a JSON file\n"

    def test_missing_default_config(self):
        """Test a missing schema.json is reported on stdout."""
        with self.runner.isolated_filesystem():
            result = self.runner.invoke(main, [])

        assert result.exit_code == 0
        assert result.stdout == "error : open schema.json: no such file or directory\n"

    def test_invalid_json(self):
        """Test invalid file content is reported."""
        with self.runner.isolated_filesystem():
            Path("schema.json").write_text("{oops", encoding="utf-8")

            result = self.runner.invoke(main, [])

        assert result.exit_code == 0
        assert result.stdout.startswith("error : Invalid JSON input")

    def test_malformed_schema(self):
        """Test a payload shape mismatch produces no partial output."""
        with self.runner.isolated_filesystem():
            self._write("schema.json", {"ok": {"S": "x"}, "bad": {"L": "nope"}})

            result = self.runner.invoke(main, [])

        assert result.exit_code == 0
        assert result.stdout == "error : malformed schema: tag 'L' expects array payload, got string\n"

    def test_verbose(self):
        """Test --verbose keeps stdout limited to the JSON output."""
        with self.runner.isolated_filesystem():
            self._write("schema.json", {"a": {"S": "x"}})

            result = self.runner.invoke(main, ["--verbose"])

        assert result.exit_code == 0
        assert result.stdout == '{"a":"x"}\n'

    def test_version(self):
        """Test --version prints the package version."""
        result = self.runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_lone_surrogate_escape(self):
        """Test an unpaired surrogate escape is written as U+FFFD."""
        with self.runner.isolated_filesystem():
            Path("schema.json").write_text('{"a": {"S": "\\ud800"}}', encoding="utf-8")

            result = self.runner.invoke(main, [])

        assert result.exception is None
        assert result.exit_code == 0
        assert result.stdout == '{"a":"\ufffd"}\n'

    def test_deeply_nested_document(self):
        """Test nesting beyond the recursion limit prints an error line."""
        depth = 5000
        with self.runner.isolated_filesystem():
            Path("schema.json").write_text(
                '{"a": {"M": ' * depth + "{}" + "}}" * depth, encoding="utf-8"
            )

            result = self.runner.invoke(main, [])

        assert result.exception is None
        assert result.exit_code == 0
        assert result.stdout.startswith("error : ")
        assert "nested too deeply" in result.stdout
