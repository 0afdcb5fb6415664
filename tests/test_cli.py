"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from mdbook_external_links import __version__
from mdbook_external_links.cli.main import app

runner = CliRunner()


class TestSupports:
    def test_html_supported(self):
        result = runner.invoke(app, ["supports", "html"])
        assert result.exit_code == 0

    def test_any_renderer_supported(self):
        result = runner.invoke(app, ["supports", "not-a-real-renderer"])
        assert result.exit_code == 0

    def test_renderer_required(self):
        result = runner.invoke(app, ["supports"])
        assert result.exit_code == 2


class TestPreprocess:
    def test_rewrites_book(self, context_data, book_data):
        payload = json.dumps([context_data, book_data])
        result = runner.invoke(app, [], input=payload)

        assert result.exit_code == 0
        book = json.loads(result.stdout)
        intro = book["sections"][0]["Chapter"]
        details = intro["sub_items"][0]["Chapter"]
        assert 'target="_blank"' in intro["content"]
        assert "[intro](./intro.md)" in details["content"]
        assert book["sections"][1] == "Separator"

    def test_invalid_input_fails(self):
        result = runner.invoke(app, [], input="definitely not json")
        assert result.exit_code == 1
        assert "Unable to parse the input" in result.output

    def test_invalid_log_level(self, context_data, book_data):
        payload = json.dumps([context_data, book_data])
        result = runner.invoke(app, ["--log-level", "LOUD"], input=payload)
        assert result.exit_code == 2

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
