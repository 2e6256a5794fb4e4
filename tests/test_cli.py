"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from portabletext.cli import app, sample_document
from portabletext.codec import decode
from portabletext.validation import ValidationOptions, validate

runner = CliRunner()


class TestCheck:
    """The check command."""

    def test_valid_file(self, article_file):
        """A clean document exits 0."""
        result = runner.invoke(app, ["check", str(article_file)])

        assert result.exit_code == 0
        assert "OK 5 nodes, no findings" in result.output

    def test_findings_exit_1(self, tmp_path):
        """Findings are printed and the exit code is 1."""
        path = tmp_path / "bad.json"
        path.write_text('[{"_type":"block","children":[{"_type":"span"}]}]', encoding="utf-8")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 1
        assert "[0].children[0]: span missing text" in result.output
        assert "1 finding(s)" in result.output

    def test_require_keys_flag(self, tmp_path):
        """--require-keys enables the key check."""
        path = tmp_path / "nokey.json"
        path.write_text('[{"_type":"divider"}]', encoding="utf-8")

        assert runner.invoke(app, ["check", str(path)]).exit_code == 0
        result = runner.invoke(app, ["check", "--require-keys", str(path)])
        assert result.exit_code == 1
        assert "missing _key" in result.output

    def test_decode_error_exit_2(self, tmp_path):
        """A malformed document exits 2."""
        path = tmp_path / "broken.json"
        path.write_text('{"_type":"block"}', encoding="utf-8")

        result = runner.invoke(app, ["check", str(path)])

        assert result.exit_code == 2
        assert "expected JSON array" in result.output

    def test_missing_file_exit_2(self, tmp_path):
        """An unreadable path exits 2."""
        result = runner.invoke(app, ["check", str(tmp_path / "absent.json")])

        assert result.exit_code == 2

    def test_stdin(self, article_json):
        """"-" reads the document from stdin."""
        result = runner.invoke(app, ["check", "-"], input=article_json)

        assert result.exit_code == 0
        assert "5 nodes" in result.output


class TestOutputCommands:
    """Commands that print document content."""

    def test_fmt_is_lossless(self, article_file, article_json):
        """fmt re-encodes without losing anything."""
        result = runner.invoke(app, ["fmt", str(article_file)])

        assert result.exit_code == 0
        assert json.loads(result.output) == json.loads(article_json)

    def test_fmt_indent(self, article_file):
        """--indent spreads the output over lines."""
        result = runner.invoke(app, ["fmt", "--indent", "2", str(article_file)])

        assert result.exit_code == 0
        assert result.output.startswith("[\n  {")

    def test_text(self, article_file):
        """text prints the outline."""
        result = runner.invoke(app, ["text", str(article_file)])

        assert result.exit_code == 0
        assert "# Guide" in result.output
        assert "[Custom node 2: image]" in result.output
        assert "• pip install" in result.output

    def test_links(self, article_file):
        """links prints a table of annotations."""
        result = runner.invoke(app, ["links", str(article_file)])

        assert result.exit_code == 0
        assert "Links (1)" in result.output
        assert "lnk" in result.output

    def test_no_links(self):
        """A document without links says so."""
        result = runner.invoke(app, ["links", "-"], input="[]")

        assert result.exit_code == 0
        assert "No links found" in result.output

    def test_toc(self, article_file):
        """toc indents by heading level."""
        result = runner.invoke(app, ["toc", str(article_file)])

        assert result.exit_code == 0
        assert result.output.splitlines() == ["Guide", "  Install"]

    def test_headings_downgrade(self, article_file):
        """headings --downgrade shifts every heading down."""
        result = runner.invoke(app, ["headings", "--downgrade", str(article_file)])

        assert result.exit_code == 0
        styles = [node.style for node in decode(result.output)]
        assert styles == ["h2", "normal", None, "h3", None]

    def test_sample(self):
        """sample prints a decodable document."""
        result = runner.invoke(app, ["sample"])

        assert result.exit_code == 0
        assert len(decode(result.output)) == 7


class TestSampleDocument:
    """The built-in example document."""

    def test_valid(self):
        """The sample passes the default checks with empty text disallowed."""
        options = ValidationOptions(check_mark_def_refs=False, allow_empty_text=False)
        assert validate(sample_document(), options) == []

    def test_contents(self):
        """The sample mixes headings, lists, links and a custom node."""
        doc = sample_document()

        assert doc[0].style == "h1"
        assert doc[3].list_item == "bullet"
        assert doc[5].mark_defs[0].raw["href"] == "https://example.com"
        assert doc[6].type == "callout"
