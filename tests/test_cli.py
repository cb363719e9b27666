"""
Tests for CLI commands.
"""

import json
from argparse import Namespace
from unittest.mock import patch

import pytest


def _split_args(pdf, output_dir, **overrides):
    values = {
        "pdf": str(pdf),
        "strategy": "auto",
        "max_pages": None,
        "max_tokens": None,
        "output_dir": str(output_dir),
        "json": False,
        "verbose": False,
    }
    values.update(overrides)
    return Namespace(**values)


class TestCLIInfo:
    """Tests for the info command."""

    def test_human_readable(self, bookmarked_pdf, capsys):
        from pdf_sectioner.cli import cmd_info

        assert cmd_info(Namespace(pdf=str(bookmarked_pdf), json=False, verbose=False)) == 0

        out = capsys.readouterr().out
        assert "PDF INFORMATION: manual.pdf" in out
        assert "Pages: 30" in out
        assert "Created: 2024-01-31" in out
        assert "Has bookmarks: Yes" in out

    def test_json(self, bookmarked_pdf, capsys):
        from pdf_sectioner.cli import cmd_info

        assert cmd_info(Namespace(pdf=str(bookmarked_pdf), json=True, verbose=False)) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["pages"] == 30
        assert data["author"] == "Docs Team"
        assert data["has_bookmarks"] is True

    def test_missing_file(self, tmp_path, capsys):
        from pdf_sectioner.cli import cmd_info

        args = Namespace(pdf=str(tmp_path / "missing.pdf"), json=False, verbose=False)
        assert cmd_info(args) == 2
        assert "Error: File not found" in capsys.readouterr().err

    def test_invalid_pdf(self, tmp_path):
        from pdf_sectioner.cli import cmd_info

        bogus = tmp_path / "bogus.pdf"
        bogus.write_text("not a pdf")
        assert cmd_info(Namespace(pdf=str(bogus), json=False, verbose=False)) == 3


class TestCLIAnalyze:
    """Tests for the analyze command."""

    def test_human_readable(self, bookmarked_pdf, capsys):
        from pdf_sectioner.cli import cmd_analyze

        assert cmd_analyze(Namespace(pdf=str(bookmarked_pdf), json=False, verbose=False)) == 0

        out = capsys.readouterr().out
        assert "Bookmark Structure: 3 top-level bookmarks" in out
        assert "Introduction (Page 1)" in out
        assert "Primary strategy: bookmarks" in out
        assert "Confidence: 95%" in out

    def test_json(self, blank_pdf, capsys):
        from pdf_sectioner.cli import cmd_analyze

        assert cmd_analyze(Namespace(pdf=str(blank_pdf), json=True, verbose=False)) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["metadata"]["pages"] == 25
        assert data["toc"]["detected"] is False
        assert data["recommendations"]["primary_strategy"] == "pages"


class TestCLISplit:
    """Tests for the split command."""

    def test_split_auto(self, bookmarked_pdf, output_dir, capsys):
        from pdf_sectioner.cli import cmd_split

        assert cmd_split(_split_args(bookmarked_pdf, output_dir)) == 0

        out = capsys.readouterr().out
        assert "Starting bookmark-based splitting (0/3)" in out
        assert "Created 3 files" in out
        assert len(list(output_dir.glob("*.pdf"))) == 3

    def test_split_json_has_no_progress_lines(self, blank_pdf, output_dir, capsys):
        from pdf_sectioner.cli import cmd_split

        args = _split_args(blank_pdf, output_dir, strategy="pages", max_pages=10, json=True)
        assert cmd_split(args) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["strategy_used"] == "pages"
        assert [f["page_range"] for f in data["output_files"]] == ["1-10", "11-20", "21-25"]

    def test_split_without_output_files(self, blank_pdf, output_dir, capsys):
        from pdf_sectioner.cli import cmd_split

        assert cmd_split(_split_args(blank_pdf, output_dir, strategy="toc")) == 4
        assert "Failed to split" in capsys.readouterr().out

    def test_partial_split(self, blank_pdf, output_dir):
        from pdf_sectioner.cli import cmd_split
        from pdf_sectioner.models import SplitFileInfo, SplitResult

        result = SplitResult(str(blank_pdf), "pages", 25)
        result.add_split_file(SplitFileInfo("a.pdf", 10, "1-10", file_size=1))
        result.add_error("Failed to split pages 11-20: boom")
        result.finalize()

        with patch("pdf_sectioner.segmentation.split_document", return_value=result):
            assert cmd_split(_split_args(blank_pdf, output_dir)) == 1

    def test_invalid_limit(self, blank_pdf, output_dir, capsys):
        from pdf_sectioner.cli import cmd_split

        assert cmd_split(_split_args(blank_pdf, output_dir, max_pages=0)) == 4
        assert "max_pages must be >= 1" in capsys.readouterr().err

    def test_output_directory_error(self, blank_pdf, tmp_path):
        from pdf_sectioner.cli import cmd_split

        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert cmd_split(_split_args(blank_pdf, blocker / "out", strategy="pages")) == 4


class TestMain:
    """Tests for argument parsing."""

    def test_no_command_prints_help(self, capsys):
        from pdf_sectioner.cli import main

        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys):
        from pdf_sectioner import __version__
        from pdf_sectioner.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_invalid_strategy_rejected_by_parser(self, blank_pdf):
        from pdf_sectioner.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["split", str(blank_pdf), "--strategy", "chapters"])
        assert exc_info.value.code == 2

    def test_split_dispatch(self, blank_pdf, output_dir):
        from pdf_sectioner.cli import main

        with patch("pdf_sectioner.cli.setup_logging") as mock_logging:
            code = main(
                ["split", str(blank_pdf), "-s", "pages", "--max-pages", "5", "-o", str(output_dir), "-v"]
            )

        assert code == 0
        mock_logging.assert_called_once_with(verbose=True)
        assert len(list(output_dir.glob("*.pdf"))) == 5

    @pytest.mark.parametrize(
        "error_name,code",
        [
            ("DocumentNotFoundError", 2),
            ("InvalidDocumentError", 3),
            ("ConfigurationError", 4),
            ("OutputDirectoryError", 4),
            ("SplitError", 4),
            ("SectionExportError", 1),
        ],
    )
    def test_exit_codes(self, error_name, code):
        from pdf_sectioner import errors
        from pdf_sectioner.cli import exit_code_for

        assert exit_code_for(getattr(errors, error_name)("x")) == code
        assert exit_code_for(RuntimeError("x")) == 1
