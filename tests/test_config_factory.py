"""
Tests for config_factory module.
"""

import io

import pytest


class TestCreateSplitOptions:
    """Tests for create_split_options."""

    def test_defaults(self):
        from pdf_sectioner.config_factory import create_split_options

        options = create_split_options()
        assert options.strategy == "auto"
        assert options.max_pages is None
        assert options.max_tokens is None
        assert options.output_dir == "./splits"
        assert options.preserve_metadata is True

    def test_strategy_is_normalized(self):
        from pdf_sectioner.config_factory import create_split_options

        assert create_split_options(strategy=" TOC ").strategy == "toc"

    def test_invalid_strategy(self):
        from pdf_sectioner.config_factory import create_split_options
        from pdf_sectioner.errors import ConfigurationError

        with pytest.raises(ConfigurationError, match="Invalid strategy: headers"):
            create_split_options(strategy="headers")

    def test_numeric_strings_accepted(self):
        from pdf_sectioner.config_factory import create_split_options

        options = create_split_options(max_pages="25", max_tokens="9000")
        assert options.max_pages == 25
        assert options.max_tokens == 9000

    @pytest.mark.parametrize(
        "kwargs",
        [{"max_pages": 0}, {"max_pages": -3}, {"max_tokens": 0}, {"max_pages": "many"}],
    )
    def test_invalid_limits(self, kwargs):
        from pdf_sectioner.config_factory import create_split_options
        from pdf_sectioner.errors import ConfigurationError

        with pytest.raises(ConfigurationError):
            create_split_options(**kwargs)

    def test_callback_passed_through(self):
        from pdf_sectioner.config_factory import create_split_options

        def callback(progress):
            pass

        assert create_split_options(progress_callback=callback).progress_callback is callback


class TestProgressPrinter:
    """Tests for create_progress_printer."""

    def test_prints_counts(self):
        from pdf_sectioner.config_factory import create_progress_printer

        stream = io.StringIO()
        printer = create_progress_printer(stream)
        printer({"message": "Processed section: Intro", "current": 1, "total": 3})
        printer({"message": "Done", "current": None, "total": None})

        assert stream.getvalue().splitlines() == ["Processed section: Intro (1/3)", "Done"]
