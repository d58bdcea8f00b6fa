"""Unit tests for logger options.

Tests defaults, option function ordering and extractor accumulation.
"""

import dataclasses
import io
import logging

import pytest

from logx.options import (
    Options,
    default_options,
    new_options,
    with_add_source,
    with_context_extractor,
    with_level,
    with_output,
    with_output_file,
)
from logx.registry import register


class TestDefaults:
    """Tests for default option values."""

    def test_default_values(self):
        """Test defaults when no option functions are given."""
        opts = new_options()
        assert opts.level == logging.INFO
        assert opts.add_source is True
        assert opts.output is None
        assert dict(opts.context_extractors) == {}

    def test_default_options_matches_new_options(self):
        """Test default_options equals new_options without arguments."""
        assert default_options() == new_options()

    def test_options_are_frozen(self):
        """Test that options cannot be reassigned after construction."""
        opts = new_options()
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.level = logging.DEBUG


class TestOptionFunctions:
    """Tests for individual option functions."""

    def test_with_level_int(self):
        """Test setting the level with a logging constant."""
        assert new_options(with_level(logging.DEBUG)).level == logging.DEBUG

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warn", logging.WARNING),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
            ("bogus", logging.INFO),
            ("basic_format", logging.INFO),
            ("root", logging.INFO),
        ],
    )
    def test_with_level_name(self, name, expected):
        """Test level names, including the fallback for unknown names."""
        assert new_options(with_level(name)).level == expected

    def test_non_level_attribute_name_registers(self):
        """Test that names of non-level logging attributes fall back to INFO."""
        logger = register("odd-level", new_options(with_level("basic_format")))
        assert logger.enabled(logging.INFO) is True
        assert logger.enabled(logging.DEBUG) is False

    def test_with_add_source(self):
        """Test disabling source location."""
        assert new_options(with_add_source(False)).add_source is False

    def test_with_output(self):
        """Test setting the output sink."""
        sink = io.StringIO()
        assert new_options(with_output(sink)).output is sink

    def test_with_output_none_means_stdout(self):
        """Test that a None sink leaves output on standard output."""
        opts = new_options(with_output(io.StringIO()), with_output(None))
        assert opts.output is None

    def test_with_output_file(self, tmp_path):
        """Test that a log file path is stored without opening the file."""
        path = tmp_path / "app.log"
        opts = new_options(with_output(io.StringIO()), with_output_file(str(path)))
        assert opts.output_file == str(path)
        assert opts.output is None
        assert not path.exists()

    def test_with_output_replaces_output_file(self, tmp_path):
        """Test that a later sink replaces an earlier log file."""
        sink = io.StringIO()
        opts = new_options(with_output_file(str(tmp_path / "app.log")), with_output(sink))
        assert opts.output is sink
        assert opts.output_file is None

    def test_last_option_wins(self):
        """Test that later option functions override earlier ones."""
        first = io.StringIO()
        second = io.StringIO()
        opts = new_options(
            with_output(first),
            with_level(logging.ERROR),
            with_output(second),
            with_level(logging.DEBUG),
        )
        assert opts.output is second
        assert opts.level == logging.DEBUG


class TestContextExtractors:
    """Tests for with_context_extractor."""

    def test_distinct_keys_accumulate(self):
        """Test that extractors with different keys are all kept."""
        opts = new_options(
            with_context_extractor("request_id", lambda ctx: "r"),
            with_context_extractor("user_id", lambda ctx: "u"),
        )
        assert set(opts.context_extractors) == {"request_id", "user_id"}

    def test_same_key_overwrites(self):
        """Test that a repeated key replaces only that extractor."""
        opts = new_options(
            with_context_extractor("request_id", lambda ctx: "first"),
            with_context_extractor("user_id", lambda ctx: "u"),
            with_context_extractor("request_id", lambda ctx: "second"),
        )
        assert opts.context_extractors["request_id"](None) == "second"
        assert opts.context_extractors["user_id"](None) == "u"

    def test_extractor_stored_as_is(self):
        """Test that extractors are not validated or wrapped."""

        def broken(ctx):
            raise RuntimeError("not called here")

        opts = new_options(with_context_extractor("broken", broken))
        assert opts.context_extractors["broken"] is broken

    def test_option_function_does_not_mutate_input(self):
        """Test that applying an option returns new options."""
        base = Options()
        updated = with_context_extractor("request_id", lambda ctx: "")(base)
        assert dict(base.context_extractors) == {}
        assert "request_id" in updated.context_extractors
