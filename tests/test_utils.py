"""Tests for merge helpers."""

from bitx_config.utils import PROJECT_OVERRIDE_HEADER
from bitx_config.utils import deep_merge
from bitx_config.utils import merge_text


class TestMergeText:
    """Test merge_text function."""

    def test_both_absent(self):
        """Test merging when neither side has content."""
        assert merge_text(None, None) == ""

    def test_only_global(self):
        """Test global content is returned verbatim when project is absent."""
        assert merge_text("global content", None) == "global content"

    def test_only_project(self):
        """Test project content is returned verbatim when global is absent."""
        assert merge_text(None, "project content") == "project content"

    def test_both_present(self):
        """Test global is kept and project follows the override header."""
        merged = merge_text("global content", "project content")
        assert merged == "global content\n\n# Project-specific rules (override global):\n\nproject content"

    def test_header_literal(self):
        """Test the override header text is exact."""
        assert PROJECT_OVERRIDE_HEADER == "\n\n# Project-specific rules (override global):\n\n"

    def test_empty_strings_treated_as_absent(self):
        """Test empty strings contribute nothing to the merge."""
        assert merge_text("", "project") == "project"
        assert merge_text("global", "") == "global"
        assert merge_text("", "") == ""

    def test_content_is_verbatim(self):
        """Test whitespace and trailing newlines are not touched."""
        assert merge_text("  a\n", None) == "  a\n"
        assert merge_text("a\n", "b\n") == "a\n" + PROJECT_OVERRIDE_HEADER + "b\n"


class TestDeepMerge:
    """Test deep_merge function."""

    def test_empty_dicts(self):
        """Test merging empty dictionaries."""
        assert deep_merge({}, {}) == {}

    def test_overlay_wins(self):
        """Test overlay takes precedence for simple values."""
        base = {"model": "small", "temperature": 0}
        overlay = {"model": "large"}
        assert deep_merge(base, overlay) == {"model": "large", "temperature": 0}

    def test_nested_merge(self):
        """Test merging nested dictionaries."""
        base = {"modes": {"code": {"enabled": True, "slug": "code"}}}
        overlay = {"modes": {"code": {"enabled": False}, "ask": {"enabled": True}}}
        assert deep_merge(base, overlay) == {
            "modes": {"code": {"enabled": False, "slug": "code"}, "ask": {"enabled": True}}
        }

    def test_lists_replaced(self):
        """Test lists are replaced, not merged."""
        assert deep_merge({"allow": ["ls", "cat"]}, {"allow": ["git"]}) == {"allow": ["git"]}

    def test_scalar_replaces_mapping(self):
        """Test a non-dict overlay value replaces a nested mapping."""
        assert deep_merge({"a": {"b": 1}}, {"a": None}) == {"a": None}

    def test_inputs_not_modified(self):
        """Test that original dicts are not modified."""
        base = {"a": {"b": 1}}
        overlay = {"a": {"c": 2}}
        result = deep_merge(base, overlay)

        assert result == {"a": {"b": 1, "c": 2}}
        assert base == {"a": {"b": 1}}
        assert overlay == {"a": {"c": 2}}
