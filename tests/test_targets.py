"""
Tests for per-workspace target image resolution.
"""

import pytest

from src.core.targets import WORKSPACE_PLACEHOLDER, resolve_targets


class TestResolveTargets:
    """Tests for resolve_targets."""

    def test_each_workspace_substituted(self):
        """Each name replaces the placeholder in its own reference."""
        assert dict(resolve_targets({"a", "b"}, "repo/{{workspace}}")) == {
            "a": "repo/a",
            "b": "repo/b",
        }

    def test_every_occurrence_replaced(self):
        """All placeholders in the template are substituted."""
        targets = resolve_targets(["src"], "reg/{{workspace}}/img:{{workspace}}")
        assert targets["src"] == "reg/src/img:src"

    def test_sorted_order(self):
        """Names are processed in sorted order regardless of input order."""
        assert list(resolve_targets(["zeta", "alpha", "mid"], "r/{{workspace}}")) == [
            "alpha",
            "mid",
            "zeta",
        ]

    def test_duplicates_collapse(self):
        """Repeated names yield one entry."""
        assert len(resolve_targets(["src", "src"], "r/{{workspace}}")) == 1

    def test_no_placeholder(self):
        """A template without the placeholder is used verbatim."""
        assert dict(resolve_targets(["a", "b"], "r/shared")) == {"a": "r/shared", "b": "r/shared"}

    def test_result_is_read_only(self):
        """The map cannot be changed after it is computed."""
        targets = resolve_targets(["a"], "r/{{workspace}}")
        with pytest.raises(TypeError):
            targets["b"] = "x"

    def test_placeholder_token(self):
        """The placeholder is the double-brace token."""
        assert WORKSPACE_PLACEHOLDER == "{{workspace}}"
