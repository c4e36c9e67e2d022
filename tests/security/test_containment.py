"""Tests for separator-aware containment."""

import os

import pytest

from docguard.security.containment import is_within

SEP = os.sep
ROOT = os.path.abspath(SEP)


def p(*parts: str) -> str:
    return os.path.join(ROOT, *parts)


class TestIsWithin:
    def test_equal_paths(self):
        assert is_within(p("ws", "base"), p("ws", "base"))

    def test_child(self):
        assert is_within(p("ws", "base", "docs", "a.md"), p("ws", "base"))

    @pytest.mark.parametrize("lookalike", ["base-other", "base2", "baseline", "base.bak"])
    def test_lookalike_prefix_is_outside(self, lookalike):
        assert not is_within(p("ws", lookalike, "file"), p("ws", "base"))

    def test_parent_is_outside(self):
        assert not is_within(p("ws"), p("ws", "base"))

    def test_sibling_is_outside(self):
        assert not is_within(p("etc", "passwd"), p("ws", "base"))

    def test_everything_is_within_root(self):
        assert is_within(p("anything", "at", "all"), ROOT)
        assert is_within(ROOT, ROOT)

    def test_root_is_not_within_a_subdirectory(self):
        assert not is_within(ROOT, p("ws"))

    def test_unicode_names(self):
        assert is_within(p("ws", "项目", "文档.md"), p("ws", "项目"))
        assert not is_within(p("ws", "项目二", "文档.md"), p("ws", "项目"))
