# tests/unit/test_filters.py: Unit tests for filter predicates.

import os
import pytest

from treemirror.filters import (
    build_filter,
    default_filter,
    include_all,
    path_contains_hidden_file_or_folder,
)

@pytest.mark.parametrize("path, expected", [
    ("", False),
    ("foo", False),
    (".", False),
    ("..", False),
    ("../foo", False),
    ("./foo/bar", False),
    (".foo", True),
    ("foo/.bar", True),
    (".foo/bar", True),
    ("foo/bar/.baz", True),
    ("foo\\.bar", os.sep == "\\"),
])
def test_path_contains_hidden_file_or_folder(path, expected):
    """Tests hidden-path detection, including the '.' and '..' exceptions."""
    assert path_contains_hidden_file_or_folder(path) is expected

def test_default_filter_skips_hidden():
    assert default_filter("main.tf")
    assert not default_filter(".terraform")

def test_build_filter_without_patterns_is_default():
    """Tests that no patterns yields the plain hidden-file filter."""
    assert build_filter() is default_filter
    assert build_filter([], include_hidden=True) is include_all

def test_build_filter_excludes_patterns():
    """Tests that exclude globs are applied on top of the hidden-file rule."""
    pred = build_filter(["*.log", "build/"])

    assert pred("main.py")
    assert not pred("debug.log")
    assert not pred("build")
    assert not pred(".env")

def test_build_filter_include_hidden():
    """Tests that hidden entries pass when include_hidden is set."""
    pred = build_filter(["*.tmp"], include_hidden=True)

    assert pred(".env")
    assert not pred(".cache.tmp")
