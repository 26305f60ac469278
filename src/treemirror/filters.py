# src/treemirror/filters.py: Filter predicates for the mirroring engine.
# A filter decides whether an entry in a source directory is mirrored. It is
# called with the entry's path relative to the directory being listed, so at
# every level of the recursion it sees a single path component. Exclude globs
# use gitignore syntax via pathspec.

import os
from typing import Callable, List, Optional
import pathspec

FilterPredicate = Callable[[str], bool]

def path_contains_hidden_file_or_folder(path: str) -> bool:
    """
    Check if any component of path starts with a dot ('.' and '..' excepted).
    Components are split on '/' and the platform separator only, so on POSIX a
    backslash is an ordinary name character.
    """
    for part in path.replace(os.sep, "/").split("/"):
        if part.startswith(".") and part not in (".", ".."):
            return True
    return False

def default_filter(path: str) -> bool:
    """Include everything except hidden files and folders."""
    return not path_contains_hidden_file_or_folder(path)

def include_all(path: str) -> bool:
    return True

def build_exclude_spec(exclude: List[str]) -> Optional[pathspec.PathSpec]:
    """Builds a pathspec object from exclude patterns, or None if there are none."""
    if not exclude:
        return None
    return pathspec.PathSpec.from_lines('gitwildmatch', exclude)

def build_filter(exclude: Optional[List[str]] = None, include_hidden: bool = False) -> FilterPredicate:
    """
    Build a filter from exclude globs. Hidden entries are skipped unless
    include_hidden is set. Directory-only patterns such as 'build/' match any
    entry with that name, since the filter is not told the entry's type.
    """
    spec = build_exclude_spec(exclude or [])

    def _filter(path: str) -> bool:
        if not include_hidden and path_contains_hidden_file_or_folder(path):
            return False
        if spec is not None and (spec.match_file(path) or spec.match_file(path + "/")):
            return False
        return True

    if spec is None:
        return include_all if include_hidden else default_filter
    return _filter
