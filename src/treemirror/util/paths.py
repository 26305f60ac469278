# src/treemirror/util/paths.py: Path canonicalization and resolution.
# Paths handed around by the mirroring engine are compared as strings, so this
# module normalizes them: absolute, relative components resolved, and always
# using '/' as the separator. It also locates the user's config directory.

import os
from pathlib import Path
from typing import List
import platformdirs

def get_xdg_config_home() -> Path:
    """Get the XDG_CONFIG_HOME path for the application."""
    return Path(platformdirs.user_config_dir("treemirror"))

def expand_path(path: str | Path) -> Path:
    """Expand environment variables and user home directory in a path."""
    return Path(os.path.expandvars(os.path.expanduser(str(path)))).resolve()

def join_path(*elements: str) -> str:
    """Join path elements, forcing '/' as the separator."""
    return Path(os.path.join(*elements)).as_posix() if elements else ""

def clean_path(path: str) -> str:
    """Lexically clean a path ('a/./b/../c' -> 'a/c') using '/' as the separator."""
    return Path(os.path.normpath(path)).as_posix()

def canonical_path(path: str, base_path: str) -> str:
    """
    Return the canonical version of path. A relative path is taken to be
    relative to base_path. The result is absolute with all '..' components
    resolved, which makes it safe to compare paths as strings.
    """
    if not os.path.isabs(path):
        path = join_path(base_path, path)
    return clean_path(os.path.abspath(path))

def canonical_paths(paths: List[str], base_path: str) -> List[str]:
    """Canonicalize each of paths relative to base_path."""
    return [canonical_path(path, base_path) for path in paths]

def get_path_relative_to(path: str, base_path: str) -> str:
    """Return the relative path to take to get from base_path to path."""
    path = path or "."
    base_path = base_path or "."
    rel_path = os.path.relpath(os.path.abspath(path), os.path.abspath(base_path))
    return Path(rel_path).as_posix()
