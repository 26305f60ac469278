# src/treemirror/mirror.py: Recursive directory mirroring engine.
# Copies the filtered contents of a source tree into a destination tree. Each
# destination directory gets its own manifest: on entry the files recorded by
# the previous run are deleted, and every file copied into that directory is
# recorded for the next run. Subdirectories are handled by a recursive call
# that opens its own manifest.
#
# Directory-vs-file classification follows symlinks. A symlink to a file is
# copied as a plain file holding the target's bytes. A symlink that leads back
# into a directory already on the recursion path raises SymlinkCycleError.
#
# Destination subtrees whose source directory disappeared entirely are never
# visited again and so are left as they are.

import os
from typing import FrozenSet, List, Optional

from .filters import FilterPredicate, default_filter
from .manifest import FileManifest
from .util.errors import MirrorIOError, SymlinkCycleError
from .util.fs import copy_file, is_dir, make_dir_with_same_permissions, make_dirs
from .util.log import get_logger, mirror_context
from .util.paths import get_path_relative_to

logger = get_logger(__name__)

DEFAULT_MANIFEST_FILE = ".treemirror-manifest"

def copy_folder_contents(source: str, destination: str, manifest_file: str = DEFAULT_MANIFEST_FILE) -> None:
    """
    Copy the files and folders within source into destination. Hidden files
    and folders (those starting with a dot) are skipped.
    """
    copy_folder_contents_with_filter(source, destination, manifest_file, default_filter)

def copy_folder_contents_with_filter(
    source: str,
    destination: str,
    manifest_file: str,
    filter: FilterPredicate,
) -> None:
    """
    Copy the files and folders within source into destination, passing each
    entry's path (relative to the directory being listed) through filter and
    copying it only if filter returns True.
    """
    _copy_level(str(source), str(destination), manifest_file, filter, frozenset())

def mirror(
    source: str,
    destination: str,
    manifest_file: str = DEFAULT_MANIFEST_FILE,
    filter: Optional[FilterPredicate] = None,
    name: Optional[str] = None,
) -> None:
    """Run a complete mirror of source into destination, logging start and finish."""
    token = mirror_context.set(name or str(destination))
    try:
        logger.info(f"Mirroring {source} -> {destination}")
        copy_folder_contents_with_filter(
            source, destination, manifest_file, filter or default_filter
        )
        logger.info(f"Finished mirroring {source} -> {destination}")
    finally:
        mirror_context.reset(token)

def _list_children(source: str) -> List[str]:
    # Every name, dotfiles included; the filter decides what is skipped.
    try:
        names = os.listdir(source)
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as e:
        raise MirrorIOError(f"Failed to list directory ({e.strerror})", source) from e
    return [os.path.join(source, name) for name in sorted(names)]

def _canonical_dir(source: str) -> str:
    try:
        return os.path.realpath(source, strict=True)
    except FileNotFoundError:
        return os.path.realpath(source)
    except OSError as e:
        raise MirrorIOError(f"Failed to resolve ({e.strerror})", source) from e

def _copy_level(
    source: str,
    destination: str,
    manifest_file: str,
    filter: FilterPredicate,
    ancestors: FrozenSet[str],
) -> None:
    canonical = _canonical_dir(source)
    if canonical in ancestors:
        raise SymlinkCycleError(source, canonical)
    ancestors = ancestors | {canonical}

    make_dirs(destination)
    logger.debug(f"Entering {source} -> {destination}")

    copied = 0
    with FileManifest(os.path.join(destination, manifest_file)) as manifest:
        for child in _list_children(source):
            rel_path = get_path_relative_to(child, source)
            if not filter(rel_path):
                continue

            dest = os.path.join(destination, rel_path)

            if is_dir(child):
                make_dir_with_same_permissions(child, dest)
                _copy_level(child, dest, manifest_file, filter, ancestors)
            else:
                make_dirs(os.path.dirname(dest), 0o700)
                copy_file(child, dest)
                manifest.add_file(dest)
                logger.debug(f"Copied {child} -> {dest}")
                copied += 1

    logger.debug(f"Wrote {copied} files into {destination}")
