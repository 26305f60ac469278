# src/treemirror/util/fs.py: Filesystem utilities.
# Thin wrappers over os/shutil used by the mirroring engine. Type checks follow
# symlinks. Every operation that can fail raises MirrorIOError naming the path
# involved, so callers never see a bare OSError.

import glob
import os
import re
import shutil
import stat

from .errors import MirrorIOError

def file_exists(path: str) -> bool:
    """Return True if something exists at path (following symlinks)."""
    return os.path.exists(path)

def is_dir(path: str) -> bool:
    """Return True if path points to a directory, following symlinks."""
    return os.path.isdir(path)

def is_file(path: str) -> bool:
    """Return True if path exists and is not a directory."""
    return os.path.exists(path) and not os.path.isdir(path)

def is_symlink(path: str) -> bool:
    """Return True if path itself is a symbolic link."""
    return os.path.islink(path)

def permission_bits(path: str) -> int:
    """Return the permission bits of path, following symlinks."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except OSError as e:
        raise MirrorIOError(f"Failed to stat ({e.strerror})", path) from e

def read_file_as_string(path: str) -> str:
    """Return the contents of the file at path as a string."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise MirrorIOError(f"Error reading file ({e.strerror})", path) from e

def copy_file(source: str, destination: str) -> None:
    """Copy a file from source to destination, keeping its permission bits."""
    try:
        with open(source, "rb") as f:
            contents = f.read()
    except OSError as e:
        raise MirrorIOError(f"Failed to read file ({e.strerror})", source) from e

    write_file_with_same_permissions(source, destination, contents)

def write_file_with_same_permissions(source: str, destination: str, contents: bytes) -> None:
    """
    Write contents to destination using the same permissions as the file at
    source. The mode is applied explicitly so the umask does not mask it.
    """
    mode = permission_bits(source)
    try:
        fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(contents)
        os.chmod(destination, mode)
    except OSError as e:
        raise MirrorIOError(f"Failed to write file ({e.strerror})", destination) from e

def make_dirs(path: str, mode: int = 0o777) -> None:
    """Create path and any missing parents; an existing directory is fine."""
    try:
        os.makedirs(path, mode=mode, exist_ok=True)
    except OSError as e:
        raise MirrorIOError(f"Failed to create directory ({e.strerror})", path) from e

def make_dir_with_same_permissions(source: str, destination: str) -> None:
    """Create destination with exactly the permission bits of the directory at source."""
    mode = permission_bits(source)
    make_dirs(destination, mode)
    try:
        os.chmod(destination, mode)
    except OSError as e:
        raise MirrorIOError(f"Failed to set permissions ({e.strerror})", destination) from e

def remove_all(path: str) -> None:
    """
    Remove path and anything it contains. A path that does not exist is not
    an error. Symlinks are removed, never followed.
    """
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise MirrorIOError(f"Failed to remove ({e.strerror})", path) from e

def grep(pattern: str | re.Pattern, glob_pattern: str) -> bool:
    """
    Return True if the regex can be found in any of the files matched by the
    glob. '**' matches zero or more directories.
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for match in glob.glob(glob_pattern, recursive=True):
        if is_dir(match):
            continue
        try:
            with open(match, "rb") as f:
                contents = f.read()
        except OSError as e:
            raise MirrorIOError(f"Failed to read file ({e.strerror})", match) from e
        text = contents.decode("utf-8", errors="replace")
        if regex.search(text):
            return True
    return False
