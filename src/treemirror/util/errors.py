# src/treemirror/util/errors.py: Typed exceptions and exit codes.
# Every failure the mirroring engine can surface maps to one of these types,
# and each type carries the process exit code the CLI uses for it. Filesystem
# errors always name the path that triggered them.

class MirrorError(Exception):
    """Base exception for the application."""
    exit_code = 1

class ConfigError(MirrorError):
    """Configuration-related errors."""
    exit_code = 2

class MirrorIOError(MirrorError):
    """A filesystem entry could not be listed, stat'ed, read, written or removed."""
    exit_code = 3

    def __init__(self, message: str, path: str):
        super().__init__(f"{message}: {path}")
        self.path = path

class ManifestDecodeError(MirrorError):
    """A manifest record is malformed or truncated."""
    exit_code = 4

    def __init__(self, path: str, line: int, reason: str):
        super().__init__(f"Malformed manifest {path} at line {line}: {reason}")
        self.path = path
        self.line = line

class SymlinkCycleError(MirrorError):
    """A source directory was reached twice on the same recursion path."""
    exit_code = 5

    def __init__(self, path: str, canonical: str):
        super().__init__(
            f"Symlink cycle detected at {path} (resolves to {canonical})"
        )
        self.path = path
        self.canonical = canonical
