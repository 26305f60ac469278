# src/treemirror/manifest.py: Per-directory record of mirrored files.
# Each destination directory visited by a mirror run holds one manifest file
# listing the files that run wrote directly into that directory. The next run
# uses it to delete those files before writing again. The record is JSON
# Lines (one JSON string per line) so it can be decoded one entry at a time
# and a run interrupted mid-way still leaves a readable prefix.

from __future__ import annotations

import json
import os
from typing import IO, Iterator, Optional

from .util.errors import ManifestDecodeError, MirrorIOError
from .util.fs import file_exists, remove_all
from .util.log import get_logger

logger = get_logger(__name__)

class FileManifest:
    """
    The manifest governing a single destination directory.

    Use it as a context manager: entering cleans up the previous run and opens
    a fresh record, exiting closes it whether or not the body raised.
    """
    def __init__(self, path: str):
        self.path = path
        self._handle: Optional[IO[str]] = None

    def __enter__(self) -> FileManifest:
        self.clean()
        self.create()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # The body's error is the one worth reporting.
        try:
            self.close()
        except MirrorIOError as close_error:
            logger.warning(f"Ignoring close failure after error: {close_error}")

    def _lines(self) -> Iterator[bytes]:
        try:
            f = open(self.path, "rb")
        except OSError as e:
            raise MirrorIOError(f"Failed to open manifest ({e.strerror})", self.path) from e

        with f:
            while True:
                try:
                    line = f.readline()
                except OSError as e:
                    raise MirrorIOError(f"Failed to read manifest ({e.strerror})", self.path) from e
                if not line:
                    return
                yield line

    def entries(self) -> Iterator[str]:
        """Decode the persisted record one entry at a time."""
        for line_no, line in enumerate(self._lines(), start=1):
            if not line.endswith(b"\n"):
                raise ManifestDecodeError(self.path, line_no, "truncated entry")
            try:
                entry = json.loads(line.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise ManifestDecodeError(self.path, line_no, f"invalid UTF-8 ({e.reason})") from e
            except json.JSONDecodeError as e:
                raise ManifestDecodeError(self.path, line_no, e.msg) from e
            if not isinstance(entry, str):
                raise ManifestDecodeError(
                    self.path, line_no, f"expected a path string, got {type(entry).__name__}"
                )
            yield entry

    def clean(self) -> None:
        """Remove every file recorded by a previous run, then the record itself."""
        if not file_exists(self.path):
            return

        removed = 0
        for entry in self.entries():
            remove_all(entry)
            logger.debug(f"Removed {entry}")
            removed += 1

        remove_all(self.path)
        logger.debug(f"Cleaned {removed} entries recorded in {self.path}")

    def create(self) -> None:
        """Open a new, empty record for writing."""
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
            self._handle = os.fdopen(fd, "w", encoding="utf-8")
        except OSError as e:
            raise MirrorIOError(f"Failed to create manifest ({e.strerror})", self.path) from e

    def add_file(self, path: str) -> None:
        """Append path to the record."""
        if self._handle is None:
            raise MirrorIOError("Manifest is not open for writing", self.path)
        try:
            self._handle.write(json.dumps(path) + "\n")
            self._handle.flush()
        except OSError as e:
            raise MirrorIOError(f"Failed to write manifest ({e.strerror})", self.path) from e

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        try:
            handle.close()
        except OSError as e:
            raise MirrorIOError(f"Failed to close manifest ({e.strerror})", self.path) from e
