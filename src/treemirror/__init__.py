# src/treemirror/__init__.py: Public API.
# Mirror a filtered source tree into a destination tree, removing the files
# recorded by the previous run's per-directory manifests first.

from .filters import build_filter, default_filter, path_contains_hidden_file_or_folder
from .manifest import FileManifest
from .mirror import (
    DEFAULT_MANIFEST_FILE,
    copy_folder_contents,
    copy_folder_contents_with_filter,
    mirror,
)
from .util.errors import (
    ConfigError,
    ManifestDecodeError,
    MirrorError,
    MirrorIOError,
    SymlinkCycleError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_MANIFEST_FILE",
    "ConfigError",
    "FileManifest",
    "ManifestDecodeError",
    "MirrorError",
    "MirrorIOError",
    "SymlinkCycleError",
    "build_filter",
    "copy_folder_contents",
    "copy_folder_contents_with_filter",
    "default_filter",
    "mirror",
    "path_contains_hidden_file_or_folder",
]
