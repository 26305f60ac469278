# src/treemirror/util/__init__.py: Shared helpers (errors, logging, paths, filesystem).
