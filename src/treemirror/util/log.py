# src/treemirror/util/log.py: Structured JSON logger.
# All treemirror modules log through the 'treemirror' package logger, which
# emits one JSON object per record. A context variable carries the name of the
# mirror currently running so every record from a run can be correlated.

import logging
import json
import contextvars

PACKAGE_LOGGER = "treemirror"

mirror_context = contextvars.ContextVar('mirror_context', default=None)

class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "mirror": mirror_context.get(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)

def _package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger

def get_logger(name):
    _package_logger()
    return logging.getLogger(name)

def set_level(level):
    """Set the level of the package logger, e.g. 'DEBUG' or logging.INFO."""
    if isinstance(level, str):
        level = level.upper()
    _package_logger().setLevel(level)
