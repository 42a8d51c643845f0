"""
Structured Logging for prlink.
Outputs JSON-formatted logs for machine readability, plus GitHub workflow
annotations for warnings and errors when running inside Actions.
"""

import json
import os
import sys
import logging
from datetime import datetime, timezone

# Configure root logger
logger = logging.getLogger("prlink")
logger.setLevel(logging.INFO)
handler = logging.StreamHandler(sys.stdout)
logger.addHandler(handler)


class JsonFormatter(logging.Formatter):
    """JSON formatter that dynamically extracts all extra fields."""

    # Standard LogRecord attributes to exclude (these are Python logging internals)
    STANDARD_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
        'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
        'processName', 'relativeCreated', 'thread', 'threadName', 'exc_info',
        'exc_text', 'stack_info', 'asctime', 'taskName'
    }

    def format(self, record):
        # Base fields
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }

        # Dynamically extract all extra fields (exclude standard LogRecord attrs)
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS and not key.startswith('_'):
                try:
                    json.dumps(value)  # Test if JSON-serializable
                    log_record[key] = value
                except (TypeError, ValueError):
                    # Non-serializable (e.g., Exception objects) - convert to string
                    log_record[key] = str(value)

        return json.dumps(log_record)


class AnnotationFormatter(logging.Formatter):
    """Render a record as a GitHub workflow command (::error:: / ::warning::)."""

    COMMANDS = {
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record):
        command = self.COMMANDS.get(record.levelno, "notice")
        # Workflow commands are line based; newlines must be escaped
        message = (
            record.getMessage()
            .replace("%", "%25")
            .replace("\r", "%0D")
            .replace("\n", "%0A")
        )
        return f"::{command}::{message}"


handler.setFormatter(JsonFormatter())

annotation_handler = logging.StreamHandler(sys.stdout)
annotation_handler.setLevel(logging.WARNING)
annotation_handler.setFormatter(AnnotationFormatter())


def enable_annotations(enabled: bool | None = None) -> bool:
    """
    Attach or detach the workflow-annotation handler.

    Args:
        enabled: Explicit switch. None means "on when GITHUB_ACTIONS=true".

    Returns:
        Whether annotations are now enabled
    """
    if enabled is None:
        enabled = os.environ.get("GITHUB_ACTIONS", "").lower() == "true"
    if enabled and annotation_handler not in logger.handlers:
        logger.addHandler(annotation_handler)
    elif not enabled and annotation_handler in logger.handlers:
        logger.removeHandler(annotation_handler)
    return enabled


def get_logger(component: str = "SYSTEM"):
    return ActionLogger(component)


class ActionLogger:
    def __init__(self, component):
        self.component = component
        self.logger = logging.getLogger("prlink")

    def _extra(self, task_id, kwargs):
        extra = {"component": self.component}
        if task_id: extra["task_id"] = task_id
        extra.update(kwargs)
        return extra

    def info(self, msg, task_id=None, **kwargs):
        self.logger.info(msg, extra=self._extra(task_id, kwargs))

    def error(self, msg, task_id=None, **kwargs):
        self.logger.error(msg, extra=self._extra(task_id, kwargs))

    def warning(self, msg, task_id=None, **kwargs):
        self.logger.warning(msg, extra=self._extra(task_id, kwargs))
