"""
Logging Configuration
JSON log formatter and YAML-driven logging setup.

Provides:
- JsonLogFormatter: one JSON object per record, tagged with the bound request id
- setup_logging: dictConfig from a YAML file with ${VAR} substitution
"""

import json
import logging
import logging.config
import os
import string
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import yaml

from service_request.config import config
from service_request.core.request_context import get_request_id

# Attributes every LogRecord has; anything else on a record came from `extra`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    """
    Render records as single-line JSON.

    Fields: time, level, logger, message, request_id (explicit `extra`
    value first, then the id bound by request_scope), any other `extra`
    fields, and exception when exc_info is set. Values json cannot encode
    are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_extra_fields(record))

        request_id = entry.pop("request_id", None) or get_request_id()
        if request_id:
            entry["request_id"] = request_id

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


def setup_logging(config_path: Optional[str] = None) -> None:
    """
    Configure logging for a process embedding service requests.

    Reads the YAML dictConfig at config_path (default LOG_CONFIG_PATH),
    filling ${VAR} placeholders from the environment with LOG_LEVEL
    defaulting to the configured level. A missing file falls back to
    logging.basicConfig.
    """
    config_path = config_path or config.LOG_CONFIG_PATH
    if not os.path.exists(config_path):
        logging.basicConfig(level=config.LOG_LEVEL)
        return

    with open(config_path, "r", encoding="utf-8") as f:
        template = string.Template(f.read())

    mapping = {"LOG_LEVEL": config.LOG_LEVEL, **os.environ}
    logging.config.dictConfig(yaml.safe_load(template.safe_substitute(mapping)))
