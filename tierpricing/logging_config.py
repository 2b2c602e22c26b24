import logging
import json
import os
import re
import sys
from datetime import datetime, timezone

SECRET_RE = re.compile(r"(authorization|admin[_-]?token|api[_-]?key|password|token)[\"':= ]+([^,\s]+)", re.I)

EXTRA_FIELDS = ("request_id", "path", "method", "status", "latency_ms", "tier", "plan_id")

def redact_secrets(msg):
    return SECRET_RE.sub(r"\1=***", msg)

class JsonLogFormatter(logging.Formatter):
    def format(self, record):
        log = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": redact_secrets(str(record.getMessage())),
        }
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log[field] = getattr(record, field)
        if record.exc_info:
            log["exc"] = self.formatException(record.exc_info)
        return json.dumps(log, default=str)

def setup_logging(level=None):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonLogFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO").upper())

def get_logger(name="tierpricing"):
    return logging.getLogger(name)
