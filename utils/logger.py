import logging
import json
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """
    Formatter to output logs in JSON format.
    Extra fields passed via `extra={"listing_id": ...}` are included.
    """
    _EXTRA_FIELDS = ("listing_id", "output_path")

    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "lineno": record.lineno,
        }

        for key in self._EXTRA_FIELDS:
            if hasattr(record, key):
                log_record[key] = str(getattr(record, key))

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """
    Configure the root logger to write to stderr (stdout carries CLI output).

    JSON formatting is used for container/production logs; plain text
    otherwise.
    """
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # PIL plugin discovery is chatty at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)

    return root
