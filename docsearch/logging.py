# docsearch/logging.py
from __future__ import annotations
import json, logging, os, sys, time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict

_DEFAULT_EXCLUDE = {
    "args","asctime","created","exc_info","exc_text","filename","funcName","levelname",
    "levelno","lineno","module","msecs","message","msg","name","pathname","process",
    "processName","relativeCreated","stack_info","thread","threadName","taskName"
}

# extras whose key contains one of these never reach the log stream
_REDACTED_KEYS = ("authorization", "api_key", "apikey", "token", "secret")

def _is_sensitive(key: str) -> bool:
    k = key.lower()
    return any(part in k for part in _REDACTED_KEYS)

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k, v in record.__dict__.items():
            if k in _DEFAULT_EXCLUDE:
                continue
            if _is_sensitive(k):
                base[k] = "***"
                continue
            try:
                json.dumps(v)
                base[k] = v
            except (TypeError, ValueError):
                base[k] = str(v)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)

def init_logging(level: str | None = None) -> logging.Logger:
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logging.basicConfig(handlers=[handler], level=getattr(logging, lvl, logging.INFO), force=True)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    # urllib3 logs full request lines at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logging.getLogger("docsearch")

def get_logger(name: str = "docsearch") -> logging.Logger:
    return logging.getLogger(name)

@contextmanager
def remote_call(operation: str, **fields: Any):
    """Time one document-service call and emit start/ok/error JSON logs.

    Errors are logged at WARNING without a traceback: a rejected call is an
    expected outcome that the caller reports, not a crash.
    """
    log = get_logger(f"remote.{operation}")
    t0 = time.perf_counter()
    log.debug("start", extra={"operation": operation, **fields})
    try:
        yield
    except Exception as e:
        dt = int((time.perf_counter() - t0) * 1000)
        log.warning("error", extra={"operation": operation, "duration_ms": dt, "error": str(e), **fields})
        raise
    else:
        dt = int((time.perf_counter() - t0) * 1000)
        log.info("ok", extra={"operation": operation, "duration_ms": dt, **fields})
