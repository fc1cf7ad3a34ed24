"""Logging setup: plain or JSON lines on stdout, with credentials scrubbed."""

import json
import logging
import re
import sys
from datetime import datetime, timezone

from spendwise.core.config import settings

# Gemini takes the key as ?key=..., OpenAI as a bearer token
_CREDENTIAL_PATTERNS = (
    re.compile(r"([?&]key=)[^&\s\"']+"),
    re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+"),
    re.compile(r"()\bsk-[A-Za-z0-9_\-]{8,}"),
)

# Third-party loggers that log full request URLs at INFO
_QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}

_GATEWAY_EXTRAS = ("provider", "model")


def redact_credentials(text: str) -> str:
    for pattern in _CREDENTIAL_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


class CredentialRedactingFilter(logging.Filter):
    """Rewrites each record's message with API keys masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        scrubbed = redact_credentials(message)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line; gateway records also carry provider and model."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _GATEWAY_EXTRAS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value
        if record.exc_info and record.exc_info[1]:
            log_data["exception"] = redact_credentials(self.formatException(record.exc_info))
        return json.dumps(log_data, ensure_ascii=False)


def _build_formatter() -> logging.Formatter:
    if settings.log_json:
        return JSONFormatter()
    return logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging() -> None:
    """Install a single stdout handler on the root logger."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter())
    handler.addFilter(CredentialRedactingFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    logging.getLogger("uvicorn.access").setLevel(level if settings.app_debug else logging.WARNING)
