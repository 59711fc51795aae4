"""Utility for logging outgoing requests when POI_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

# Longer query texts are cut off in the log
MAX_LOGGED_PARAM_LENGTH = 2000


def should_log_requests() -> bool:
    """Check if request logging is enabled via POI_LOG_REQUESTS environment variable."""
    return os.getenv("POI_LOG_REQUESTS", "").lower() == "true"


def _format_params(params: dict[str, Any]) -> str:
    """Format query parameters one per line, truncating long values."""
    lines = []
    for key, value in sorted(params.items()):
        text = str(value)
        if len(text) > MAX_LOGGED_PARAM_LENGTH:
            text = text[:MAX_LOGGED_PARAM_LENGTH] + "...(truncated)"
        lines.append(f"  {key}={text}")
    return "\n".join(lines)


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers from logging."""
    sensitive_keys = {"authorization", "cookie", "x-api-key"}
    return {k: "***REDACTED***" if k.lower() in sensitive_keys else v for k, v in headers.items()}


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> None:
    """Log request details if POI_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL without query string.
        params: Query parameters (optional).
        headers: Request headers (optional, sensitive headers are redacted).
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"Params:\n{_format_params(params)}")

    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
