# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Logging utilities for passhash.

Provides specialized logging functions for:
- Application logs (operational, outside request handling)

Assumptions:
- All logs use structlog for structured output
- Plaintext secrets and hash strings are never logged
"""
from typing import Any, Dict

from passhash.logging_config import get_logger

SENSITIVE_FIELDS = {"raw", "hash", "password", "secret", "token"}

app_logger = get_logger("passhash.application")


def log_application_event(
    event: str,
    **kwargs: Any
) -> None:
    """Log an application operational event.
    
    Args:
        event: Event name (e.g., "server_starting")
        **kwargs: Additional context, sanitized before logging
    """
    app_logger.info(event, **_sanitize_data(kwargs))


def _sanitize_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Redact sensitive fields from a log payload.
    
    Args:
        data: Dictionary that may contain sensitive data
        
    Returns:
        Dict: Copy with sensitive keys replaced by "[REDACTED]"
    """
    if not data:
        return data
    
    sanitized = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_FIELDS:
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = _sanitize_data(value)
        elif isinstance(value, list):
            sanitized[key] = [
                _sanitize_data(item) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            sanitized[key] = value
    
    return sanitized
