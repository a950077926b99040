"""Outcome sink — RegistrationLogger port over structlog."""

from __future__ import annotations

import structlog


class StructlogRegistrationLogger:
    """Emits one `<operation>.succeeded` or `<operation>.failed` event per call."""

    def __init__(self, operation: str = "registration") -> None:
        self._log = structlog.get_logger().bind(operation=operation)
        self._operation = operation

    def log_success(self, text: str) -> None:
        self._log.info(f"{self._operation}.succeeded", message=text)

    def log_failure(self, text: str) -> None:
        self._log.error(f"{self._operation}.failed", message=text)
