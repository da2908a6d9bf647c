from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    CONFIG = "config"
    DATA = "data"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    ANALYTICS = "analytics"


class JournalError(Exception):
    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.ANALYTICS,
        status_code: Optional[int] = None,
    ) -> None:
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.category.value}] {self.message}"]
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        return " | ".join(parts)


class ConfigError(JournalError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCategory.CONFIG)


class DataError(JournalError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorCategory.DATA, status_code)


class NetworkError(JournalError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorCategory.NETWORK, status_code)


class AuthenticationError(JournalError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message, ErrorCategory.AUTHENTICATION, status_code)
