"""A thread-safe registry of error codes and their HTTP status and message."""

from __future__ import annotations

import threading
from dataclasses import dataclass

_MAX_CODE = 2**32 - 1


@dataclass(frozen=True)
class ErrorCode:
    """An error code with the HTTP status and user-facing text it maps to."""

    code: int
    http_status: int
    message: str
    reference: str = ""

    def __str__(self) -> str:
        return self.message


class CodeAlreadyRegisteredError(ValueError):
    """Raised when an error code is registered a second time."""

    def __init__(self, code: int) -> None:
        super().__init__(f"code: {code} already exist")
        self.code = code


class Registry:
    """Maps numeric error codes to their :class:`ErrorCode` metadata."""

    def __init__(self) -> None:
        self._codes: dict[int, ErrorCode] = {}
        self._lock = threading.Lock()

    def register(
        self, code: int, http_status: int, message: str, reference: str = ""
    ) -> ErrorCode:
        """Register a code; raise :class:`CodeAlreadyRegisteredError` on duplicates."""
        if not 0 <= code <= _MAX_CODE:
            raise ValueError(f"code {code} is outside the unsigned 32-bit range")
        entry = ErrorCode(code, http_status, message, reference)
        with self._lock:
            if code in self._codes:
                raise CodeAlreadyRegisteredError(code)
            self._codes[code] = entry
        return entry

    def get(self, code: int) -> ErrorCode | None:
        """Return the registered entry for ``code``, or None."""
        with self._lock:
            return self._codes.get(code)

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._codes

    def __len__(self) -> int:
        with self._lock:
            return len(self._codes)


_default_registry = Registry()


def register(
    code: int, http_status: int, message: str, reference: str = ""
) -> ErrorCode:
    """Register a code in the process-wide registry."""
    return _default_registry.register(code, http_status, message, reference)


def get_coder(code: int) -> ErrorCode | None:
    """Look up a code in the process-wide registry."""
    return _default_registry.get(code)