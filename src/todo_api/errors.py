from __future__ import annotations

from typing import Any, Dict, Optional


class StoreError(Exception):
    """Raised by a storage backend when the underlying database call fails."""


# PUBLIC_INTERFACE
class TodoAPIError(Exception):
    """
    Error raised by route handlers and rendered by the global exception handler.

    Response format:
        {
            "message": "<human readable message>",
            "error": "<raw store error, when there is one>"
        }
    """

    def __init__(self, status_code: int, message: str, error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.error is not None:
            body["error"] = str(self.error)
        return body
