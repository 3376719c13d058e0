"""
Run the todo service with uvicorn.

Usage:
    python -m src.todo_api
"""
from __future__ import annotations

import uvicorn

from .settings import get_settings


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "src.todo_api.main:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.server_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    run()
