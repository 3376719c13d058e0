"""
FastAPI todo service package.

Exposes the FastAPI app instance for convenience imports (src.todo_api.app).
"""

from .main import app  # noqa: F401
