"""AI Studio HTTP API."""

from aistudio.api.router import router

__all__ = ["router"]
