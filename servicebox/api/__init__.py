"""
FastAPI 整合模組
"""

from .debug import router as debug_router
from .dependencies import get_locator, provide

__all__ = [
    "debug_router",
    "get_locator",
    "provide",
]
