"""
servicebox

輕量級 service locator：同步實例與延遲初始化的非同步服務
"""

from .core.exceptions import AsyncNotRegisteredError, LocatorError, NotRegisteredError
from .core.locator import Locator

__version__ = "0.1.0"

__all__ = [
    "Locator",
    "LocatorError",
    "NotRegisteredError",
    "AsyncNotRegisteredError",
]
