"""
Locator 例外定義
"""

from typing import Hashable


def describe_key(key: Hashable) -> str:
    """把 key 轉成易讀的名稱；類別使用 __qualname__，其他使用 repr()"""
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)


class LocatorError(LookupError):
    """Locator 相關錯誤的基礎類別，攜帶查詢的 key"""

    def __init__(self, key: Hashable, message: str):
        super().__init__(message)
        self.key = key


class NotRegisteredError(LocatorError):
    """`get` 找不到同步實例"""

    def __init__(self, key: Hashable):
        super().__init__(key, f"Service of type {describe_key(key)} is not registered")


class AsyncNotRegisteredError(NotRegisteredError):
    """`get_async` 既找不到同步實例，也沒有非同步 factory"""

    def __init__(self, key: Hashable):
        LocatorError.__init__(
            self, key, f"Async service of type {describe_key(key)} is not registered"
        )


__all__ = ["LocatorError", "NotRegisteredError", "AsyncNotRegisteredError", "describe_key"]
