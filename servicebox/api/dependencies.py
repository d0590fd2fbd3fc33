"""
FastAPI 依賴注入整合

Locator 由應用程式自行建立並放在 `app.state.locator`，
路由透過 `Depends(provide(SomeService))` 取得服務。
"""

import logging
from typing import Any, Callable, Hashable

from fastapi import HTTPException, Request, status

from servicebox.core.exceptions import NotRegisteredError, describe_key
from servicebox.core.locator import Locator

logger = logging.getLogger(__name__)


def get_locator(request: Request) -> Locator:
    """從 app.state 取得 Locator"""
    locator = getattr(request.app.state, "locator", None)
    if locator is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Locator is not configured on app.state",
        )
    return locator


def provide(key: Hashable) -> Callable[[Request], Any]:
    """
    建立一個解析 `key` 的 FastAPI dependency

    第一次請求時會執行非同步 factory，之後直接使用快取的實例。
    未註冊的服務回傳 503。
    """

    async def dependency(request: Request) -> Any:
        locator = get_locator(request)
        try:
            return await locator.get_async(key)
        except NotRegisteredError as e:
            logger.warning(f"⚠️ Service unavailable: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Service {describe_key(key)} is not available",
            )

    dependency.__name__ = f"provide_{describe_key(key)}"
    return dependency
