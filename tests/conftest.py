"""
pytest 配置檔案

提供測試所需的共用 fixtures 和配置
"""

import asyncio
import os
from typing import Callable
from unittest.mock import AsyncMock

import pytest

# 設定測試環境變數
os.environ.update({
    "TESTING": "true",  # 測試模式標誌
    "LOG_LEVEL": "DEBUG",
    "ENABLE_METRICS": "true",
    "DEMO_DB_INIT_DELAY_SEC": "0",
})

from servicebox import Locator


@pytest.fixture
def locator() -> Locator:
    """每個測試一個新的 Locator（預設共用並發初始化）"""
    return Locator(dedupe_inflight=True)


@pytest.fixture
def racing_locator() -> Locator:
    """不共用並發初始化的 Locator"""
    return Locator(dedupe_inflight=False)


@pytest.fixture
def slow_factory() -> Callable[..., AsyncMock]:
    """建立一個會延遲後回傳結果的 AsyncMock factory"""

    def _make(result, delay: float = 0.01) -> AsyncMock:
        async def _produce():
            await asyncio.sleep(delay)
            return result() if callable(result) else result

        return AsyncMock(side_effect=_produce)

    return _make


