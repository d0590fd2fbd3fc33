"""
Service Locator

以型別（或自訂 key）為索引的實例登錄表，支援：
- 同步註冊：直接保存已建構好的實例
- 非同步註冊：保存 factory，第一次 `get_async` 時才建構並快取
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Type, TypeVar, Union

from servicebox.core.config import get_settings
from servicebox.core.exceptions import AsyncNotRegisteredError, NotRegisteredError, describe_key
from servicebox.core.metrics import record_factory, record_lookup
from servicebox.utils.timer import PerformanceTimer

logger = logging.getLogger(__name__)

T = TypeVar("T")
Key = Union[Type[T], Hashable]
AsyncFactory = Callable[[], Union[Awaitable[T], T]]


class Locator:
    """
    一個 key 對應一個實例的服務登錄表

    由呼叫端明確建立並傳遞，不提供全域實例。
    """

    def __init__(self, dedupe_inflight: Optional[bool] = None):
        self._instances: Dict[Hashable, Any] = {}
        self._factories: Dict[Hashable, AsyncFactory] = {}
        self._inflight: Dict[Hashable, asyncio.Task] = {}
        if dedupe_inflight is None:
            dedupe_inflight = get_settings().LOCATOR_DEDUPE_INFLIGHT
        self._dedupe_inflight = dedupe_inflight

    # ------------------------------------------------------------------
    # 註冊 / 移除
    # ------------------------------------------------------------------
    def register(self, instance: T, key: Optional[Key] = None) -> None:
        """註冊同步實例；未指定 key 時使用 type(instance)，覆寫既有同步實例"""
        if key is None:
            key = type(instance)
        self._instances[key] = instance
        logger.debug(f"Registered service {describe_key(key)}")

    def register_async(self, key: Key, factory: AsyncFactory) -> None:
        """
        註冊非同步 factory

        不影響既有的同步實例：若同一個 key 已有同步實例，仍以同步實例為準，
        直到 `unregister` 為止。
        """
        self._factories[key] = factory
        # 之後的解析必須使用新的 factory，不再加入舊的 task
        self._inflight.pop(key, None)
        logger.debug(f"Registered async factory for {describe_key(key)}")

    def unregister(self, key: Key) -> None:
        """移除 key 的同步實例與 factory；不存在時不報錯"""
        removed = self.is_registered(key)
        self._instances.pop(key, None)
        self._factories.pop(key, None)
        self._inflight.pop(key, None)
        if removed:
            logger.debug(f"🗑️ Unregistered service {describe_key(key)}")

    def clear(self) -> None:
        """清除所有註冊"""
        self._instances.clear()
        self._factories.clear()
        self._inflight.clear()

    # ------------------------------------------------------------------
    # 同步查詢
    # ------------------------------------------------------------------
    def get(self, key: Key) -> T:
        """取得同步實例；不存在時拋出 NotRegisteredError，不會觸發 factory"""
        try:
            instance = self._instances[key]
        except KeyError:
            record_lookup("get", "miss")
            logger.debug(f"Service {describe_key(key)} not registered")
            raise NotRegisteredError(key) from None
        record_lookup("get", "hit")
        return instance

    def maybe_get(self, key: Key) -> Optional[T]:
        """取得同步實例，不存在時回傳 None"""
        hit = key in self._instances
        record_lookup("maybe_get", "hit" if hit else "miss")
        return self._instances.get(key)

    # ------------------------------------------------------------------
    # 非同步查詢
    # ------------------------------------------------------------------
    async def get_async(self, key: Key) -> T:
        """
        取得實例，必要時執行 factory 並快取結果

        Raises:
            AsyncNotRegisteredError: 沒有同步實例也沒有 factory
            Exception: factory 本身的錯誤原樣拋出，不寫入快取
        """
        return await self._resolve_async(key, "get_async", raise_if_missing=True)

    async def maybe_get_async(self, key: Key) -> Optional[T]:
        """同 `get_async`，但未註冊時回傳 None；factory 的錯誤仍會拋出"""
        return await self._resolve_async(key, "maybe_get_async", raise_if_missing=False)

    async def _resolve_async(self, key: Key, operation: str, raise_if_missing: bool) -> Optional[T]:
        if key in self._instances:
            record_lookup(operation, "hit")
            return self._instances[key]

        factory = self._factories.get(key)
        if factory is None:
            record_lookup(operation, "miss")
            if raise_if_missing:
                raise AsyncNotRegisteredError(key)
            return None

        record_lookup(operation, "factory")
        if not self._dedupe_inflight:
            return await self._run_factory(key, factory)

        # 同一個 key 的並發呼叫共用同一個 task
        task = self._inflight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(self._run_factory(key, factory))
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._on_inflight_done(key, t))
        else:
            logger.debug(f"Joining in-flight initialization of {describe_key(key)}")
        return await asyncio.shield(task)

    def _on_inflight_done(self, key: Hashable, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # 所有等待者都被取消時，避免 "exception was never retrieved"
        if not task.cancelled():
            task.exception()

    async def _run_factory(self, key: Hashable, factory: AsyncFactory) -> Any:
        name = describe_key(key)
        logger.info(f"🔧 Initializing async service {name}")
        timer = PerformanceTimer(f"async factory {name}")
        try:
            with timer:
                instance = factory()
                if inspect.isawaitable(instance):
                    instance = await instance
        except Exception as e:
            record_factory(name, False, timer.elapsed_seconds)
            logger.warning(f"❌ Async factory for {name} failed: {e}")
            raise
        record_factory(name, True, timer.elapsed_seconds)
        return self._store_resolved(key, factory, instance, timer.elapsed_ms)

    def _store_resolved(self, key: Hashable, factory: AsyncFactory, instance: Any, elapsed_ms: float) -> Any:
        name = describe_key(key)
        if key in self._instances:
            # 解析期間已有同步實例（並發解析或明確 register），保留既有實例
            logger.debug(f"{name} resolved concurrently, keeping existing instance")
            return self._instances[key]
        if self._factories.get(key) is not factory:
            logger.warning(f"⚠️ {name} was unregistered or replaced during initialization, result not cached")
            return instance
        self._instances[key] = instance
        logger.info(f"✅ Async service {name} initialized ({elapsed_ms:.1f} ms)")
        return instance

    # ------------------------------------------------------------------
    # 狀態查詢
    # ------------------------------------------------------------------
    def is_registered(self, key: Key) -> bool:
        """key 有同步實例或 factory"""
        return key in self._instances or key in self._factories

    def is_resolved(self, key: Key) -> bool:
        """key 已有同步實例"""
        return key in self._instances

    def __contains__(self, key: object) -> bool:
        return self.is_registered(key)

    def __len__(self) -> int:
        return len(self._instances.keys() | self._factories.keys())

    def get_stats(self) -> dict:
        """取得登錄表統計資訊"""
        pending = [k for k in self._factories if k not in self._instances]
        return {
            "resolved": len(self._instances),
            "pending": len(pending),
            "inflight": len(self._inflight),
            "dedupe_inflight": self._dedupe_inflight,
            "resolved_keys": sorted(describe_key(k) for k in self._instances),
            "pending_keys": sorted(describe_key(k) for k in pending),
        }


__all__ = ["Locator", "AsyncFactory"]
