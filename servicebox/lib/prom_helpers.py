"""
Prometheus collector 建立工具

同名 collector 只建立一次（模組重新匯入、測試重複建立 Locator 時不會報 Duplicated timeseries）
"""

from typing import Any, Optional, Type

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Summary


def find_collector(name: str, registry: CollectorRegistry = REGISTRY) -> Optional[Any]:
    """回傳 registry 中已註冊、名稱為 `name` 的 collector，沒有則為 None"""
    return registry._names_to_collectors.get(name)


def _get_or_create(
    metric_cls: Type[Any],
    name: str,
    documentation: str,
    labelnames: Optional[list[str]],
    registry: CollectorRegistry,
) -> Any:
    existing = find_collector(name, registry)
    if existing is not None:
        return existing
    return metric_cls(name, documentation, labelnames or [], registry=registry)


def get_or_create_counter(
    name: str,
    documentation: str,
    labelnames: Optional[list[str]] = None,
    registry: CollectorRegistry = REGISTRY,
) -> Counter:
    return _get_or_create(Counter, name, documentation, labelnames, registry)


def get_or_create_summary(
    name: str,
    documentation: str,
    labelnames: Optional[list[str]] = None,
    registry: CollectorRegistry = REGISTRY,
) -> Summary:
    return _get_or_create(Summary, name, documentation, labelnames, registry)
