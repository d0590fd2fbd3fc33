"""
Locator 的 Prometheus 指標

ENABLE_METRICS 關閉時所有 record_* 皆為 no-op
"""

from servicebox.core.config import get_settings
from servicebox.lib.prom_helpers import get_or_create_counter, get_or_create_summary

LOOKUPS = get_or_create_counter(
    "servicebox_lookups",
    "Locator lookups by operation and outcome",
    ["operation", "outcome"],
)
FACTORY_CALLS = get_or_create_counter(
    "servicebox_factory_calls",
    "Async factory invocations by key and outcome",
    ["key", "outcome"],
)
FACTORY_SECONDS = get_or_create_summary(
    "servicebox_factory_seconds",
    "Async factory duration in seconds",
    ["key"],
)


def record_lookup(operation: str, outcome: str) -> None:
    """outcome: hit（已有實例）/ miss（未註冊）/ factory（需執行 factory）"""
    if not get_settings().ENABLE_METRICS:
        return
    LOOKUPS.labels(operation=operation, outcome=outcome).inc()


def record_factory(key_name: str, ok: bool, seconds: float) -> None:
    if not get_settings().ENABLE_METRICS:
        return
    FACTORY_CALLS.labels(key=key_name, outcome="success" if ok else "error").inc()
    FACTORY_SECONDS.labels(key=key_name).observe(seconds)
