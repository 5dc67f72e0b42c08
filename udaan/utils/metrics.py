"""
Lightweight in-process metrics: counters for suggestion sources and
histograms for language-model call duration.

Exposed as JSON at /metrics; values reset on restart.
"""

import time
from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Dict, Any

from udaan.utils.logger import get_logger

logger = get_logger("metrics")

_counters: Dict[str, int] = defaultdict(int)
_histograms: Dict[str, list] = defaultdict(list)

MAX_HISTOGRAM_SAMPLES = 500  # Rolling window


def inc(name: str, value: int = 1) -> None:
    """Increment a counter."""
    _counters[name] += value


def observe(name: str, value: float) -> None:
    """Record a histogram observation (e.g., duration)."""
    bucket = _histograms[name]
    bucket.append(value)
    if len(bucket) > MAX_HISTOGRAM_SAMPLES:
        _histograms[name] = bucket[-MAX_HISTOGRAM_SAMPLES:]


@asynccontextmanager
async def track_duration(service: str, operation: str = "call"):
    """
    Track call duration and success/failure of an awaited call.

    Usage:
        async with track_duration("openai", "career"):
            result = await client.chat.completions.create(...)
    """
    start = time.monotonic()
    try:
        yield
    except Exception:
        duration_ms = (time.monotonic() - start) * 1000
        observe(f"{service}.{operation}.duration_ms", duration_ms)
        inc(f"{service}.{operation}.error")
        logger.warning(
            "metrics.call",
            extra={"source": service, "status": "error", "duration_ms": round(duration_ms, 1)},
        )
        raise
    duration_ms = (time.monotonic() - start) * 1000
    observe(f"{service}.{operation}.duration_ms", duration_ms)
    inc(f"{service}.{operation}.success")
    logger.info(
        "metrics.call",
        extra={"source": service, "status": "success", "duration_ms": round(duration_ms, 1)},
    )


def get_snapshot() -> Dict[str, Any]:
    """Return a snapshot of all counters and histogram summaries."""
    snapshot: Dict[str, Any] = {"counters": dict(_counters)}

    summaries = {}
    for name, samples in _histograms.items():
        if samples:
            sorted_s = sorted(samples)
            p50_idx = int(len(sorted_s) * 0.5)
            p95_idx = min(int(len(sorted_s) * 0.95), len(sorted_s) - 1)
            summaries[name] = {
                "count": len(sorted_s),
                "p50": round(sorted_s[p50_idx], 1),
                "p95": round(sorted_s[p95_idx], 1),
                "max": round(sorted_s[-1], 1),
            }
    snapshot["histograms"] = summaries
    return snapshot


def reset() -> None:
    """Reset all metrics (useful for testing)."""
    _counters.clear()
    _histograms.clear()
