"""Timed benchmark phases."""

import gc
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Tuple

import psutil


@dataclass
class PhaseResult:
    """Single wall-clock sample for one benchmark phase."""

    name: str
    iterations: int
    elapsed_ms: float
    rss_before_mb: float
    rss_after_mb: float

    @property
    def whole_ms(self) -> int:
        """Elapsed time truncated to whole milliseconds, as printed."""
        return int(self.elapsed_ms)

    @property
    def per_op_us(self) -> float:
        if self.iterations <= 0:
            return 0.0
        return self.elapsed_ms * 1000 / self.iterations

    @property
    def rss_delta_mb(self) -> float:
        return self.rss_after_mb - self.rss_before_mb

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["per_op_us"] = self.per_op_us
        data["rss_delta_mb"] = self.rss_delta_mb
        return data


def collect_garbage() -> None:
    """Run a full collection twice so objects freed by finalizers are reclaimed too."""
    gc.collect()
    gc.collect()


def _rss_mb(process: psutil.Process) -> float:
    return process.memory_info().rss / 1024 / 1024


def measure(name: str, action: Callable[[], Any], iterations: int = 1) -> Tuple[PhaseResult, Any]:
    """Collect garbage, then time one call of *action*.

    Returns the phase result and whatever *action* returned.
    """
    process = psutil.Process()

    collect_garbage()
    rss_before = _rss_mb(process)

    start = time.perf_counter()
    value = action()
    elapsed = time.perf_counter() - start

    rss_after = _rss_mb(process)

    result = PhaseResult(
        name=name,
        iterations=iterations,
        elapsed_ms=elapsed * 1000,
        rss_before_mb=rss_before,
        rss_after_mb=rss_after,
    )
    return result, value


def repeat(func: Callable[[Any], Any], arg: Any, iterations: int) -> Callable[[], Any]:
    """Return an action calling ``func(arg)`` *iterations* times; it returns the last result."""

    def action():
        result = None
        for _ in range(iterations):
            result = func(arg)
        return result

    return action
