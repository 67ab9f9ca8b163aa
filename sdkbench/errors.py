class BenchmarkError(RuntimeError):
    """Base class for failures of a benchmark run."""


class MissingImageError(BenchmarkError, ValueError):
    """A client that requires an image was invoked without one."""


class ComparisonError(BenchmarkError):
    """At least one client call failed, so no latency judgment exists."""

    def __init__(self, failures):
        self.failures = list(failures)
        detail = "; ".join(f"{inv.label} failed: {inv.error!r}" for inv in self.failures)
        super().__init__(f"Comparison aborted - {detail}")


class ToleranceExceededError(BenchmarkError):
    def __init__(self, difference_ms: int, tolerance_ms: int):
        self.difference_ms = difference_ms
        self.tolerance_ms = tolerance_ms
        super().__init__(
            f"Latency difference {difference_ms}ms exceeds tolerance of {tolerance_ms}ms"
        )
