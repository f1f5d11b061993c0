# ABOUTME: Run-length termination policy for scanning sparse identifier dimensions
# ABOUTME: Stops a dimension after a caller-chosen number of consecutive misses

from enum import Enum


class ScanDecision(Enum):
    """Verdict returned after observing one step of a dimension scan."""

    CONTINUE = "continue"
    STOP = "stop"


class RunLengthTermination:
    """Consecutive-miss counter with a fixed threshold.

    A hit resets the counter. A miss increments it, and the scan should stop
    once the counter reaches the threshold. A threshold of 0 stops on the
    first miss.
    """

    def __init__(self, threshold: int):
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        self.threshold = threshold
        self.consecutive_misses = 0

    def observe(self, hit: bool) -> ScanDecision:
        if hit:
            self.consecutive_misses = 0
            return ScanDecision.CONTINUE
        self.consecutive_misses += 1
        if self.consecutive_misses >= self.threshold:
            return ScanDecision.STOP
        return ScanDecision.CONTINUE

    def reset(self) -> None:
        self.consecutive_misses = 0

    def __repr__(self) -> str:
        return f"RunLengthTermination(threshold={self.threshold}, consecutive_misses={self.consecutive_misses})"
