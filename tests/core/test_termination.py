# ABOUTME: Tests for the run-length termination policy
# ABOUTME: Validates stop timing, reset on hit, and the zero-threshold edge case

import pytest

from voiceline_extractor.core.termination import RunLengthTermination, ScanDecision


@pytest.mark.parametrize("threshold", [1, 2, 5, 1000])
def test_stops_exactly_on_threshold_miss(threshold):
    termination = RunLengthTermination(threshold)

    decisions = [termination.observe(False) for _ in range(threshold)]

    assert decisions[:-1] == [ScanDecision.CONTINUE] * (threshold - 1)
    assert decisions[-1] is ScanDecision.STOP


def test_hit_resets_miss_count():
    termination = RunLengthTermination(3)

    assert termination.observe(False) is ScanDecision.CONTINUE
    assert termination.observe(False) is ScanDecision.CONTINUE
    assert termination.observe(True) is ScanDecision.CONTINUE
    assert termination.consecutive_misses == 0
    assert termination.observe(False) is ScanDecision.CONTINUE
    assert termination.observe(False) is ScanDecision.CONTINUE
    assert termination.observe(False) is ScanDecision.STOP


def test_zero_threshold_stops_on_first_miss():
    termination = RunLengthTermination(0)

    assert termination.observe(True) is ScanDecision.CONTINUE
    assert termination.observe(False) is ScanDecision.STOP


def test_negative_threshold_rejected():
    with pytest.raises(ValueError):
        RunLengthTermination(-1)


def test_reset_clears_counter():
    termination = RunLengthTermination(2)
    termination.observe(False)

    termination.reset()

    assert termination.consecutive_misses == 0
    assert termination.observe(False) is ScanDecision.CONTINUE
