# File: tests/unit/test_stats.py
# AI-SUMMARY: Unit tests for the running min/max/sum/count accumulator.

import sys

import numpy as np
import pytest

from stream_cut.core.stats import StatisticsAccumulator


def test_initial_bounds_are_extreme():
    acc = StatisticsAccumulator()
    snap = acc.snapshot()
    assert snap.min == sys.float_info.max
    assert snap.max == -sys.float_info.max
    assert snap.count == 0
    assert snap.average == 0.0


def test_first_frame_updates_both_bounds():
    acc = StatisticsAccumulator()
    acc.update(np.array([[0.25, -0.5]]))
    assert acc.min == -0.5
    assert acc.max == 0.25
    assert acc.sum == pytest.approx(-0.25)
    assert acc.count == 1


def test_sum_combines_channels_per_frame():
    acc = StatisticsAccumulator()
    acc.update(np.array([[0.5, 0.5], [0.0, 0.0]]))
    acc.update(np.array([[0.0, 0.0], [0.4, 0.4]]))
    snap = acc.snapshot()
    assert snap.sum == pytest.approx(1.8)
    assert snap.count == 4
    # per-frame combined-channel mean, not a per-sample mean
    assert snap.average == pytest.approx(0.45)
    assert snap.as_dict()['average'] == pytest.approx(0.45)


def test_empty_update_is_noop():
    acc = StatisticsAccumulator()
    acc.update(np.empty((0, 2)))
    assert acc.count == 0
    assert acc.min == sys.float_info.max
