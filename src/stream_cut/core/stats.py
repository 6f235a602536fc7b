#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/core/stats.py
# AI-SUMMARY: 全流程统计累加器（min/max/sum/count），与分段逻辑无关，只增不减。

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np

from .frames import LEFT, RIGHT


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time copy of the accumulator."""

    min: float
    max: float
    sum: float
    count: int

    @property
    def average(self) -> float:
        # sum covers both channels while count counts frames; kept for compatibility
        if self.count == 0:
            return 0.0
        return self.sum / float(self.count)

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data["average"] = self.average
        return data


class StatisticsAccumulator:
    """Running min/max/sum/count over every frame observed.

    ``min`` starts at the largest representable float and ``max`` at its
    negation so the first frame always updates both. ``sum`` adds
    ``left + right`` per frame and ``count`` counts frames.
    """

    def __init__(self) -> None:
        self._min = sys.float_info.max
        self._max = -sys.float_info.max
        self._sum = 0.0
        self._count = 0

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def sum(self) -> float:
        return self._sum

    @property
    def count(self) -> int:
        return self._count

    def update(self, frames: np.ndarray) -> None:
        """Fold a ``(n, 2)`` block into the running values."""
        if frames.size == 0:
            return
        channels = frames[:, (LEFT, RIGHT)]
        self._min = min(self._min, float(channels.min()))
        self._max = max(self._max, float(channels.max()))
        # frame by frame, in arrival order, so the total is independent of chunking
        per_frame = channels[:, 0] + channels[:, 1]
        self._sum = float(np.add.accumulate(np.concatenate(([self._sum], per_frame)))[-1])
        self._count += int(channels.shape[0])

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot(min=self._min, max=self._max, sum=self._sum, count=self._count)


__all__ = ["StatisticsAccumulator", "StatsSnapshot"]
