#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/core/sampler.py
# AI-SUMMARY: 分段采样器状态机：按块拉取帧、静音检测、跨调用携带下一段的帧，并以显式三态结果区分段尾/输入结束。

"""Pull-based segmenting sampler.

The sampler wraps a :class:`~stream_cut.streams.source.FrameSource` and fills
caller supplied request buffers. A run of silence followed by a non-silent
frame inside one fetched chunk ends the current segment: the frames before
the silence are delivered with :attr:`FillStatus.SEGMENT_END` and the frames
from the first non-silent frame onward are carried into the next call, which
starts the next segment.

Segment boundaries depend on the chunk size. A chunk whose silence runs to
its end is dropped without ending the segment, so ``chunk_frames`` sets the
granularity of detectable gaps.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import SourceReadError
from .frames import CHANNELS, FRAME_DTYPE
from .silence import DEFAULT_SILENCE_THRESHOLD, silence_mask
from .stats import StatisticsAccumulator, StatsSnapshot

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_FRAMES = 512


class FillStatus(enum.Enum):
    """Outcome of one :meth:`SegmentingSampler.fill` call."""

    CONTINUE = "continue"
    SEGMENT_END = "segment_end"
    INPUT_EXHAUSTED = "input_exhausted"


class SamplerState(enum.Enum):
    READING = "reading"
    SEGMENT_BOUNDARY = "segment_boundary"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True)
class FillResult:
    frames: int
    status: FillStatus

    @property
    def more_in_segment(self) -> bool:
        return self.status is FillStatus.CONTINUE


@dataclass(frozen=True)
class SamplerConfig:
    """Detection parameters for :class:`SegmentingSampler`."""

    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD
    chunk_frames: int = DEFAULT_CHUNK_FRAMES
    keep_chunk_head: bool = False

    def __post_init__(self) -> None:
        if not self.silence_threshold > 0:
            raise ValueError("silence_threshold must be positive")
        if int(self.chunk_frames) < 1:
            raise ValueError("chunk_frames must be >= 1")


class SegmentingSampler:
    """Segmenting transform over a frame source. Not thread safe."""

    def __init__(self, source, config: Optional[SamplerConfig] = None) -> None:
        self.source = source
        self.config = config or SamplerConfig()
        self._threshold = float(self.config.silence_threshold)
        self._stats = StatisticsAccumulator()
        self._carry = np.empty((0, CHANNELS), dtype=FRAME_DTYPE)
        self._state = SamplerState.READING
        self._error: Optional[SourceReadError] = None

    # ------------------------------------------------------------------
    # status
    # ------------------------------------------------------------------

    @property
    def state(self) -> SamplerState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state is SamplerState.EXHAUSTED

    @property
    def failed(self) -> bool:
        return self._state is SamplerState.FAILED

    @property
    def error(self) -> Optional[SourceReadError]:
        return self._error

    @property
    def carry_frames(self) -> int:
        return int(self._carry.shape[0])

    @property
    def stats(self) -> StatisticsAccumulator:
        return self._stats

    def snapshot(self) -> StatsSnapshot:
        return self._stats.snapshot()

    # ------------------------------------------------------------------
    # streaming
    # ------------------------------------------------------------------

    def fill(self, buffer: np.ndarray) -> FillResult:
        """Write up to ``len(buffer)`` frames into ``buffer`` in place.

        Args:
            buffer: ``(K, 2)`` float array owned by the caller.

        Returns:
            Number of valid frames at the front of ``buffer`` and whether the
            current segment continues, ended, or the input is exhausted.

        Raises:
            SourceReadError: the source failed now or on an earlier call.
            ValueError: ``buffer`` has no room for a frame.
        """
        if self._error is not None:
            raise self._error
        if self._state is SamplerState.EXHAUSTED:
            return FillResult(0, FillStatus.INPUT_EXHAUSTED)

        capacity = int(buffer.shape[0])
        if capacity < 1:
            raise ValueError("request buffer must hold at least one frame")
        self._state = SamplerState.READING

        if self._carry.shape[0] > 0:
            return self._drain_carry(buffer, capacity)

        try:
            chunk = self.source.read(capacity)
        except SourceReadError as exc:
            self._fail(exc)
            raise
        except (OSError, RuntimeError) as exc:
            error = SourceReadError(f"error reading stream: {exc}")
            self._fail(error)
            raise error from exc

        n = int(chunk.shape[0])
        if n == 0:
            logger.debug("EOF reached")
            self._state = SamplerState.EXHAUSTED
            return FillResult(0, FillStatus.INPUT_EXHAUSTED)
        if n > capacity:
            error = SourceReadError(f"source returned {n} frames for a request of {capacity}")
            self._fail(error)
            raise error

        self._stats.update(chunk)

        mask = silence_mask(chunk, self._threshold)
        if not mask.any():
            buffer[:n] = chunk
            return FillResult(n, FillStatus.CONTINUE)

        end = int(np.argmax(mask))
        logger.debug("detected silence @%d", end)
        resumed = ~mask[end:]
        if resumed.any():
            index = end + int(np.argmax(resumed))
            buffer[:end] = chunk[:end]
            self._carry = chunk[index:].copy()
            self._state = SamplerState.SEGMENT_BOUNDARY
            logger.debug("segment split: tail=%d carry=%d", end, self._carry.shape[0])
            return FillResult(end, FillStatus.SEGMENT_END)

        # silence runs to the end of the chunk
        if self.config.keep_chunk_head and end > 0:
            buffer[:end] = chunk[:end]
            return FillResult(end, FillStatus.CONTINUE)
        return FillResult(0, FillStatus.CONTINUE)

    def _drain_carry(self, buffer: np.ndarray, capacity: int) -> FillResult:
        logger.debug("Using buffer from last time with length %d", self._carry.shape[0])
        count = min(capacity, int(self._carry.shape[0]))
        buffer[:count] = self._carry[:count]
        if count < self._carry.shape[0]:
            self._carry = self._carry[count:]
        else:
            self._carry = np.empty((0, CHANNELS), dtype=FRAME_DTYPE)
        return FillResult(count, FillStatus.CONTINUE)

    def _fail(self, error: SourceReadError) -> None:
        logger.debug("source failed: %s", error)
        self._error = error
        self._state = SamplerState.FAILED


__all__ = [
    "DEFAULT_CHUNK_FRAMES",
    "FillStatus",
    "FillResult",
    "SamplerState",
    "SamplerConfig",
    "SegmentingSampler",
]
