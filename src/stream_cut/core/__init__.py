#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/core/__init__.py
# AI-SUMMARY: 核心模块出口：帧定义、静音判定、统计累加器与分段采样器。

"""Core segmentation engine."""

from .frames import LEFT, RIGHT, CHANNELS, FRAME_DTYPE, allocate_frames, as_stereo
from .silence import DEFAULT_SILENCE_THRESHOLD, is_silence, silence_mask
from .stats import StatisticsAccumulator, StatsSnapshot
from .sampler import (
    DEFAULT_CHUNK_FRAMES,
    FillResult,
    FillStatus,
    SamplerConfig,
    SamplerState,
    SegmentingSampler,
)

__all__ = [
    "LEFT",
    "RIGHT",
    "CHANNELS",
    "FRAME_DTYPE",
    "allocate_frames",
    "as_stereo",
    "DEFAULT_SILENCE_THRESHOLD",
    "is_silence",
    "silence_mask",
    "StatisticsAccumulator",
    "StatsSnapshot",
    "DEFAULT_CHUNK_FRAMES",
    "FillResult",
    "FillStatus",
    "SamplerConfig",
    "SamplerState",
    "SegmentingSampler",
]
