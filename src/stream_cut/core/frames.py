#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/core/frames.py
# AI-SUMMARY: 立体声帧的公共定义：声道下标、数据类型、请求缓冲区分配与单声道转立体声。

from __future__ import annotations

import numpy as np

LEFT = 0
RIGHT = 1
CHANNELS = 2

FRAME_DTYPE = np.float64


def allocate_frames(capacity: int) -> np.ndarray:
    """Return a zeroed request buffer with room for ``capacity`` stereo frames."""
    if capacity < 1:
        raise ValueError("capacity must be >= 1")
    return np.zeros((int(capacity), CHANNELS), dtype=FRAME_DTYPE)


def as_stereo(block: np.ndarray) -> np.ndarray:
    """Coerce a decoded block to a ``(n, 2)`` float64 array.

    Mono input (1-D or a single column) is duplicated to both channels.
    """
    array = np.asarray(block, dtype=FRAME_DTYPE)
    if array.ndim == 1:
        array = array.reshape(-1, 1)
    if array.ndim != 2:
        raise ValueError(f"expected 2-D frame block, got {array.ndim}-D")
    if array.shape[1] == 1:
        return np.repeat(array, CHANNELS, axis=1)
    if array.shape[1] != CHANNELS:
        raise ValueError(f"unsupported channel count: {array.shape[1]}")
    return array


__all__ = ["LEFT", "RIGHT", "CHANNELS", "FRAME_DTYPE", "allocate_frames", "as_stereo"]
