#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/core/silence.py
# AI-SUMMARY: 静音判定：两个声道的绝对幅度都低于阈值即视为静音帧。

from __future__ import annotations

from typing import Sequence

import numpy as np

from .frames import LEFT, RIGHT

# Separates digital silence from quantisation noise.
DEFAULT_SILENCE_THRESHOLD = 3e-7


def is_silence(frame: Sequence[float], threshold: float = DEFAULT_SILENCE_THRESHOLD) -> bool:
    """Return True iff both channels of ``frame`` are strictly below ``threshold``."""
    return abs(frame[LEFT]) < threshold and abs(frame[RIGHT]) < threshold


def silence_mask(frames: np.ndarray, threshold: float = DEFAULT_SILENCE_THRESHOLD) -> np.ndarray:
    """Vectorised :func:`is_silence` over a ``(n, 2)`` block."""
    if frames.size == 0:
        return np.zeros(0, dtype=bool)
    return np.all(np.abs(frames[:, (LEFT, RIGHT)]) < threshold, axis=1)


__all__ = ["DEFAULT_SILENCE_THRESHOLD", "is_silence", "silence_mask"]
