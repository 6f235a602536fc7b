#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/streams/source.py
# AI-SUMMARY: 帧源适配层：基于 soundfile 的流式解码读取，以及供测试/API 使用的内存数组帧源。

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

import numpy as np
import soundfile as sf

from ..core.frames import CHANNELS, as_stereo
from ..errors import FileOpenError, SourceReadError

logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    """Anything that hands out stereo frames on demand.

    ``read`` returns a ``(n, 2)`` array with ``n <= max_frames``; ``n == 0``
    means the input is exhausted. Failures raise :class:`SourceReadError`.
    """

    def read(self, max_frames: int) -> np.ndarray:
        ...


class ArrayFrameSource:
    """Serve frames from an in-memory array."""

    def __init__(self, frames, *, fail_after: Optional[int] = None) -> None:
        self._frames = as_stereo(frames)
        self._position = 0
        self._fail_after = fail_after
        self.reads = 0

    @property
    def remaining(self) -> int:
        return int(self._frames.shape[0] - self._position)

    def read(self, max_frames: int) -> np.ndarray:
        if self._fail_after is not None and self.reads >= self._fail_after:
            raise SourceReadError("error reading stream: simulated failure")
        self.reads += 1
        stop = min(self._frames.shape[0], self._position + max(0, int(max_frames)))
        block = self._frames[self._position:stop].copy()
        self._position = stop
        return block


class SoundFileSource:
    """Stream stereo float64 frames from an audio file via libsndfile."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        try:
            self._handle = sf.SoundFile(str(self.path), mode="r")
        except (RuntimeError, OSError) as exc:
            raise FileOpenError(f"error loading recording '{self.path}': {exc}", path=self.path) from exc

        if self._handle.channels > CHANNELS:
            channels = self._handle.channels
            self._handle.close()
            raise FileOpenError(
                f"error decoding recording '{self.path}': {channels} channels not supported",
                path=self.path,
            )
        logger.debug(
            "opened %s: sr=%d channels=%d subtype=%s frames=%d",
            self.path,
            self._handle.samplerate,
            self._handle.channels,
            self._handle.subtype,
            self._handle.frames,
        )

    @property
    def sample_rate(self) -> int:
        return int(self._handle.samplerate)

    @property
    def channels(self) -> int:
        return int(self._handle.channels)

    @property
    def subtype(self) -> str:
        return str(self._handle.subtype)

    @property
    def format(self) -> str:
        return str(self._handle.format)

    @property
    def frames(self) -> int:
        return int(self._handle.frames)

    @property
    def closed(self) -> bool:
        return bool(self._handle.closed)

    def read(self, max_frames: int) -> np.ndarray:
        try:
            block = self._handle.read(int(max_frames), dtype="float64", always_2d=True)
        except (RuntimeError, OSError, ValueError) as exc:
            raise SourceReadError(f"error reading stream '{self.path}': {exc}", path=self.path) from exc
        return as_stereo(block)

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    def __enter__(self) -> "SoundFileSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_source(path: Union[str, Path]) -> SoundFileSource:
    """Open ``path`` for streaming, raising :class:`FileOpenError` when unreadable."""
    input_path = Path(path).expanduser()
    if not input_path.is_file():
        raise FileOpenError(f"error loading recording '{input_path}': no such file", path=input_path)
    return SoundFileSource(input_path)


__all__ = ["FrameSource", "ArrayFrameSource", "SoundFileSource", "open_source"]
