#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/streams/sink.py
# AI-SUMMARY: 输出编码：描述输出格式，并把采样器逐块写入单个片段文件直到段尾或输入结束。

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import soundfile as sf

from ..core.frames import CHANNELS, allocate_frames
from ..core.sampler import FillStatus, SegmentingSampler
from ..errors import FileOpenError, SinkWriteError

logger = logging.getLogger(__name__)

_DEFAULT_CONTAINER = "WAV"

# common file extensions that are not libsndfile major-format names
_EXTENSION_ALIASES = {
    "AIF": "AIFF",
    "AIFC": "AIFF",
    "WAVE": "WAV",
    "OGA": "OGG",
    "SND": "AU",
}


@dataclass(frozen=True)
class AudioFormat:
    """Output format descriptor: sample rate, bit depth (subtype) and channels."""

    sample_rate: int
    subtype: str = "PCM_16"
    container: str = _DEFAULT_CONTAINER
    channels: int = CHANNELS


def _container_for(path: Union[str, Path]) -> str:
    suffix = Path(path).suffix.lstrip(".").upper()
    suffix = _EXTENSION_ALIASES.get(suffix, suffix)
    if suffix and suffix in sf.available_formats():
        return suffix
    logger.warning("no audio container known for '%s', writing %s", path, _DEFAULT_CONTAINER)
    return _DEFAULT_CONTAINER


def resolve_output_format(source, output_path: Union[str, Path], subtype: Optional[str] = None) -> AudioFormat:
    """Derive the output format from the input source.

    Keeps the input's sample rate and bit depth when the output container
    accepts that subtype, otherwise uses the container's default subtype.
    """
    container = _container_for(output_path)
    wanted = subtype or getattr(source, "subtype", None)
    if wanted and sf.check_format(container, wanted):
        chosen = wanted
    else:
        chosen = sf.default_subtype(container)
        if wanted:
            logger.debug("subtype %s not supported by %s, using %s", wanted, container, chosen)
    return AudioFormat(sample_rate=int(source.sample_rate), subtype=chosen, container=container)


def encode_segment(
    sampler: SegmentingSampler,
    path: Union[str, Path],
    fmt: AudioFormat,
    chunk_frames: Optional[int] = None,
) -> Tuple[int, FillStatus]:
    """Drain ``sampler`` into one output file until the segment closes.

    ``chunk_frames`` defaults to the sampler's configured chunk size.

    Returns:
        (frames written, status that closed the file)
    """
    output_path = Path(path)
    buffer = allocate_frames(chunk_frames or sampler.config.chunk_frames)
    try:
        handle = sf.SoundFile(
            str(output_path),
            mode="w",
            samplerate=fmt.sample_rate,
            channels=fmt.channels,
            subtype=fmt.subtype,
            format=fmt.container,
        )
    except (RuntimeError, OSError, ValueError) as exc:
        raise FileOpenError(f"error opening output file '{output_path}': {exc}", path=output_path) from exc

    written = 0
    with handle:
        while True:
            result = sampler.fill(buffer)
            if result.frames:
                try:
                    handle.write(buffer[: result.frames])
                except (RuntimeError, OSError) as exc:
                    raise SinkWriteError(
                        f"error writing output file '{output_path}': {exc}", path=output_path
                    ) from exc
                written += result.frames
            if result.status is not FillStatus.CONTINUE:
                return written, result.status


__all__ = ["AudioFormat", "resolve_output_format", "encode_segment"]
