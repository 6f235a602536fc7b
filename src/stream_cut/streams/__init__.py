#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/streams/__init__.py
# AI-SUMMARY: 输入帧源与输出编码器的统一出口。

"""Frame sources and segment encoders."""

from .source import ArrayFrameSource, FrameSource, SoundFileSource, open_source
from .sink import AudioFormat, encode_segment, resolve_output_format

__all__ = [
    "ArrayFrameSource",
    "FrameSource",
    "SoundFileSource",
    "open_source",
    "AudioFormat",
    "encode_segment",
    "resolve_output_format",
]
