#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/errors.py
# AI-SUMMARY: 统一异常层级：读源失败、写出失败、文件打开失败、参数与配置错误。

"""Exception hierarchy shared by the stream-cut modules."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class StreamCutError(Exception):
    """Base class for every fatal stream-cut failure."""

    def __init__(self, message: str, *, path: Optional[PathLike] = None) -> None:
        self.path = str(path) if path is not None else None
        if self.path and self.path not in message:
            message = f"{message} ({self.path})"
        super().__init__(message)


class SourceReadError(StreamCutError):
    """Decoding the input stream failed mid-read. Sticky on the sampler."""


class SinkWriteError(StreamCutError):
    """Writing a segment file failed."""


class FileOpenError(StreamCutError):
    """Input could not be opened/decoded or an output file could not be created."""


class ArgumentError(StreamCutError, ValueError):
    """Malformed invocation, reported before any I/O happens."""


class ConfigError(StreamCutError, ValueError):
    """Invalid configuration value or file."""


__all__ = [
    "StreamCutError",
    "SourceReadError",
    "SinkWriteError",
    "FileOpenError",
    "ArgumentError",
    "ConfigError",
]
