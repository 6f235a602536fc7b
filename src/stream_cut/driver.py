#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/driver.py
# AI-SUMMARY: 片段驱动循环：为每个片段生成输出文件名并反复调用编码器，直到采样器报告输入结束或出错。

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.sampler import SegmentingSampler
from .errors import ArgumentError, FileOpenError
from .streams.sink import AudioFormat, encode_segment

logger = logging.getLogger(__name__)

_CONVERSION = re.compile(r"%(?:%|[-+ #0]*\d*(?:\.\d+)?([a-zA-Z]))")


@dataclass
class SegmentRecord:
    index: int
    path: str
    frames: int
    duration_s: float
    closed_by: str

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_output_template(template: str) -> str:
    """Ensure ``template`` holds exactly one integer placeholder such as ``%d``."""
    if not template:
        raise ArgumentError("output template is empty")
    conversions = [m.group(1) for m in _CONVERSION.finditer(template) if m.group(1)]
    if len(conversions) != 1 or conversions[0] not in {"d", "i"}:
        raise ArgumentError(f"output file needs a single %d formatter: '{template}'")
    try:
        template % 0
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"malformed output template '{template}': {exc}") from exc
    return template


def format_segment_path(template: str, index: int) -> Path:
    return Path(template % int(index))


class SegmentDriver:
    """Write one output file per segment until the sampler runs dry."""

    def __init__(
        self,
        sampler: SegmentingSampler,
        output_template: str,
        fmt: AudioFormat,
        *,
        chunk_frames: Optional[int] = None,
        make_dirs: bool = True,
    ) -> None:
        self.sampler = sampler
        self.output_template = validate_output_template(output_template)
        self.fmt = fmt
        self.chunk_frames = int(chunk_frames or sampler.config.chunk_frames)
        self.make_dirs = make_dirs
        self.segments: List[SegmentRecord] = []

    def run(self) -> List[SegmentRecord]:
        index = len(self.segments)
        while not self.sampler.exhausted and self.sampler.error is None:
            path = format_segment_path(self.output_template, index)
            logger.info("NEW FILE %s", path)
            self._prepare_parent(path)
            frames, status = encode_segment(self.sampler, path, self.fmt, self.chunk_frames)
            record = SegmentRecord(
                index=index,
                path=path.as_posix(),
                frames=frames,
                duration_s=frames / float(self.fmt.sample_rate),
                closed_by=status.value,
            )
            self.segments.append(record)
            logger.debug("segment %d closed (%s): %d frames", index, status.value, frames)
            index += 1
        return self.segments

    def _prepare_parent(self, path: Path) -> None:
        if not self.make_dirs:
            return
        parent = path.parent
        if str(parent) in {"", "."}:
            return
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileOpenError(f"error creating output directory '{parent}': {exc}", path=parent) from exc


__all__ = ["SegmentRecord", "SegmentDriver", "validate_output_template", "format_segment_path"]
