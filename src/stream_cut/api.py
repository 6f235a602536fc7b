#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/api.py
# AI-SUMMARY: 对外统一 API：打开输入、构建采样器与驱动循环、逐段写出文件，并产出标准化 Manifest。

from __future__ import annotations

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config.settings import StreamCutConfig, load_config
from .core.sampler import SegmentingSampler
from .driver import SegmentDriver, SegmentRecord, validate_output_template
from .errors import FileOpenError
from .streams.sink import resolve_output_format
from .streams.source import open_source

logger = logging.getLogger(__name__)


def split_recording(
    input_path: Union[str, Path],
    output_template: str,
    *,
    config: Optional[StreamCutConfig] = None,
    manifest_path: Optional[Union[str, Path]] = None,
) -> Dict[str, Any]:
    """
    Split a recording into one file per silence-bounded segment.

    Args:
        input_path: Audio file readable by libsndfile (WAV, FLAC, OGG, ...).
        output_template: Output path with a single ``%d`` placeholder, filled
            with the segment index starting at 0.
        config: Loaded configuration; defaults to :func:`load_config`.
        manifest_path: When given, the manifest is also written there as JSON.

    Returns:
        Manifest dict describing the job, the written segments and the
        accumulated statistics.

    Raises:
        ArgumentError: malformed ``output_template`` (raised before any I/O).
        FileOpenError, SourceReadError, SinkWriteError: fatal I/O failures.
    """
    validate_output_template(output_template)
    cfg = config or load_config()
    started = time.perf_counter()

    with open_source(input_path) as source:
        fmt = resolve_output_format(source, output_template % 0, cfg.output.subtype)
        sampler = SegmentingSampler(source, cfg.sampler_config())
        driver = SegmentDriver(
            sampler,
            output_template,
            fmt,
            make_dirs=cfg.output.make_dirs,
        )
        segments = driver.run()
        audio_info = {
            'sr': source.sample_rate,
            'channels': source.channels,
            'subtype': source.subtype,
            'frames': source.frames,
            'output_subtype': fmt.subtype,
            'output_container': fmt.container,
        }

    snapshot = sampler.snapshot()
    logger.debug("Min: %f", snapshot.min)
    logger.debug("Max: %f", snapshot.max)
    logger.debug("Avg: %f", snapshot.average)
    logger.info("wrote %d segment(s) from %s", len(segments), input_path)

    source_path = Path(input_path).expanduser()
    manifest = _build_manifest(
        source_path=source_path,
        output_template=output_template,
        audio_info=audio_info,
        cfg=cfg,
        segments=segments,
        stats=snapshot.as_dict(),
        elapsed_s=time.perf_counter() - started,
    )

    if manifest_path:
        manifest['manifest_path'] = _write_manifest(manifest, Path(manifest_path))

    return manifest


def _build_manifest(
    *,
    source_path: Path,
    output_template: str,
    audio_info: Dict[str, Any],
    cfg: StreamCutConfig,
    segments: List[SegmentRecord],
    stats: Dict[str, Any],
    elapsed_s: float,
) -> Dict[str, Any]:
    stats = dict(stats)
    stats['num_segments'] = len(segments)
    return {
        'success': True,
        'job': {
            'source': source_path.as_posix(),
            'output_template': output_template,
        },
        'audio': dict(audio_info) | {'hash': f"sha256:{_compute_sha256(source_path)}"},
        'config': cfg.as_dict(),
        'segments': [segment.as_dict() for segment in segments],
        'stats': stats,
        'timings_ms': {'total': int(round(elapsed_s * 1000.0))},
    }


def _write_manifest(manifest: Dict[str, Any], path: Path) -> str:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as fh:
            json.dump(manifest, fh, ensure_ascii=False, indent=2)
    except OSError as exc:
        raise FileOpenError(f"error writing manifest '{path}': {exc}", path=path) from exc
    return path.as_posix()


def _compute_sha256(path: Path) -> str:
    digest = hashlib.sha256()
    with path.open('rb') as fh:
        for chunk in iter(lambda: fh.read(1024 * 1024), b''):
            digest.update(chunk)
    return digest.hexdigest()


__all__ = ['split_recording']
