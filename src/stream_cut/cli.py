#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/cli.py
# AI-SUMMARY: 命令行入口：解析参数、配置日志、加载配置并调用 split_recording，按错误类型返回退出码。

"""
stream-cut 命令行

将录音按静音切分为多个文件：

  stream-cut recording.wav out/part_%03d.wav
  stream-cut recording.flac part_%d.flac --chunk-frames 2048 --log-level debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import __version__
from .api import split_recording
from .config.settings import load_config
from .driver import validate_output_template
from .errors import ArgumentError, ConfigError, StreamCutError

_LOG_LEVELS = ['critical', 'error', 'warning', 'info', 'debug']


def setup_logging(level: str, fmt: str) -> None:
    """配置日志输出"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(
        level=level.upper(),
        format=fmt,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stream-cut',
        description='Split a recording into one file per silence-bounded segment.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  stream-cut recording.wav out/part_%03d.wav
  stream-cut recording.wav part_%d.wav --chunk-frames 4096 --manifest part.json
        """,
    )
    parser.add_argument('recording', help='input audio file')
    parser.add_argument('out', help='output path template with one %%d placeholder (segment index from 0)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '--log-level',
        type=str.lower,
        choices=_LOG_LEVELS,
        default=None,
        help='level of the output log (default from config: info)',
    )
    parser.add_argument('--config', default=None, help='YAML file overriding the packaged defaults')
    parser.add_argument('--threshold', type=float, default=None, help='silence threshold (default 3e-7)')
    parser.add_argument('--chunk-frames', type=int, default=None, help='frames per read; sets the gap granularity')
    parser.add_argument(
        '--keep-chunk-head',
        action='store_true',
        default=None,
        help='keep audio before a silence that runs to the end of a chunk',
    )
    parser.add_argument('--subtype', default=None, help='output subtype, e.g. PCM_16, PCM_24, FLOAT')
    parser.add_argument('--manifest', default=None, help='write a JSON manifest of the run to this path')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        'logging.level': args.log_level,
        'detection.silence_threshold': args.threshold,
        'detection.chunk_frames': args.chunk_frames,
        'detection.keep_chunk_head': args.keep_chunk_head,
        'output.subtype': args.subtype,
    }
    try:
        config = load_config(args.config, overrides)
    except ConfigError as exc:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger(__name__).error("%s", exc)
        return 2

    setup_logging(config.logging.level, config.logging.format)
    logger = logging.getLogger(__name__)

    try:
        validate_output_template(args.out)
    except ArgumentError as exc:
        logger.error("%s", exc)
        parser.print_usage(sys.stderr)
        return 2

    try:
        split_recording(args.recording, args.out, config=config, manifest_path=args.manifest)
    except StreamCutError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
