#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/__init__.py
# AI-SUMMARY: 顶层包入口，聚合 stream_cut 的对外 API。

"""Stream an audio recording into silence-bounded segment files."""

__version__ = "1.0.0"

from .api import split_recording

__all__ = ['split_recording', '__version__']
