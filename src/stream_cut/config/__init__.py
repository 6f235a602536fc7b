#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/config/__init__.py
# AI-SUMMARY: 配置工具集入口，提供分层加载与结构化配置对象。

"""Configuration helpers for stream-cut."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    DetectionConfig,
    LoggingConfig,
    OutputConfig,
    StreamCutConfig,
    config_from_mapping,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DetectionConfig",
    "LoggingConfig",
    "OutputConfig",
    "StreamCutConfig",
    "config_from_mapping",
    "load_config",
]
