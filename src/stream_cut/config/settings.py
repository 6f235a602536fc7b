#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# File: src/stream_cut/config/settings.py
# AI-SUMMARY: 配置结构体与加载逻辑：包内默认 YAML -> 外部 YAML -> 环境变量 -> 运行时覆盖，逐层深度合并。

from __future__ import annotations

import copy
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ..core.sampler import DEFAULT_CHUNK_FRAMES, SamplerConfig
from ..core.silence import DEFAULT_SILENCE_THRESHOLD
from ..errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yaml")
ENV_CONFIG_PATH = "STREAM_CUT_CONFIG_PATH"
ENV_PREFIX = "STREAM_CUT__"


def _deep_merge(base: Dict[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    """递归合并 patch 到 base，遇到 dict 继续深入，否则直接覆盖。"""
    for key, value in patch.items():
        if isinstance(value, Mapping):
            node = base.get(key)
            if isinstance(node, dict):
                base[key] = _deep_merge(node, value)
            else:
                base[key] = copy.deepcopy(dict(value))
        else:
            base[key] = copy.deepcopy(value)
    return base


def _set_nested(config: Dict[str, Any], dotted_path: str, value: Any) -> None:
    parts = [part for part in str(dotted_path).split(".") if part]
    if not parts:
        return
    cursor = config
    for part in parts[:-1]:
        node = cursor.get(part)
        if not isinstance(node, dict):
            node = {}
            cursor[part] = node
        cursor = node
    cursor[parts[-1]] = value


def _parse_env_value(raw: str) -> Any:
    value = raw.strip()
    lower = value.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    try:
        if "." in value or "e" in lower:
            return float(value)
        return int(value)
    except ValueError:
        return raw


def _apply_env_overrides(config: Dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    for key, raw in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = [part.lower() for part in key[len(ENV_PREFIX):].split("__") if part]
        if not parts:
            continue
        _set_nested(config, ".".join(parts), _parse_env_value(raw))
    return config


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    yaml_path = Path(path)
    if not yaml_path.exists():
        raise ConfigError("config file not found", path=yaml_path)
    try:
        with open(yaml_path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML: {exc}", path=yaml_path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("config root must be a mapping", path=yaml_path)
    return data


@dataclass
class DetectionConfig:
    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD
    chunk_frames: int = DEFAULT_CHUNK_FRAMES
    keep_chunk_head: bool = False


@dataclass
class OutputConfig:
    subtype: Optional[str] = None
    make_dirs: bool = True


@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class StreamCutConfig:
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    version: int = 1

    def sampler_config(self) -> SamplerConfig:
        return SamplerConfig(
            silence_threshold=self.detection.silence_threshold,
            chunk_frames=self.detection.chunk_frames,
            keep_chunk_head=self.detection.keep_chunk_head,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_mapping(data: Mapping[str, Any]) -> StreamCutConfig:
    """Build and validate a :class:`StreamCutConfig` from a merged mapping."""
    detection = dict(data.get("detection") or {})
    output = dict(data.get("output") or {})
    log_cfg = dict(data.get("logging") or {})

    try:
        threshold = float(detection.get("silence_threshold", DEFAULT_SILENCE_THRESHOLD))
        chunk_frames = int(detection.get("chunk_frames", DEFAULT_CHUNK_FRAMES))
        version = int(data.get("version", 1))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid config value: {exc}") from exc
    if not threshold > 0:
        raise ConfigError(f"detection.silence_threshold must be positive, got {threshold}")
    if chunk_frames < 1:
        raise ConfigError(f"detection.chunk_frames must be >= 1, got {chunk_frames}")

    subtype = output.get("subtype")
    level = str(log_cfg.get("level", LoggingConfig.level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"unknown log level: {level}")

    return StreamCutConfig(
        detection=DetectionConfig(
            silence_threshold=threshold,
            chunk_frames=chunk_frames,
            keep_chunk_head=bool(detection.get("keep_chunk_head", False)),
        ),
        output=OutputConfig(
            subtype=str(subtype).upper() if subtype else None,
            make_dirs=bool(output.get("make_dirs", True)),
        ),
        logging=LoggingConfig(level=level, format=str(log_cfg.get("format", LoggingConfig.format))),
        version=version,
    )


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> StreamCutConfig:
    """Load the layered configuration.

    Args:
        path: Optional YAML file; falls back to ``STREAM_CUT_CONFIG_PATH``.
        overrides: Dotted keys applied last, e.g. ``{"detection.chunk_frames": 1024}``.
        environ: Environment mapping, defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    merged = load_yaml(DEFAULT_CONFIG_PATH)

    external = path or env.get(ENV_CONFIG_PATH)
    if external:
        merged = _deep_merge(merged, load_yaml(external))
        logger.debug("loaded config overrides from %s", external)

    merged = _apply_env_overrides(merged, env)

    for dotted_path, value in (overrides or {}).items():
        if value is None:
            continue
        _set_nested(merged, dotted_path, value)

    return config_from_mapping(merged)


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_CONFIG_PATH",
    "ENV_PREFIX",
    "DetectionConfig",
    "OutputConfig",
    "LoggingConfig",
    "StreamCutConfig",
    "config_from_mapping",
    "load_config",
    "load_yaml",
]
