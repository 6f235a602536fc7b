# File: tests/unit/test_config.py
# AI-SUMMARY: Unit tests for layered configuration loading (defaults, YAML, env, overrides).

import pytest

from stream_cut.config import load_config
from stream_cut.config.settings import ENV_CONFIG_PATH
from stream_cut.core.silence import DEFAULT_SILENCE_THRESHOLD
from stream_cut.errors import ConfigError


def test_packaged_defaults():
    cfg = load_config(environ={})
    assert cfg.detection.silence_threshold == DEFAULT_SILENCE_THRESHOLD
    assert cfg.detection.chunk_frames == 512
    assert cfg.detection.keep_chunk_head is False
    assert cfg.output.subtype is None
    assert cfg.output.make_dirs is True
    assert cfg.logging.level == 'INFO'

    sampler_cfg = cfg.sampler_config()
    assert sampler_cfg.chunk_frames == 512
    assert sampler_cfg.silence_threshold == DEFAULT_SILENCE_THRESHOLD


def test_layers_apply_in_order(tmp_path):
    yaml_path = tmp_path / 'cfg.yaml'
    yaml_path.write_text(
        'detection:\n  chunk_frames: 1024\n  silence_threshold: 1.0e-4\noutput:\n  subtype: pcm_24\n',
        encoding='utf-8',
    )
    env = {
        'STREAM_CUT__DETECTION__CHUNK_FRAMES': '2048',
        'STREAM_CUT__DETECTION__KEEP_CHUNK_HEAD': 'true',
        'UNRELATED': 'x',
    }
    cfg = load_config(yaml_path, {'logging.level': 'debug', 'output.subtype': None}, environ=env)

    assert cfg.detection.chunk_frames == 2048
    assert cfg.detection.silence_threshold == pytest.approx(1e-4)
    assert cfg.detection.keep_chunk_head is True
    assert cfg.output.subtype == 'PCM_24'
    assert cfg.logging.level == 'DEBUG'


def test_config_path_from_environment(tmp_path):
    yaml_path = tmp_path / 'env.yaml'
    yaml_path.write_text('detection:\n  chunk_frames: 64\n', encoding='utf-8')
    cfg = load_config(environ={ENV_CONFIG_PATH: str(yaml_path)})
    assert cfg.detection.chunk_frames == 64


def test_env_float_values_are_parsed():
    cfg = load_config(environ={'STREAM_CUT__DETECTION__SILENCE_THRESHOLD': '1e-5'})
    assert cfg.detection.silence_threshold == pytest.approx(1e-5)


@pytest.mark.parametrize('overrides', [
    {'detection.chunk_frames': 0},
    {'detection.silence_threshold': -1.0},
    {'detection.chunk_frames': 'many'},
    {'logging.level': 'loud'},
])
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigError):
        load_config(overrides=overrides, environ={})


def test_bad_files_raise(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / 'missing.yaml', environ={})

    listing = tmp_path / 'list.yaml'
    listing.write_text('- 1\n- 2\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_config(listing, environ={})

    broken = tmp_path / 'broken.yaml'
    broken.write_text('detection: [unclosed\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_config(broken, environ={})


def test_non_integer_version_is_a_config_error(tmp_path):
    yaml_path = tmp_path / 'v.yaml'
    yaml_path.write_text('version: three\n', encoding='utf-8')
    with pytest.raises(ConfigError):
        load_config(yaml_path, environ={})
