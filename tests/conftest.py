# File: tests/conftest.py
# AI-SUMMARY: 提供 pytest 标记与收集期跳过策略（slow），以及生成测试音频帧的共享夹具。

import os
import sys
from pathlib import Path

import numpy as np
import pytest

# 确保可以通过包路径导入 src/
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _env_true(name: str) -> bool:
    return os.environ.get(name, '').strip() in {'1', 'true', 'True', 'YES', 'yes'}


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup('capability toggles')
    group.addoption('--runslow', action='store_true', default=False, help='run tests marked as slow')


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line('markers', 'slow: long-running streaming tests')


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    run_slow = config.getoption('--runslow') or _env_true('STREAM_CUT_RUN_SLOW')
    skip_slow = pytest.mark.skip(reason='slow test skipped; enable with --runslow or STREAM_CUT_RUN_SLOW=1')
    for item in items:
        if 'slow' in item.keywords and not run_slow:
            item.add_marker(skip_slow)


def make_tone(n: int, amplitude: float = 0.25, offset: float = 0.0) -> np.ndarray:
    """Stereo block that never touches the silence threshold."""
    left = amplitude * (1.0 + 0.5 * np.sin(np.arange(n) * 0.3 + offset))
    right = -left
    return np.stack([left, right], axis=1).astype(np.float64)


def make_silence(n: int) -> np.ndarray:
    return np.zeros((n, 2), dtype=np.float64)


@pytest.fixture
def three_part_frames() -> np.ndarray:
    """A(10) silence(5) B(10) silence(5) C(10): splits cleanly with 16-frame chunks."""
    return np.concatenate([
        make_tone(10, 0.5),
        make_silence(5),
        make_tone(10, 0.25, offset=1.0),
        make_silence(5),
        make_tone(10, 0.125, offset=2.0),
    ])
