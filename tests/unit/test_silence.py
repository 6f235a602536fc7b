# File: tests/unit/test_silence.py
# AI-SUMMARY: Unit tests for the silence predicate and its vectorised mask.

import numpy as np

from stream_cut.core.silence import DEFAULT_SILENCE_THRESHOLD, is_silence, silence_mask


def test_threshold_boundary_is_exclusive():
    eps = 1e-12
    assert is_silence((DEFAULT_SILENCE_THRESHOLD - eps, 0.0))
    assert not is_silence((DEFAULT_SILENCE_THRESHOLD, 0.0))
    assert not is_silence((0.0, -DEFAULT_SILENCE_THRESHOLD))


def test_both_channels_must_be_quiet():
    assert is_silence((0.0, 0.0))
    assert is_silence((-1e-8, 2e-7))
    assert not is_silence((0.0, 0.3))
    assert not is_silence((-0.3, 0.0))


def test_custom_threshold():
    assert is_silence((0.005, -0.005), threshold=0.01)
    assert not is_silence((0.005, -0.005))


def test_mask_matches_scalar_predicate():
    frames = np.array([
        [0.0, 0.0],
        [DEFAULT_SILENCE_THRESHOLD, 0.0],
        [1e-9, -1e-9],
        [0.5, 0.0],
    ])
    mask = silence_mask(frames)
    assert mask.tolist() == [is_silence(row) for row in frames]
    assert mask.tolist() == [True, False, True, False]


def test_mask_of_empty_block():
    assert silence_mask(np.empty((0, 2))).shape == (0,)
