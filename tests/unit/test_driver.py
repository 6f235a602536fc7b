# File: tests/unit/test_driver.py
# AI-SUMMARY: Unit tests for the segment driver loop and output template handling.

import numpy as np
import pytest
import soundfile as sf

from stream_cut.core.sampler import SamplerConfig, SegmentingSampler
from stream_cut.driver import SegmentDriver, format_segment_path, validate_output_template
from stream_cut.errors import ArgumentError, SourceReadError
from stream_cut.streams.sink import AudioFormat
from stream_cut.streams.source import ArrayFrameSource

FMT = AudioFormat(sample_rate=8000, subtype='FLOAT')


def _driver(frames, template, chunk=16, **source_kwargs):
    sampler = SegmentingSampler(ArrayFrameSource(frames, **source_kwargs), SamplerConfig(chunk_frames=chunk))
    return SegmentDriver(sampler, template, FMT, chunk_frames=chunk)


@pytest.mark.parametrize('template', ['a_%d.wav', 'out/%03d.wav', '100%%_%d.wav', 'seg-%i.flac'])
def test_valid_templates(template):
    assert validate_output_template(template) == template


@pytest.mark.parametrize('template', ['', 'a.wav', '%d_%d.wav', '%s.wav', 'a_%d%'])
def test_invalid_templates(template):
    with pytest.raises(ArgumentError):
        validate_output_template(template)


def test_format_segment_path():
    assert format_segment_path('x/part_%03d.wav', 7).as_posix() == 'x/part_007.wav'


def test_one_file_per_segment(tmp_path, three_part_frames):
    template = str(tmp_path / 'out' / 'part_%d.wav')
    records = _driver(three_part_frames, template).run()

    assert [r.index for r in records] == [0, 1, 2]
    assert [r.frames for r in records] == [10, 10, 10]
    assert [r.closed_by for r in records] == ['segment_end', 'segment_end', 'input_exhausted']
    assert records[0].duration_s == pytest.approx(10 / 8000)

    expected = [three_part_frames[0:10], three_part_frames[15:25], three_part_frames[30:40]]
    for record, part in zip(records, expected):
        data, sr = sf.read(record.path, always_2d=True)
        assert sr == 8000
        np.testing.assert_allclose(data, part, atol=1e-7)


def test_driver_stops_on_exhaustion_and_statistics_cover_all_frames(tmp_path, three_part_frames):
    driver = _driver(three_part_frames, str(tmp_path / 'p_%d.wav'))
    driver.run()
    assert driver.sampler.exhausted
    assert driver.sampler.snapshot().count == len(three_part_frames)
    assert not (tmp_path / 'p_3.wav').exists()


def test_empty_input_still_writes_segment_zero(tmp_path):
    records = _driver(np.empty((0, 2)), str(tmp_path / 'e_%d.wav')).run()
    assert len(records) == 1
    assert records[0].frames == 0
    assert records[0].closed_by == 'input_exhausted'
    assert sf.info(records[0].path).frames == 0


def test_source_error_aborts_loop(tmp_path, three_part_frames):
    driver = _driver(three_part_frames, str(tmp_path / 'f_%d.wav'), fail_after=1)
    with pytest.raises(SourceReadError):
        driver.run()
    assert len(driver.segments) == 1
    assert driver.sampler.failed
    # the interrupted segment file is left on disk
    assert (tmp_path / 'f_1.wav').exists()


def test_driver_reads_in_the_sampler_chunk_size(tmp_path):
    tone = np.full((3, 2), 0.5)
    frames = np.concatenate([tone, np.zeros((1, 2)), np.full((4, 2), 0.5)])
    sampler = SegmentingSampler(ArrayFrameSource(frames), SamplerConfig(chunk_frames=4))
    driver = SegmentDriver(sampler, str(tmp_path / 'c_%d.wav'), FMT)

    records = driver.run()

    assert driver.chunk_frames == 4
    # the first 4-frame chunk ends in silence and is dropped without a boundary
    assert [r.frames for r in records] == [4]
    assert records[0].closed_by == 'input_exhausted'
