import pytest

from helpers import build_wav
from trtcvoice.audio.validation import (
    MIN_DURATION_SECONDS,
    SampleTooShort,
    SampleWarning,
    validate_clone_sample,
)
from trtcvoice.audio.wav import NotRiffWave


def test_ideal_sample_has_no_warnings():
    report = validate_clone_sample(build_wav(seconds=6.0))
    assert report.warnings == ()
    assert report.info.duration_seconds == pytest.approx(6.0)


def test_short_sample_is_rejected():
    with pytest.raises(SampleTooShort) as exc:
        validate_clone_sample(build_wav(seconds=3.9))
    assert exc.value.duration == pytest.approx(3.9)
    assert exc.value.code == "duration_too_short"


def test_minimum_is_four_seconds_not_five():
    assert MIN_DURATION_SECONDS == 4.0
    report = validate_clone_sample(build_wav(seconds=4.0))
    assert report.warnings == ()


def test_non_ideal_sample_rate_is_a_warning():
    report = validate_clone_sample(build_wav(seconds=6.0, sr=44100))
    assert report.warnings == (SampleWarning.NON_IDEAL_SAMPLE_RATE,)


def test_long_sample_is_a_warning():
    report = validate_clone_sample(build_wav(seconds=13.0))
    assert report.warnings == (SampleWarning.DURATION_OVER_RECOMMENDED,)


def test_both_warnings():
    report = validate_clone_sample(build_wav(seconds=15.0, sr=48000))
    assert set(report.warnings) == {
        SampleWarning.NON_IDEAL_SAMPLE_RATE,
        SampleWarning.DURATION_OVER_RECOMMENDED,
    }


def test_container_errors_propagate():
    with pytest.raises(NotRiffWave):
        validate_clone_sample(b"\x00" * 128)
