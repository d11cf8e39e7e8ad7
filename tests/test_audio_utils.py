import base64

import numpy as np
import pytest

from trtcvoice.audio.wav import parse_wav
from trtcvoice.utils.audio import pcm16_b64_to_wav_b64, pcm16_to_wav


def test_pcm_wrapped_in_wav_container():
    pcm = (np.arange(24000, dtype="<i2") % 100).tobytes()
    wav = pcm16_to_wav(pcm, sr=24000)

    info = parse_wav(wav)
    assert info.sample_rate == 24000
    assert info.channel_count == 1
    assert info.bits_per_sample == 16
    assert info.data_byte_size == len(pcm)
    assert info.duration_seconds == pytest.approx(1.0)


def test_trailing_odd_byte_is_dropped():
    wav = pcm16_to_wav(b"\x01\x00\x02\x00\x03", sr=16000)
    assert parse_wav(wav).data_byte_size == 4


def test_base64_helper():
    pcm = np.zeros(16000, dtype="<i2").tobytes()
    out = pcm16_b64_to_wav_b64(base64.b64encode(pcm).decode(), sr=16000)
    assert parse_wav(base64.b64decode(out)).duration_seconds == pytest.approx(1.0)
