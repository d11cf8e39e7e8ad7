import base64
import io

import numpy as np
import soundfile as sf


def pcm16_to_wav(pcm: bytes, sr: int = 24000, channels: int = 1) -> bytes:
    """
    pcm: raw little-endian 16-bit samples, interleaved when channels > 1
    sr: sample rate
    Returns a complete WAV file.
    """
    samples = np.frombuffer(pcm[: len(pcm) - len(pcm) % (2 * channels)], dtype="<i2")
    if channels > 1:
        samples = samples.reshape(-1, channels)

    buf = io.BytesIO()
    sf.write(buf, samples, sr, format="WAV", subtype="PCM_16")
    return buf.getvalue()


def pcm16_b64_to_wav_b64(audio_b64: str, sr: int = 24000) -> str:
    wav = pcm16_to_wav(base64.b64decode(audio_b64), sr=sr)
    return base64.b64encode(wav).decode("ascii")
