import base64
import struct

from trtcvoice.tts.base import BaseTTS, SpeechResult


def chunk(chunk_id: bytes, payload: bytes, declared_size=None) -> bytes:
    size = len(payload) if declared_size is None else declared_size
    pad = b"\x00" if len(payload) % 2 else b""
    return struct.pack("<4sI", chunk_id, size) + payload + pad


def fmt_chunk(sr=16000, bits=16, ch=1, audio_format=1) -> bytes:
    byte_rate = sr * ch * bits // 8
    block_align = ch * bits // 8
    return chunk(b"fmt ", struct.pack("<HHIIHH", audio_format, ch, sr, byte_rate, block_align, bits))


def riff(*chunks: bytes) -> bytes:
    body = b"WAVE" + b"".join(chunks)
    return struct.pack("<4sI", b"RIFF", len(body)) + body


def build_wav(seconds=6.0, sr=16000, bits=16, ch=1, extra=()) -> bytes:
    """Silent PCM WAV; `extra` chunks go between fmt and data."""
    data_len = int(round(seconds * sr)) * ch * (bits // 8)
    return riff(fmt_chunk(sr, bits, ch), *extra, chunk(b"data", b"\x00" * data_len))


class FakeTTS(BaseTTS):
    def __init__(self, audio=b"\x01\x02" * 1000, error=None, voice_id="voice-123"):
        self.audio = base64.b64encode(audio).decode()
        self.error = error
        self.voice_id = voice_id
        self.calls = []
        self.clone_calls = []

    def synthesize(self, text, voice_id):
        self.calls.append((text, voice_id))
        if self.error:
            raise self.error
        return SpeechResult(audio=self.audio, sample_rate=self.sample_rate)

    def clone_voice(self, voice_name, prompt_audio):
        self.clone_calls.append((voice_name, prompt_audio))
        if self.error:
            raise self.error
        return self.voice_id
