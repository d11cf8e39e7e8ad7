import struct
from dataclasses import dataclass

MIN_HEADER_SIZE = 44

_CHUNK_HEADER = struct.Struct("<4sI")
_FMT_BODY = struct.Struct("<HHIIHH")


class WavError(ValueError):
    """Base class for uploads that are not usable WAV containers."""

    code = "wav_error"


class TooSmall(WavError):
    code = "too_small"


class NotRiffWave(WavError):
    code = "not_riff_wave"


class MalformedChunkTable(WavError):
    code = "malformed_chunk_table"


class DegenerateFormat(WavError):
    code = "degenerate_format"


@dataclass(frozen=True)
class WaveFormatInfo:
    sample_rate: int
    channel_count: int
    bits_per_sample: int
    data_byte_size: int
    duration_seconds: float
    is_estimated: bool = False
    audio_format: int = 1

    def to_dict(self) -> dict:
        return {
            "sampleRate": self.sample_rate,
            "channelCount": self.channel_count,
            "bitsPerSample": self.bits_per_sample,
            "dataByteSize": self.data_byte_size,
            "durationSeconds": round(self.duration_seconds, 3),
            "isEstimated": self.is_estimated,
        }


def parse_wav(buffer: bytes) -> WaveFormatInfo:
    """
    Inspect the header of a RIFF/WAVE buffer.

    Walks the chunk table from offset 12 instead of trusting the canonical
    44-byte layout, so LIST/JUNK chunks before `fmt ` or `data` are skipped
    and a `data` chunk placed ahead of `fmt ` is still accepted.
    Only the declared size of `data` is used; the PCM payload is never read.

    Raises a WavError subclass when the buffer cannot be used.
    """
    size = len(buffer)
    if size < MIN_HEADER_SIZE:
        raise TooSmall(f"File too small to be a WAV file ({size} bytes)")

    if buffer[0:4] != b"RIFF" or buffer[8:12] != b"WAVE":
        raise NotRiffWave("Not a WAV container (missing RIFF/WAVE signature)")

    fmt = None
    data_size = None
    cursor = 12

    while cursor + _CHUNK_HEADER.size <= size:
        chunk_id, chunk_size = _CHUNK_HEADER.unpack_from(buffer, cursor)
        body = cursor + _CHUNK_HEADER.size

        if chunk_id == b"fmt ":
            if chunk_size < _FMT_BODY.size or body + _FMT_BODY.size > size:
                raise MalformedChunkTable("Truncated fmt chunk")
            fmt = _FMT_BODY.unpack_from(buffer, body)
        elif chunk_id == b"data":
            data_size = chunk_size

        # data may precede fmt; keep walking until both are known
        if fmt is not None and data_size is not None:
            break
        if chunk_size == 0:
            break

        # RIFF chunks are word aligned
        next_cursor = body + chunk_size + (chunk_size & 1)
        if next_cursor > size:
            break
        cursor = next_cursor

    if fmt is None:
        raise MalformedChunkTable("No fmt chunk found in WAV file")

    is_estimated = data_size is None
    if is_estimated:
        data_size = max(0, size - cursor - _CHUNK_HEADER.size)

    audio_format, channels, sample_rate, _byte_rate, _block_align, bits = fmt
    if sample_rate * channels * bits == 0:
        raise DegenerateFormat(
            f"Invalid format: sample_rate={sample_rate}, channels={channels}, bits={bits}"
        )

    duration = data_size / (sample_rate * channels * (bits / 8))

    return WaveFormatInfo(
        sample_rate=sample_rate,
        channel_count=channels,
        bits_per_sample=bits,
        data_byte_size=data_size,
        duration_seconds=duration,
        is_estimated=is_estimated,
        audio_format=audio_format,
    )
