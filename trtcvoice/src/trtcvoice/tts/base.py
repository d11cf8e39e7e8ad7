import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


class TTSError(Exception):
    """Raised when the remote speech service fails or returns nothing usable."""


@dataclass(frozen=True)
class SpeechResult:
    audio: str          # base64 PCM16LE as returned upstream
    sample_rate: int

    @property
    def audio_bytes(self) -> bytes:
        return base64.b64decode(self.audio)


class BaseTTS(ABC):
    sample_rate: int = 24000

    @abstractmethod
    def synthesize(self, text: str, voice_id: str) -> SpeechResult:
        """Convert text to audio"""
        pass

    @abstractmethod
    def clone_voice(self, voice_name: str, prompt_audio: bytes) -> str:
        """Register a new voice from a sample, returning its voice id"""
        pass

    @staticmethod
    def split_audio(audio_b64: str, chunk_count: int = 5) -> List[str]:
        """
        Slice an already complete base64 string into `chunk_count` pieces.
        The last piece takes whatever is left over.
        """
        if chunk_count < 1:
            raise ValueError("chunk_count must be at least 1")

        chunk_size = len(audio_b64) // chunk_count
        chunks = []
        for i in range(chunk_count):
            start = i * chunk_size
            end = len(audio_b64) if i == chunk_count - 1 else start + chunk_size
            chunks.append(audio_b64[start:end])
        return chunks
