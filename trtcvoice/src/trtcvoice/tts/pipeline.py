import asyncio
import logging
import time
from typing import AsyncIterator

from fastapi.concurrency import run_in_threadpool

from .base import BaseTTS

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class PseudoStream:
    """
    Chunked delivery of an already complete synthesis result.

    The upstream API only answers with the whole clip, so the base64 audio is
    cut into `chunk_count` slices and handed out with a fixed `delay` between
    them for UI animation purposes.

    events() yields plain dicts:
        {"audio", "chunkIndex", "totalChunks", "isLast"[, "firstChunkTime"]}
        {"done": True, "processingTime"}
        {"error", "success": False}     on failure, as the last event
    """

    def __init__(self, tts: BaseTTS, chunk_count: int = 5, delay: float = 0.05):
        self._tts = tts
        self._chunk_count = chunk_count
        self._delay = delay

    async def events(self, text: str, voice_id: str) -> AsyncIterator[dict]:
        start = time.perf_counter()
        try:
            result = await run_in_threadpool(self._tts.synthesize, text, voice_id)
        except Exception as e:
            logger.exception("Streaming TTS error")
            yield {"error": str(e) or "Streaming TTS failed", "success": False}
            return

        total_ms = _elapsed_ms(start)
        chunks = BaseTTS.split_audio(result.audio, self._chunk_count)
        first_chunk_ms = 0

        for i, piece in enumerate(chunks):
            event = {
                "audio": piece,
                "chunkIndex": i,
                "totalChunks": len(chunks),
                "isLast": i == len(chunks) - 1,
            }
            if i == 0:
                first_chunk_ms = _elapsed_ms(start)
                event["firstChunkTime"] = first_chunk_ms
            yield event
            await asyncio.sleep(self._delay)

        logger.info(
            "Streaming response: %d bytes, first chunk: %dms, total: %dms",
            len(result.audio_bytes), first_chunk_ms, total_ms,
        )
        yield {"done": True, "processingTime": total_ms}
