import json
import logging
import os
import time
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from ..audio.validation import SampleTooShort, validate_clone_sample
from ..audio.wav import WavError
from ..config import Settings
from ..store import VoiceStore
from ..tts.base import BaseTTS, TTSError
from ..tts.pipeline import PseudoStream
from ..tts.trtc import TrtcTTS
from ..utils.audio import pcm16_b64_to_wav_b64
from .schemas import TTSRequest

logger = logging.getLogger(__name__)

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse({"success": False, "error": message, **extra}, status_code=status_code)


def _preview(text: str) -> str:
    return f"{text[:30]}..." if len(text) > 30 else text


def get_app(settings: Settings, tts: Optional[BaseTTS] = None, store: Optional[VoiceStore] = None) -> FastAPI:
    tts = tts or TrtcTTS(settings)
    store = store or VoiceStore(settings.voices_file)
    stream = PseudoStream(tts, chunk_count=settings.stream_chunk_count, delay=settings.stream_chunk_delay)

    app = FastAPI(title="trtcvoice")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        return _error(400, f"Invalid request: {where}: {first.get('msg', 'malformed body')}", code="invalid_request")

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception):
        logger.error("Server error on %s", request.url.path, exc_info=exc)
        return _error(500, str(exc) or "Internal server error")

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    @app.post("/api/tts")
    async def text_to_speech(req: TTSRequest):
        if not req.text:
            return _error(400, "Text must not be empty")

        start = time.perf_counter()
        logger.info('TTS request: "%s", voice: %s', _preview(req.text), req.voice_id)
        try:
            result = await run_in_threadpool(tts.synthesize, req.text, req.voice_id)
        except TTSError as e:
            logger.exception("TTS error")
            return _error(500, str(e) or "TTS failed")

        processing_ms = int((time.perf_counter() - start) * 1000)
        logger.info("TTS response: %d bytes, %dms", len(result.audio_bytes), processing_ms)

        body = {
            "success": True,
            "audio": result.audio,
            "sampleRate": result.sample_rate,
            "processingTime": processing_ms,
        }
        if req.format == "wav":
            body["audio"] = pcm16_b64_to_wav_b64(result.audio, sr=result.sample_rate)
            body["format"] = "wav"
        return body

    @app.get("/api/tts/stream")
    async def text_to_speech_stream(text: str = "", voice: Optional[str] = None, voiceId: Optional[str] = None):
        if not text:
            return _error(400, "Text must not be empty")

        voice_id = voice or voiceId
        logger.info('Streaming TTS: "%s", voice: %s', _preview(text), voice_id)

        async def gen():
            yield ":ok\n\n"
            async for event in stream.events(text, voice_id):
                yield f"data: {json.dumps(event)}\n\n"

        return StreamingResponse(gen(), media_type="text/event-stream", headers=SSE_HEADERS)

    @app.post("/api/voice-clone")
    async def voice_clone(
        voiceName: Optional[str] = Form(None),
        audioFile: Optional[UploadFile] = File(None),
    ):
        if not voiceName:
            return _error(400, "Voice name must not be empty")
        if audioFile is None:
            return _error(400, "Please upload an audio file")

        audio = await audioFile.read()
        if len(audio) > settings.max_upload_bytes:
            return _error(413, f"File too large (limit {settings.max_upload_bytes} bytes)", code="too_large")

        logger.info('Voice clone: "%s", %.1fKB', voiceName, len(audio) / 1024)
        try:
            report = validate_clone_sample(audio)
        except (WavError, SampleTooShort) as e:
            logger.info("Rejected clone sample for %s: %s", voiceName, e)
            return _error(400, str(e), code=e.code)

        try:
            voice_id = await run_in_threadpool(tts.clone_voice, voiceName, audio)
        except TTSError as e:
            logger.exception("Voice clone error")
            return _error(500, str(e) or "Voice clone failed")

        try:
            await run_in_threadpool(store.add, voice_id, voiceName)
        except OSError:
            # the voice exists upstream, so the caller still gets its id
            logger.exception("Could not record cloned voice %s", voice_id)
        return {
            "success": True,
            "voiceId": voice_id,
            "voiceName": voiceName,
            "warnings": [w.value for w in report.warnings],
            "sample": report.info.to_dict(),
        }

    @app.get("/api/voices")
    async def voices():
        cloned = await run_in_threadpool(store.list)
        return {"success": True, "voices": settings.voices, "clonedVoices": cloned}

    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def main():
    load_dotenv()

    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app = get_app(settings)
    logger.info("TTS server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
