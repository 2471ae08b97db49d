"""Gemini TTS: one narration request per scene, raw PCM payload helpers."""

import asyncio
import base64
import io
import logging
import wave
from typing import Optional

from google.genai import types

from storyboard.env_loader import Settings
from storyboard.errors import NoAudioDataError
from storyboard.gemini_helpers import first_candidate_parts
from storyboard.retry import with_retry

logger = logging.getLogger(__name__)

# Định dạng payload TTS: PCM little-endian 16-bit, mono, 24kHz, không header
SAMPLE_RATE = 24000
CHANNELS = 1
SAMPLE_WIDTH = 2


def _speech_config(voice: str) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_modalities=["AUDIO"],
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
            )
        ),
    )


async def generate_speech(client, text: str, voice: str, settings: Optional[Settings] = None) -> str:
    """Trả về chuỗi base64 của PCM thô; thiếu inline audio ở part đầu -> NoAudioDataError."""
    settings = settings or Settings()

    @with_retry(settings.max_retries, settings.initial_backoff)
    async def _call() -> str:
        resp = await asyncio.to_thread(
            client.models.generate_content,
            model=settings.tts_model,
            contents=text,
            config=_speech_config(voice),
        )
        parts = first_candidate_parts(resp)
        inline = getattr(parts[0], "inline_data", None) if parts else None
        data = getattr(inline, "data", None) if inline is not None else None
        if not data:
            raise NoAudioDataError()
        if isinstance(data, str):
            return data
        return base64.b64encode(data).decode("ascii")

    audio_b64 = await _call()
    logger.info("Generated speech with voice %s (%d chars)", voice, len(text))
    return audio_b64


def decode_base64_audio(b64: str) -> bytes:
    return base64.b64decode(b64)


def pcm_to_wav(pcm: bytes) -> bytes:
    """Bọc PCM thô bằng header WAV chuẩn 44 byte (RIFF/WAVE/fmt /data)."""
    frame_size = SAMPLE_WIDTH * CHANNELS
    usable = len(pcm) - (len(pcm) % frame_size)
    out = io.BytesIO()
    with wave.open(out, "wb") as wavf:
        wavf.setnchannels(CHANNELS)
        wavf.setsampwidth(SAMPLE_WIDTH)
        wavf.setframerate(SAMPLE_RATE)
        wavf.writeframes(pcm[:usable])
    return out.getvalue()


def pcm_duration_seconds(pcm: bytes) -> float:
    return len(pcm) / float(SAMPLE_RATE * SAMPLE_WIDTH * CHANNELS)
