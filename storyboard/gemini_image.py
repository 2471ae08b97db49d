# storyboard/gemini_image.py
# -*- coding: utf-8 -*-
import asyncio
import base64
import io
import logging
from typing import Iterable, Optional

from google.genai import types
from PIL import Image

from storyboard.data_models import Character, ImageSize
from storyboard.env_loader import Settings
from storyboard.errors import NoImageDataError
from storyboard.gemini_helpers import iter_inline_data
from storyboard.presets import ASPECT_RATIO, IMAGE_PREAMBLE, THUMBNAIL_IMAGE_SIZE
from storyboard.prompt_builders import build_thumbnail_prompt
from storyboard.retry import with_retry

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _to_data_uri(data, mime_type: Optional[str]) -> str:
    b64 = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'image/png'};base64,{b64}"


def decode_data_uri(uri: str) -> bytes:
    """'data:image/png;base64,....' -> bytes (chấp nhận cả chuỗi base64 trần)."""
    payload = uri.split(",", 1)[1] if uri.startswith("data:") else uri
    return base64.b64decode(payload)


def ensure_png(data: bytes) -> bytes:
    """Model có thể trả JPEG/WebP; file xuất luôn là .png nên chuyển mã khi cần."""
    if data.startswith(PNG_SIGNATURE):
        return data
    with Image.open(io.BytesIO(data)) as img:
        out = io.BytesIO()
        img.save(out, format="PNG")
    return out.getvalue()


async def _generate(client, prompt: str, size: ImageSize, settings: Settings) -> str:
    @with_retry(settings.max_retries, settings.initial_backoff)
    async def _call() -> str:
        resp = await asyncio.to_thread(
            client.models.generate_content,
            model=settings.image_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                image_config=types.ImageConfig(aspect_ratio=ASPECT_RATIO, image_size=size),
            ),
        )
        for inline in iter_inline_data(resp):
            return _to_data_uri(inline.data, getattr(inline, "mime_type", None))
        raise NoImageDataError()

    uri = await _call()
    logger.info("Generated %s image (%d chars prompt)", size, len(prompt))
    return uri


async def generate_image(client, prompt: str, size: ImageSize, settings: Optional[Settings] = None) -> str:
    """
    Sinh 1 ảnh 16:9 từ prompt (thêm preamble phong cách hoạt hình điện ảnh).
    Trả về data URI; không có ảnh trong response -> NoImageDataError.
    """
    return await _generate(client, f"{IMAGE_PREAMBLE}: {prompt}", size, settings or Settings())


async def generate_thumbnail(
    client,
    title: str,
    style: str,
    characters: Iterable[Character],
    settings: Optional[Settings] = None,
) -> str:
    prompt = build_thumbnail_prompt(title, style, characters)
    return await _generate(client, prompt, THUMBNAIL_IMAGE_SIZE, settings or Settings())
