import asyncio
import json
from typing import Any, Dict, Iterator, Optional

from google.genai import types


def first_candidate_parts(response) -> list:
    """response.candidates[0].content.parts, hoặc [] nếu thiếu bất kỳ tầng nào."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


def iter_inline_data(response) -> Iterator[Any]:
    for part in first_candidate_parts(response):
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            yield inline


async def gemini_json(client, model: str, prompt: str, schema: Optional[Dict[str, Any]] = None) -> Any:
    if client is None:
        raise RuntimeError("Client chưa được khởi tạo")
    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=schema,
    )
    resp = await asyncio.to_thread(client.models.generate_content, model=model, contents=prompt, config=config)
    return json.loads(resp.text or "{}")
