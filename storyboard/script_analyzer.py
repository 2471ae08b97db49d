# -*- coding: utf-8 -*-
import json
import logging
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from storyboard.data_models import Character, Project, Scene, Voice
from storyboard.env_loader import Settings
from storyboard.errors import AnalysisError, EmptyScriptError
from storyboard.gemini_helpers import gemini_json
from storyboard.prompt_builders import ANALYSIS_SCHEMA, build_analysis_prompt
from storyboard.retry import with_retry

logger = logging.getLogger(__name__)


# Hình dạng JSON mà model trả về (camelCase theo ANALYSIS_SCHEMA)
class _CharacterPayload(BaseModel):
    name: str
    description: str
    voice: Voice


class _ScenePayload(BaseModel):
    title: str
    content: str
    visual_prompt: str = Field(alias="visualPrompt")
    characters_in_scene: List[str] = Field(alias="charactersInScene")


class _AnalysisPayload(BaseModel):
    title: str
    characters: List[_CharacterPayload]
    scenes: List[_ScenePayload]


def project_from_payload(data, script: str, style: str) -> Project:
    payload = _AnalysisPayload.model_validate(data)
    return Project(
        title=payload.title,
        original_script=script,
        style=style,
        characters=[Character(**c.model_dump()) for c in payload.characters],
        scenes=[
            Scene(id=f"scene-{i}", **s.model_dump())
            for i, s in enumerate(payload.scenes)
        ],
    )


async def analyze_script(client, script: str, style: str, settings: Optional[Settings] = None) -> Project:
    """
    Gửi kịch bản + schema lên model, nhận về title / nhân vật / danh sách cảnh.
    Mọi lỗi (gọi API hoặc parse) được gói thành AnalysisError; không có project dở dang.
    """
    if not script or not script.strip():
        raise EmptyScriptError()
    settings = settings or Settings()

    @with_retry(settings.max_retries, settings.initial_backoff)
    async def _call():
        return await gemini_json(client, settings.text_model, build_analysis_prompt(script), ANALYSIS_SCHEMA)

    try:
        data = await _call()
        project = project_from_payload(data, script, style)
    except (ValidationError, json.JSONDecodeError) as e:
        raise AnalysisError(f"Phản hồi phân tích không đúng cấu trúc: {e}") from e
    except Exception as e:
        raise AnalysisError(str(e) or "Lỗi phân tích kịch bản. Vui lòng thử lại.") from e

    logger.info(
        "Analyzed script %r: %d characters, %d scenes",
        project.title, len(project.characters), len(project.scenes),
    )
    return project
