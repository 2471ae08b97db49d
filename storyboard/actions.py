# -*- coding: utf-8 -*-
"""
UI-facing operations. Each one brackets a single generator call with the
"generating" flag, routes the result into the store under the session it was
issued for, and reports the outcome as an ActionResult instead of raising.
"""
import logging
from typing import Optional, Tuple

from storyboard import store as reducers
from storyboard.data_models import ImageSize, Project
from storyboard.env_loader import Settings
from storyboard.errors import ActionResult, EmptyScriptError
from storyboard.gemini_image import generate_image, generate_thumbnail
from storyboard.gemini_speech import generate_speech
from storyboard.presets import PREVIEW_IMAGE_SIZE
from storyboard.project_io import export_zip
from storyboard.prompt_builders import build_character_preview_prompt, build_scene_image_prompt
from storyboard.script_analyzer import analyze_script
from storyboard.store import ProjectStore

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK_MSG = "Lỗi phân tích kịch bản. Vui lòng thử lại."
EXPORT_FAILED_MSG = "Lỗi xuất gói tài liệu."
NO_PROJECT = ActionResult(ok=False, error="Chưa có project. Hãy phân tích kịch bản trước.")


async def start_analysis(store: ProjectStore, client, script: str, style: str,
                         settings: Optional[Settings] = None) -> ActionResult:
    if not script or not script.strip():
        return ActionResult(ok=False, error=str(EmptyScriptError()))
    try:
        project = await analyze_script(client, script, style, settings)
    except Exception as e:
        logger.error("Script analysis failed: %s", e)
        return ActionResult(ok=False, error=str(e) or ANALYSIS_FALLBACK_MSG)
    store.replace(project)
    return ActionResult.success()


async def generate_character_preview(store: ProjectStore, client, name: str, style: Optional[str] = None,
                                     settings: Optional[Settings] = None) -> ActionResult:
    project = store.project
    if project is None:
        return NO_PROJECT
    character = project.find_character(name)
    if character is None:
        return ActionResult(ok=False, error=f"Không tìm thấy nhân vật: {name}")

    session = project.session_id
    store.dispatch(session, reducers.set_character_preview_flag, name, True)
    try:
        prompt = build_character_preview_prompt(character, style or project.style)
        image_url = await generate_image(client, prompt, PREVIEW_IMAGE_SIZE, settings)
    except Exception as e:
        store.dispatch(session, reducers.set_character_preview_flag, name, False)
        return ActionResult.failure("Lỗi tạo preview: ", e)
    store.dispatch(session, reducers.apply_character_image, name, image_url)
    return ActionResult.success()


async def process_scene_image(store: ProjectStore, client, scene_id: str, size: ImageSize,
                              settings: Optional[Settings] = None) -> ActionResult:
    project = store.project
    if project is None:
        return NO_PROJECT
    scene = project.find_scene(scene_id)
    if scene is None:
        return ActionResult(ok=False, error=f"Không tìm thấy cảnh: {scene_id}")

    session = project.session_id
    prompt = build_scene_image_prompt(scene, project.characters_for_scene(scene), project.style)
    store.dispatch(session, reducers.set_scene_image_flag, scene_id, True)
    try:
        image_url = await generate_image(client, prompt, size, settings)
    except Exception as e:
        # giữ nguyên ảnh cũ (nếu có), chỉ tắt cờ
        store.dispatch(session, reducers.set_scene_image_flag, scene_id, False)
        return ActionResult.failure("Lỗi tạo ảnh: ", e)
    store.dispatch(session, reducers.apply_scene_image, scene_id, image_url)
    return ActionResult.success()


async def process_scene_audio(store: ProjectStore, client, scene_id: str, voice: str,
                              settings: Optional[Settings] = None) -> ActionResult:
    project = store.project
    if project is None:
        return NO_PROJECT
    scene = project.find_scene(scene_id)
    if scene is None:
        return ActionResult(ok=False, error=f"Không tìm thấy cảnh: {scene_id}")

    session = project.session_id
    store.dispatch(session, reducers.set_scene_audio_flag, scene_id, True)
    try:
        audio_b64 = await generate_speech(client, scene.content, voice, settings)
    except Exception as e:
        store.dispatch(session, reducers.set_scene_audio_flag, scene_id, False)
        return ActionResult.failure("Lỗi tạo âm thanh: ", e)
    store.dispatch(session, reducers.apply_scene_audio, scene_id, audio_b64)
    return ActionResult.success()


async def generate_project_thumbnail(store: ProjectStore, client,
                                     settings: Optional[Settings] = None) -> ActionResult:
    project = store.project
    if project is None:
        return NO_PROJECT

    session = project.session_id
    store.dispatch(session, reducers.set_thumbnail_flag, True)
    try:
        url = await generate_thumbnail(client, project.title, project.style, project.characters, settings)
    except Exception as e:
        store.dispatch(session, reducers.set_thumbnail_flag, False)
        return ActionResult.failure("Không thể tạo thumbnail: ", e)
    store.dispatch(session, reducers.apply_thumbnail, url)
    return ActionResult.success()


def prepare_export(project: Project, voice: str) -> Tuple[Optional[bytes], ActionResult]:
    """Đóng gói zip; payload hỏng (ảnh không giải mã được...) -> (None, lỗi) thay vì raise."""
    try:
        data = export_zip(project, voice)
    except Exception as e:
        logger.error("Export failed for %r: %s", project.title, e)
        return None, ActionResult(ok=False, error=EXPORT_FAILED_MSG)
    return data, ActionResult.success()
