# -*- coding: utf-8 -*-
import logging
from typing import Optional

from storyboard.actions import NO_PROJECT, generate_project_thumbnail, process_scene_audio, process_scene_image
from storyboard.data_models import ImageSize
from storyboard.env_loader import Settings
from storyboard.errors import ActionResult
from storyboard.store import ProjectStore

logger = logging.getLogger(__name__)

STALE_SESSION = ActionResult(ok=False, error="Project đã được thay thế trong lúc xử lý; dừng tự động.")


async def auto_process_all(store: ProjectStore, client, size: ImageSize, voice: str,
                           settings: Optional[Settings] = None) -> ActionResult:
    """
    Thumbnail trước (nếu chưa có), rồi lần lượt từng cảnh: ảnh -> âm thanh.
    Tuần tự, không song song; bước nào lỗi thì dừng vòng lặp và trả lỗi đó.
    """
    project = store.project
    if project is None:
        return NO_PROJECT
    session = project.session_id
    scene_ids = [s.id for s in project.scenes]

    if not project.thumbnail_url:
        result = await generate_project_thumbnail(store, client, settings)
        if not result.ok:
            return result

    for scene_id in scene_ids:
        if store.session_id != session:
            return STALE_SESSION
        if not store.scene(scene_id).image_url:
            result = await process_scene_image(store, client, scene_id, size, settings)
            if not result.ok:
                return result
        if store.session_id != session:
            return STALE_SESSION
        if not store.scene(scene_id).audio_url:
            result = await process_scene_audio(store, client, scene_id, voice, settings)
            if not result.ok:
                return result

    logger.info("Auto-processed %d scenes for %r", len(scene_ids), project.title)
    return ActionResult.success()
