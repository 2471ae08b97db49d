# -*- coding: utf-8 -*-
"""
Project state aggregator.

Reducers are pure: they take a Project snapshot and return a new one, touching
only the entity addressed by its stable key (character name or scene id).
ProjectStore holds the single current snapshot and applies reducers with a
compare-and-swap on session_id, so results of calls issued against a project
that has since been replaced are dropped instead of landing on the new one.
"""
import logging
from typing import Callable, Optional

from storyboard.data_models import Character, Project, Scene

logger = logging.getLogger(__name__)

Reducer = Callable[..., Project]


# ====== 1) Character reducers ======

def _update_character(project: Project, name: str, **changes) -> Project:
    if project.find_character(name) is None:
        return project
    characters = [
        c.model_copy(update=changes) if c.name == name else c
        for c in project.characters
    ]
    return project.model_copy(update={"characters": characters})


def set_character_preview_flag(project: Project, name: str, generating: bool) -> Project:
    return _update_character(project, name, is_generating_preview=generating)


def apply_character_image(project: Project, name: str, image_url: str) -> Project:
    return _update_character(project, name, image_url=image_url, is_generating_preview=False)


def update_character_description(project: Project, name: str, description: str) -> Project:
    return _update_character(project, name, description=description)


def update_character_voice(project: Project, name: str, voice: str) -> Project:
    # validate qua model để voice ngoài enum bị từ chối
    current = project.find_character(name)
    if current is None:
        return project
    Character.model_validate({**current.model_dump(), "voice": voice})
    return _update_character(project, name, voice=voice)


# ====== 2) Scene reducers ======

def _update_scene(project: Project, scene_id: str, **changes) -> Project:
    if project.find_scene(scene_id) is None:
        return project
    scenes = [
        s.model_copy(update=changes) if s.id == scene_id else s
        for s in project.scenes
    ]
    return project.model_copy(update={"scenes": scenes})


def set_scene_image_flag(project: Project, scene_id: str, generating: bool) -> Project:
    return _update_scene(project, scene_id, is_generating_image=generating)


def apply_scene_image(project: Project, scene_id: str, image_url: str) -> Project:
    return _update_scene(project, scene_id, image_url=image_url, is_generating_image=False)


def set_scene_audio_flag(project: Project, scene_id: str, generating: bool) -> Project:
    return _update_scene(project, scene_id, is_generating_audio=generating)


def apply_scene_audio(project: Project, scene_id: str, audio_url: str) -> Project:
    return _update_scene(project, scene_id, audio_url=audio_url, is_generating_audio=False)


def update_scene_visual_prompt(project: Project, scene_id: str, visual_prompt: str) -> Project:
    return _update_scene(project, scene_id, visual_prompt=visual_prompt)


def update_scene_content(project: Project, scene_id: str, content: str) -> Project:
    return _update_scene(project, scene_id, content=content)


# ====== 3) Thumbnail reducers ======

def set_thumbnail_flag(project: Project, generating: bool) -> Project:
    return project.model_copy(update={"is_generating_thumbnail": generating})


def apply_thumbnail(project: Project, thumbnail_url: str) -> Project:
    return project.model_copy(update={"thumbnail_url": thumbnail_url, "is_generating_thumbnail": False})


# ====== 4) Store ======

class ProjectStore:
    def __init__(self, project: Optional[Project] = None):
        self._project = project

    @property
    def project(self) -> Optional[Project]:
        return self._project

    @property
    def session_id(self) -> Optional[str]:
        return self._project.session_id if self._project else None

    def replace(self, project: Optional[Project]) -> None:
        """Phân tích mới thay thế toàn bộ project cũ (không merge)."""
        self._project = project

    def dispatch(self, session_id: str, reducer: Reducer, *args) -> Optional[Project]:
        """
        Apply reducer(current, *args) iff the current snapshot still belongs to
        session_id. Returns the new snapshot, or None when the update is stale.
        """
        current = self._project
        if current is None or current.session_id != session_id:
            logger.info("Dropping stale %s for session %s", reducer.__name__, session_id)
            return None
        self._project = reducer(current, *args)
        return self._project

    def scene(self, scene_id: str) -> Optional[Scene]:
        return self._project.find_scene(scene_id) if self._project else None
