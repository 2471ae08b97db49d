# -*- coding: utf-8 -*-
import io
import re
import zipfile
from typing import List

from storyboard.data_models import Project
from storyboard.gemini_image import decode_data_uri, ensure_png
from storyboard.gemini_speech import decode_base64_audio, pcm_to_wav

_UNSAFE_TITLE_CHARS = re.compile(r'[/\\?%*:|"<>]')

VISUALS_DIR = "01_Visuals"
AUDIO_DIR = "02_Audio"
THUMBNAIL_FILE = "00_Thumbnail.png"
PROMPT_LOG_FILE = "00_Prompts_And_Script.txt"


def sanitize_title(title: str) -> str:
    return _UNSAFE_TITLE_CHARS.sub("-", title or "")


def scene_file_stem(index: int) -> str:
    """index tính từ 0 -> 'Scene_001'."""
    return f"Scene_{index + 1:03d}"


def archive_file_name(project: Project) -> str:
    return f"{sanitize_title(project.title)}_Ready_To_Edit.zip"


def build_prompt_log(project: Project, voice: str) -> str:
    lines: List[str] = [
        f"PROJECT: {project.title}",
        f"STYLE: {project.style}",
        f"VOICE: {voice}",
        "",
        "SCENES LOG:",
        "",
    ]
    for idx, scene in enumerate(project.scenes):
        lines.append(f"--- {scene_file_stem(idx)} ---")
        lines.append(f"CONTENT: {scene.content}")
        lines.append(f"VISUAL PROMPT: {scene.visual_prompt}")
        lines.append("")
    return "\n".join(lines) + "\n"


def export_zip(project: Project, voice: str) -> bytes:
    """
    Gói project thành zip dựng phim:
      <title>/00_Thumbnail.png, 00_Prompts_And_Script.txt,
      01_Visuals/Scene_NNN.png, 02_Audio/Scene_NNN.wav
    Cảnh nào thiếu ảnh/âm thanh thì bỏ qua file đó.
    """
    root = sanitize_title(project.title)
    mem = io.BytesIO()
    with zipfile.ZipFile(mem, "w", zipfile.ZIP_DEFLATED) as z:
        if project.thumbnail_url:
            z.writestr(f"{root}/{THUMBNAIL_FILE}", ensure_png(decode_data_uri(project.thumbnail_url)))

        for idx, scene in enumerate(project.scenes):
            stem = scene_file_stem(idx)
            if scene.image_url:
                z.writestr(f"{root}/{VISUALS_DIR}/{stem}.png", ensure_png(decode_data_uri(scene.image_url)))
            if scene.audio_url:
                wav = pcm_to_wav(decode_base64_audio(scene.audio_url))
                z.writestr(f"{root}/{AUDIO_DIR}/{stem}.wav", wav)

        z.writestr(f"{root}/{PROMPT_LOG_FILE}", build_prompt_log(project, voice))

    mem.seek(0)
    return mem.read()
