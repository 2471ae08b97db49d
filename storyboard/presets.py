# -*- coding: utf-8 -*-
"""
Centralized preset registry for StoryBoard Studio.
Closed sets shown in the UI (styles, narrator voices, image sizes) and the
fixed rendering cues injected into image prompts.
"""
from typing import Dict, List

VISUAL_STYLES: List[str] = [
    "3D Pixar", "Cinematic", "Anime", "Realistic", "3D Render", "Cyberpunk", "Oil Painting",
]
DEFAULT_STYLE = "3D Pixar"

VOICES: Dict[str, str] = {
    "Aoede":  "Trầm ấm, kể chuyện (Narrator)",
    "Zephyr": "Trong trẻo, trẻ trung (Young)",
    "Kore":   "Nữ tính, nhẹ nhàng (Soft)",
    "Puck":   "Năng động, tinh nghịch (Energetic)",
    "Charon": "Trưởng thành, uy tín (Mature)",
    "Fenrir": "Mạnh mẽ, nam tính (Strong)",
}
DEFAULT_VOICE = "Aoede"

IMAGE_SIZES: List[str] = ["1K", "2K", "4K"]
DEFAULT_IMAGE_SIZE = "1K"
PREVIEW_IMAGE_SIZE = "1K"
THUMBNAIL_IMAGE_SIZE = "1K"

ASPECT_RATIO = "16:9"

IMAGE_PREAMBLE = (
    "Masterpiece cinematic 3D animation style, Pixar inspired, soft lighting, "
    "vibrant colors, highly detailed"
)

MORAL_SCENE_TITLE = "Moral Lesson"


def voice_label(voice: str) -> str:
    desc = VOICES.get(voice)
    return f"{voice} - {desc}" if desc else voice
