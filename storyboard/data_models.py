import uuid
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Voice = Literal["Kore", "Puck", "Charon", "Fenrir", "Zephyr", "Aoede"]
VisualStyle = Literal["3D Pixar", "Cinematic", "Anime", "Realistic", "3D Render", "Cyberpunk", "Oil Painting"]
ImageSize = Literal["1K", "2K", "4K"]


def new_session_id() -> str:
    return uuid.uuid4().hex


class Character(BaseModel):
    name: str
    description: str
    voice: Voice = "Aoede"
    image_url: Optional[str] = None
    is_generating_preview: bool = False


class Scene(BaseModel):
    id: str
    title: str
    content: str
    visual_prompt: str
    characters_in_scene: List[str] = []
    image_url: Optional[str] = None
    audio_url: Optional[str] = None     # base64 PCM 16-bit / 24kHz / mono
    is_generating_image: bool = False
    is_generating_audio: bool = False


class Project(BaseModel):
    session_id: str = Field(default_factory=new_session_id)
    title: str
    original_script: str
    characters: List[Character] = []
    scenes: List[Scene] = []
    style: VisualStyle = "3D Pixar"
    thumbnail_url: Optional[str] = None
    is_generating_thumbnail: bool = False

    def find_character(self, name: str) -> Optional[Character]:
        return next((c for c in self.characters if c.name == name), None)

    def find_scene(self, scene_id: str) -> Optional[Scene]:
        return next((s for s in self.scenes if s.id == scene_id), None)

    def characters_for_scene(self, scene: Scene) -> List[Character]:
        """Nhân vật xuất hiện trong cảnh, theo thứ tự của danh sách nhân vật."""
        names = set(scene.characters_in_scene)
        return [c for c in self.characters if c.name in names]

    @property
    def is_all_done(self) -> bool:
        if not self.thumbnail_url:
            return False
        return all(s.image_url and s.audio_url for s in self.scenes)
