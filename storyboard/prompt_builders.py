# -*- coding: utf-8 -*-
from typing import Iterable

from storyboard.data_models import Character, Scene
from storyboard.presets import MORAL_SCENE_TITLE, VOICES

# Schema ép model trả JSON đúng cấu trúc khi phân tích kịch bản
ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {"type": "STRING"},
        "characters": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "description": {"type": "STRING", "description": "Detailed visual description in English"},
                    "voice": {"type": "STRING", "enum": list(VOICES.keys())},
                },
                "required": ["name", "description", "voice"],
            },
        },
        "scenes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {"type": "STRING"},
                    "content": {"type": "STRING", "description": "Original text WITHOUT text in brackets like (music)"},
                    "visualPrompt": {"type": "STRING", "description": "Visual description in English for image generation"},
                    "charactersInScene": {"type": "ARRAY", "items": {"type": "STRING"}},
                },
                "required": ["title", "content", "visualPrompt", "charactersInScene"],
            },
        },
    },
    "required": ["title", "characters", "scenes"],
}


def build_analysis_prompt(script: str) -> str:
    """
    Phân tích kịch bản thành title + nhân vật + danh sách cảnh cho thiếu nhi.
    Kết quả bị ràng buộc bởi ANALYSIS_SCHEMA.
    """
    return f"""
NHIỆM VỤ: Phân tích kịch bản và chia thành các phân cảnh (scenes) nhỏ chi tiết cho trẻ em.

QUY TẮC BẮT BUỘC:
1. GIỮ NGUYÊN NỘI DUNG GỐC: Không được tóm tắt, không được viết lại câu chữ. PHẢI giữ nguyên 100% lời thoại và dẫn chuyện từ kịch bản gốc.
2. LOẠI BỎ CHỈ DẪN TRONG NGOẶC: Trong phần 'content' của mỗi scene, XÓA BỎ các từ nằm trong dấu ngoặc đơn () hoặc ngoặc vuông [] như (music), (sound effects), (camera cut)... để phần lồng tiếng được trơn tru.
3. CHIA NHỎ SCENE: Mỗi khi bối cảnh hoặc hành động thay đổi, hãy tạo một scene mới. Đừng gộp quá nhiều câu vào một scene.
4. THÊM PHÂN CẢNH BÀI HỌC: Luôn luôn tạo một phân cảnh CUỐI CÙNG có tiêu đề "{MORAL_SCENE_TITLE}". Nội dung là một lời nhắn nhủ ngắn gọn, ấm áp đúc kết từ câu chuyện dành cho các bé.
5. NHÂN VẬT: Nhận diện tất cả nhân vật và mô tả ngoại hình bằng tiếng Anh thật chi tiết (ví dụ: "A young boy with messy brown hair, wearing a red striped t-shirt and denim shorts").
6. VISUAL PROMPT: Viết mô tả bối cảnh và hành động cho mỗi scene bằng tiếng Anh (ví dụ: "In a sunlit garden, the boy is chasing a blue butterfly").

Kịch bản cần xử lý: {script}
""".strip()


def _character_context(characters: Iterable[Character], sep: str) -> str:
    return ". ".join(f"{c.name}{sep}{c.description}" for c in characters)


def build_character_preview_prompt(character: Character, style: str) -> str:
    return (
        f"Portrait of character {character.name}. Appearance: {character.description}. "
        f"Style: {style}, neutral background, high detail."
    )


def build_scene_image_prompt(scene: Scene, characters: Iterable[Character], style: str) -> str:
    """Prompt ảnh cảnh: style + visual prompt + ngoại hình các nhân vật có mặt trong cảnh."""
    char_context = _character_context(characters, " looks like: ")
    return (
        f"Style: {style}. Scene: {scene.visual_prompt}. "
        f"Characters appearance: {char_context}. High consistency, 8k."
    )


def build_thumbnail_prompt(title: str, style: str, characters: Iterable[Character]) -> str:
    char_context = _character_context(characters, ": ")
    return (
        f'YouTube Video Thumbnail for a story titled "{title}". Style: {style}. '
        f"Vibrant, eye-catching, cinematic lighting. Main characters: {char_context}. "
        f"High quality, 4k, professional composition with space for text."
    )
