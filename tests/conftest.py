from unittest.mock import MagicMock

import pytest

from storyboard.data_models import Character, Project, Scene
from storyboard.env_loader import Settings


@pytest.fixture
def fake_client():
    """Stand-in for google.genai.Client: only client.models.generate_content is used."""
    client = MagicMock()
    client.models.generate_content = MagicMock()
    return client


@pytest.fixture
def settings():
    return Settings(initial_backoff=0.0)


@pytest.fixture
def analysis_payload():
    return {
        "title": "Thỏ và Rùa",
        "characters": [
            {"name": "Rabbit", "description": "A fluffy white rabbit with a blue scarf", "voice": "Puck"},
            {"name": "Turtle", "description": "A calm green turtle with a brown shell", "voice": "Charon"},
        ],
        "scenes": [
            {"title": "Khởi đầu", "content": "Ngày xưa có một chú thỏ.", "visualPrompt": "A sunny meadow",
             "charactersInScene": ["Rabbit"]},
            {"title": "Cuộc đua", "content": "Thỏ và rùa chạy đua.", "visualPrompt": "A race on a dirt road",
             "charactersInScene": ["Rabbit", "Turtle"]},
            {"title": "Moral Lesson", "content": "Chậm mà chắc.", "visualPrompt": "Sunset over the finish line",
             "charactersInScene": []},
        ],
    }


@pytest.fixture
def project():
    return Project(
        title="Thỏ và Rùa",
        original_script="Ngày xưa...",
        style="3D Pixar",
        characters=[
            Character(name="Rabbit", description="white rabbit", voice="Puck"),
            Character(name="Turtle", description="green turtle", voice="Charon"),
        ],
        scenes=[
            Scene(id="scene-0", title="A", content="Ngày xưa có một chú thỏ.", visual_prompt="meadow",
                  characters_in_scene=["Rabbit"]),
            Scene(id="scene-1", title="B", content="Thỏ và rùa chạy đua.", visual_prompt="race",
                  characters_in_scene=["Rabbit", "Turtle"]),
        ],
    )
