import base64
import io
import zipfile

import pytest

from storyboard.data_models import Project, Scene
from storyboard.project_io import (
    archive_file_name, build_prompt_log, export_zip, sanitize_title, scene_file_stem,
)

from fakes import PNG_BYTES

PNG_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
PCM = b"\x00\x01" * 96000


def _scene(i, **kw):
    return Scene(id=f"scene-{i}", title=f"T{i}", content=f"Nội dung {i}", visual_prompt=f"prompt {i}", **kw)


@pytest.fixture
def finished_project():
    return Project(
        title="Thỏ và Rùa",
        original_script="Ngày xưa...",
        style="Anime",
        thumbnail_url=PNG_URI,
        scenes=[
            _scene(0, image_url=PNG_URI, audio_url=base64.b64encode(PCM).decode()),
            _scene(1, image_url=PNG_URI, audio_url=base64.b64encode(b"\x00\x00" * 10).decode()),
        ],
    )


@pytest.mark.parametrize("index, stem", [(0, "Scene_001"), (11, "Scene_012"), (998, "Scene_999")])
def test_scene_file_stem(index, stem):
    assert scene_file_stem(index) == stem


def test_sanitize_title_replaces_every_unsafe_char():
    assert sanitize_title('a/b\\c?d%e*f:g|h"i<j>k') == "a-b-c-d-e-f-g-h-i-j-k"
    assert sanitize_title("Thỏ và Rùa") == "Thỏ và Rùa"


def test_archive_file_name():
    p = Project(title="Cá: Vàng?", original_script="x")
    assert archive_file_name(p) == "Cá- Vàng-_Ready_To_Edit.zip"


def test_prompt_log_layout(finished_project):
    log = build_prompt_log(finished_project, "Kore")
    assert log.splitlines()[:6] == [
        "PROJECT: Thỏ và Rùa",
        "STYLE: Anime",
        "VOICE: Kore",
        "",
        "SCENES LOG:",
        "",
    ]
    assert "--- Scene_002 ---\nCONTENT: Nội dung 1\nVISUAL PROMPT: prompt 1\n" in log


class TestExportZip:
    def _open(self, data):
        return zipfile.ZipFile(io.BytesIO(data))

    def test_layout(self, finished_project):
        with self._open(export_zip(finished_project, "Kore")) as z:
            assert sorted(z.namelist()) == [
                "Thỏ và Rùa/00_Prompts_And_Script.txt",
                "Thỏ và Rùa/00_Thumbnail.png",
                "Thỏ và Rùa/01_Visuals/Scene_001.png",
                "Thỏ và Rùa/01_Visuals/Scene_002.png",
                "Thỏ và Rùa/02_Audio/Scene_001.wav",
                "Thỏ và Rùa/02_Audio/Scene_002.wav",
            ]

    def test_audio_is_wrapped_as_wav(self, finished_project):
        with self._open(export_zip(finished_project, "Kore")) as z:
            wav = z.read("Thỏ và Rùa/02_Audio/Scene_001.wav")
        assert len(wav) == 192044
        assert wav[:4] == b"RIFF"
        assert wav[44:] == PCM

    def test_images_are_png(self, finished_project):
        with self._open(export_zip(finished_project, "Kore")) as z:
            assert z.read("Thỏ và Rùa/01_Visuals/Scene_002.png") == PNG_BYTES
            assert z.read("Thỏ và Rùa/00_Thumbnail.png") == PNG_BYTES

    def test_prompt_log_included(self, finished_project):
        with self._open(export_zip(finished_project, "Puck")) as z:
            text = z.read("Thỏ và Rùa/00_Prompts_And_Script.txt").decode("utf-8")
        assert text == build_prompt_log(finished_project, "Puck")

    def test_missing_assets_are_skipped(self, finished_project):
        scenes = list(finished_project.scenes)
        scenes[1] = scenes[1].model_copy(update={"image_url": None, "audio_url": None})
        partial = finished_project.model_copy(update={"scenes": scenes, "thumbnail_url": None})

        with self._open(export_zip(partial, "Kore")) as z:
            names = z.namelist()
        assert "Thỏ và Rùa/01_Visuals/Scene_002.png" not in names
        assert "Thỏ và Rùa/02_Audio/Scene_002.wav" not in names
        assert "Thỏ và Rùa/00_Thumbnail.png" not in names
        assert "Thỏ và Rùa/01_Visuals/Scene_001.png" in names

    def test_title_is_sanitized_in_root_folder(self, finished_project):
        p = finished_project.model_copy(update={"title": "A/B"})
        with self._open(export_zip(p, "Kore")) as z:
            assert all(n.startswith("A-B/") for n in z.namelist())
