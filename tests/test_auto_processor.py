import pytest

from storyboard.auto_processor import STALE_SESSION, auto_process_all
from storyboard.data_models import Project
from storyboard.store import ProjectStore

from fakes import audio_response, image_response


def _route_by_modality(calls):
    """side_effect: trả audio cho request TTS, ảnh cho các request còn lại."""
    def _generate(model, contents, config):
        if getattr(config, "speech_config", None) is not None:
            calls.append(("audio", contents))
            return audio_response()
        calls.append(("image", contents))
        return image_response()
    return _generate


@pytest.mark.asyncio
class TestAutoProcessAll:
    async def test_thumbnail_then_image_audio_per_scene(self, fake_client, settings, project):
        store = ProjectStore(project)
        calls = []
        fake_client.models.generate_content.side_effect = _route_by_modality(calls)

        result = await auto_process_all(store, fake_client, "1K", "Kore", settings)

        assert result.ok
        kinds = [k for k, _ in calls]
        assert kinds == ["image", "image", "audio", "image", "audio"]
        assert "YouTube Video Thumbnail" in calls[0][1]
        assert "Scene: meadow" in calls[1][1]
        assert calls[2][1] == "Ngày xưa có một chú thỏ."
        assert store.project.is_all_done

    async def test_existing_assets_are_skipped(self, fake_client, settings, project):
        scenes = list(project.scenes)
        scenes[0] = scenes[0].model_copy(update={"image_url": "data:image/png;base64,AA", "audio_url": "AAEC"})
        store = ProjectStore(project.model_copy(update={"thumbnail_url": "data:image/png;base64,TT",
                                                        "scenes": scenes}))
        calls = []
        fake_client.models.generate_content.side_effect = _route_by_modality(calls)

        result = await auto_process_all(store, fake_client, "1K", "Kore", settings)

        assert result.ok
        assert [k for k, _ in calls] == ["image", "audio"]
        assert store.scene("scene-0").image_url == "data:image/png;base64,AA"

    async def test_complete_project_makes_no_calls(self, fake_client, settings, project):
        scenes = [s.model_copy(update={"image_url": "img", "audio_url": "AAEC"}) for s in project.scenes]
        store = ProjectStore(project.model_copy(update={"thumbnail_url": "thumb", "scenes": scenes}))

        assert (await auto_process_all(store, fake_client, "1K", "Kore", settings)).ok
        fake_client.models.generate_content.assert_not_called()

    async def test_halts_on_first_failure(self, fake_client, settings, project):
        store = ProjectStore(project.model_copy(update={"thumbnail_url": "thumb"}))
        fake_client.models.generate_content.side_effect = [image_response(), RuntimeError("blocked")]

        result = await auto_process_all(store, fake_client, "1K", "Kore", settings)

        assert result.error == "Lỗi tạo âm thanh: blocked"
        assert fake_client.models.generate_content.call_count == 2
        assert store.scene("scene-0").image_url is not None
        assert store.scene("scene-1").image_url is None

    async def test_thumbnail_failure_stops_before_scenes(self, fake_client, settings, project):
        store = ProjectStore(project)
        fake_client.models.generate_content.side_effect = RuntimeError("denied")

        result = await auto_process_all(store, fake_client, "1K", "Kore", settings)

        assert result.error == "Không thể tạo thumbnail: denied"
        fake_client.models.generate_content.assert_called_once()

    async def test_stops_when_project_replaced(self, fake_client, settings, project):
        store = ProjectStore(project.model_copy(update={"thumbnail_url": "thumb"}))
        newer = Project(title="Khác", original_script="y", scenes=project.scenes)

        def _generate(**kwargs):
            store.replace(newer)
            return image_response()

        fake_client.models.generate_content.side_effect = _generate
        result = await auto_process_all(store, fake_client, "1K", "Kore", settings)

        assert result == STALE_SESSION
        assert fake_client.models.generate_content.call_count == 1
        assert store.project is newer
        assert all(s.image_url is None for s in newer.scenes)

    async def test_no_project(self, fake_client, settings):
        assert not (await auto_process_all(ProjectStore(), fake_client, "1K", "Kore", settings)).ok
