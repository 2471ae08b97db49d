import pytest

from storyboard.errors import AnalysisError, EmptyScriptError
from storyboard.prompt_builders import ANALYSIS_SCHEMA
from storyboard.script_analyzer import analyze_script

from fakes import analysis_response, make_response


@pytest.mark.asyncio
class TestAnalyzeScript:
    async def test_builds_project_with_sequential_scene_ids(self, fake_client, settings, analysis_payload):
        fake_client.models.generate_content.return_value = analysis_response(analysis_payload)
        script = "  Ngày xưa (music) có một chú thỏ...\n"

        project = await analyze_script(fake_client, script, "Anime", settings)

        assert [s.id for s in project.scenes] == ["scene-0", "scene-1", "scene-2"]
        assert project.original_script == script
        assert project.style == "Anime"
        assert project.title == "Thỏ và Rùa"
        assert project.characters[0].voice == "Puck"
        assert project.scenes[1].visual_prompt == "A race on a dirt road"
        assert project.scenes[1].characters_in_scene == ["Rabbit", "Turtle"]
        assert project.thumbnail_url is None

    async def test_sends_schema_constrained_request(self, fake_client, settings, analysis_payload):
        fake_client.models.generate_content.return_value = analysis_response(analysis_payload)
        await analyze_script(fake_client, "Một câu chuyện", "3D Pixar", settings)

        kwargs = fake_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == settings.text_model
        assert "Một câu chuyện" in kwargs["contents"]
        assert "Moral Lesson" in kwargs["contents"]
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].response_schema is not None

    async def test_each_analysis_gets_new_session(self, fake_client, settings, analysis_payload):
        fake_client.models.generate_content.return_value = analysis_response(analysis_payload)
        first = await analyze_script(fake_client, "x", "Anime", settings)
        second = await analyze_script(fake_client, "x", "Anime", settings)
        assert first.session_id != second.session_id

    @pytest.mark.parametrize("script", ["", "   ", "\n\t"])
    async def test_empty_script_rejected_before_any_call(self, fake_client, settings, script):
        with pytest.raises(EmptyScriptError):
            await analyze_script(fake_client, script, "Anime", settings)
        fake_client.models.generate_content.assert_not_called()

    async def test_malformed_json_is_analysis_error(self, fake_client, settings):
        fake_client.models.generate_content.return_value = make_response(text="not json at all")
        with pytest.raises(AnalysisError):
            await analyze_script(fake_client, "x", "Anime", settings)

    async def test_missing_fields_is_analysis_error(self, fake_client, settings):
        fake_client.models.generate_content.return_value = analysis_response({"title": "Only title"})
        with pytest.raises(AnalysisError):
            await analyze_script(fake_client, "x", "Anime", settings)

    async def test_unknown_voice_is_analysis_error(self, fake_client, settings, analysis_payload):
        analysis_payload["characters"][0]["voice"] = "Robot"
        fake_client.models.generate_content.return_value = analysis_response(analysis_payload)
        with pytest.raises(AnalysisError):
            await analyze_script(fake_client, "x", "Anime", settings)

    async def test_remote_failure_wrapped(self, fake_client, settings):
        fake_client.models.generate_content.side_effect = RuntimeError("403 PERMISSION_DENIED")
        with pytest.raises(AnalysisError, match="PERMISSION_DENIED") as excinfo:
            await analyze_script(fake_client, "x", "Anime", settings)
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        fake_client.models.generate_content.assert_called_once()


def test_schema_requires_all_fields():
    assert ANALYSIS_SCHEMA["required"] == ["title", "characters", "scenes"]
    char_props = ANALYSIS_SCHEMA["properties"]["characters"]["items"]["properties"]
    assert char_props["voice"]["enum"] == ["Aoede", "Zephyr", "Kore", "Puck", "Charon", "Fenrir"]
