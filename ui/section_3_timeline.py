# -*- coding: utf-8 -*-
import asyncio

import streamlit as st

from storyboard import store as reducers
from storyboard.actions import prepare_export, process_scene_audio, process_scene_image
from storyboard.auto_processor import auto_process_all
from storyboard.env_loader import Settings
from storyboard.gemini_image import decode_data_uri
from storyboard.gemini_speech import decode_base64_audio, pcm_duration_seconds, pcm_to_wav
from storyboard.project_io import archive_file_name, scene_file_stem
from storyboard.store import ProjectStore


def _route(result):
    if not result.ok:
        st.session_state.last_error = result.error


def _render_scene(client, store: ProjectStore, settings: Settings, idx: int, scene, image_size: str, voice: str):
    session = store.session_id
    key_base = f"scene_{session}_{scene.id}"

    def _on_prompt_change():
        store.dispatch(session, reducers.update_scene_visual_prompt, scene.id, st.session_state[f"{key_base}_vp"])

    def _on_content_change():
        store.dispatch(session, reducers.update_scene_content, scene.id, st.session_state[f"{key_base}_content"])

    st.markdown(f"#### {scene_file_stem(idx)} · {scene.title}")
    col1, col2 = st.columns([9, 11])
    with col1:
        if scene.image_url:
            st.image(decode_data_uri(scene.image_url), width="stretch")
        else:
            st.info("Chưa có ảnh")
        if st.button("🖼️ Tạo lại ảnh" if scene.image_url else "🖼️ Tạo ảnh",
                     key=f"{key_base}_img", disabled=not bool(client)):
            with st.spinner(f"Đang tạo ảnh: {scene.title} …"):
                _route(asyncio.run(process_scene_image(store, client, scene.id, image_size, settings)))
            st.rerun()
    with col2:
        st.text_area("Lời dẫn / thoại", value=scene.content, key=f"{key_base}_content",
                     height=120, on_change=_on_content_change)
        st.text_area("Visual prompt", value=scene.visual_prompt, key=f"{key_base}_vp",
                     height=90, on_change=_on_prompt_change)
        st.caption(f"Nhân vật: {', '.join(scene.characters_in_scene) or '(none)'}")
        if scene.audio_url:
            pcm = decode_base64_audio(scene.audio_url)
            st.audio(pcm_to_wav(pcm), format="audio/wav")
            st.caption(f"{pcm_duration_seconds(pcm):.1f}s")
        if st.button("🔊 Tạo lại giọng đọc" if scene.audio_url else "🔊 Tạo giọng đọc",
                     key=f"{key_base}_audio", disabled=not bool(client)):
            with st.spinner(f"Đang lồng tiếng: {scene.title} …"):
                _route(asyncio.run(process_scene_audio(store, client, scene.id, voice, settings)))
            st.rerun()


def _render_export(proj, voice: str):
    # zip chỉ đóng gói khi bấm; gói cũ hết hạn khi project/giọng đổi
    if st.button("📦 Chuẩn bị gói tải về", key=f"export_{proj.session_id}"):
        data, result = prepare_export(proj, voice)
        if not result.ok:
            st.session_state.export_bundle = None
            _route(result)
            st.rerun()
        st.session_state.export_bundle = (proj, voice, data)

    bundle = st.session_state.get("export_bundle")
    if bundle and bundle[0] is proj and bundle[1] == voice:
        st.download_button(
            "📥 DOWNLOAD ASSETS (.ZIP)",
            data=bundle[2],
            file_name=archive_file_name(proj),
            mime="application/zip",
        )


def render_section_3(client, store: ProjectStore, settings: Settings, image_size: str, voice: str):
    proj = store.project
    if proj is None:
        return
    st.header("3) Production Timeline")

    colA, colB = st.columns([1, 1])
    with colA:
        if st.button("🚀 RENDER PROJECT", type="primary", disabled=not bool(client)):
            st.session_state.last_error = None
            with st.spinner("SYNCING..."):
                _route(asyncio.run(auto_process_all(store, client, image_size, voice, settings)))
            st.rerun()
    with colB:
        if proj.is_all_done:
            _render_export(proj, voice)
        else:
            done = sum(1 for s in proj.scenes if s.image_url and s.audio_url)
            st.caption(f"Hoàn tất {done}/{len(proj.scenes)} cảnh · thumbnail: {'✅' if proj.thumbnail_url else '—'}")

    for idx, scene in enumerate(proj.scenes):
        with st.container(border=True):
            _render_scene(client, store, settings, idx, scene, image_size, voice)
