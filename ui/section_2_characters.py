import asyncio

import streamlit as st

from storyboard import store as reducers
from storyboard.actions import generate_character_preview, generate_project_thumbnail
from storyboard.env_loader import Settings
from storyboard.gemini_image import decode_data_uri
from storyboard.presets import VOICES, voice_label
from storyboard.store import ProjectStore


def _route(result):
    if not result.ok:
        st.session_state.last_error = result.error


def _render_thumbnail(client, store: ProjectStore, settings: Settings):
    proj = store.project
    st.subheader("🖼️ Story Thumbnail")
    col1, col2 = st.columns([1, 1])
    with col1:
        if proj.thumbnail_url:
            st.image(decode_data_uri(proj.thumbnail_url), caption="Thumbnail", width="stretch")
        else:
            st.info("No Thumbnail Generated")
    with col2:
        st.markdown(f"**{proj.title}**  ·  {proj.style}")
        st.caption("Tạo một tấm ảnh bìa ấn tượng với các nhân vật chính và bối cảnh đặc trưng của câu chuyện.")
        label = "🔁 Regenerate Thumbnail" if proj.thumbnail_url else "✨ Generate Cover Image"
        if st.button(label, key=f"thumb_{proj.session_id}", disabled=not bool(client)):
            with st.spinner("Designing..."):
                _route(asyncio.run(generate_project_thumbnail(store, client, settings)))
            st.rerun()


def _render_character_card(client, store: ProjectStore, settings: Settings, char, key_base: str):
    session = store.session_id
    if char.image_url:
        st.image(decode_data_uri(char.image_url), width="stretch")
    else:
        st.caption("No Preview")

    def _on_desc_change():
        store.dispatch(session, reducers.update_character_description, char.name, st.session_state[f"{key_base}_desc"])

    def _on_voice_change():
        store.dispatch(session, reducers.update_character_voice, char.name, st.session_state[f"{key_base}_voice"])

    st.text_area(char.name, value=char.description, key=f"{key_base}_desc", height=110, on_change=_on_desc_change)
    voices = list(VOICES.keys())
    st.selectbox(
        "Giọng gợi ý (metadata)", voices, index=voices.index(char.voice), format_func=voice_label,
        key=f"{key_base}_voice", on_change=_on_voice_change,
        help="Chỉ ghi chú cho nhân vật. Lồng tiếng các cảnh dùng giọng Voiceover chọn ở sidebar.",
    )
    if st.button("🎨 Preview", key=f"{key_base}_preview", disabled=not bool(client)):
        with st.spinner(f"Đang vẽ {char.name}…"):
            _route(asyncio.run(generate_character_preview(store, client, char.name, settings=settings)))
        st.rerun()


def render_section_2(client, store: ProjectStore, settings: Settings):
    proj = store.project
    if proj is None:
        return
    st.header("2) Thumbnail & Consistency Center")
    _render_thumbnail(client, store, settings)

    st.subheader("🧑‍🎨 Consistency Center")
    st.caption("Xác nhận ngoại hình nhân vật trước khi render các cảnh.")
    if not proj.characters:
        st.info("Không nhận diện được nhân vật nào.")
        return
    cols = st.columns(3)
    for i, char in enumerate(proj.characters):
        with cols[i % 3]:
            with st.container(border=True):
                _render_character_card(client, store, settings, char, f"char_{proj.session_id}_{i}")
