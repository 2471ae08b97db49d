import streamlit as st

from storyboard.env_loader import configure_logging, init_client, load_env, load_settings
from storyboard.store import ProjectStore

from ui.sidebar import render_sidebar
from ui.section_1_script import render_section_1
from ui.section_2_characters import render_section_2
from ui.section_3_timeline import render_section_3

st.set_page_config(page_title="StoryBoard Studio", page_icon="🎬", layout="wide")

# Load .env, settings, logging
api_key = load_env()
settings = load_settings()
configure_logging(settings.log_level)

# Session init
if "store" not in st.session_state:
    st.session_state.store = ProjectStore()
if "last_error" not in st.session_state:
    st.session_state.last_error = None
store: ProjectStore = st.session_state.store

settings, style, voice, image_size = render_sidebar(settings)
client = init_client(api_key) if api_key else None

st.title("🎬 StoryBoard Studio — Kịch bản thiếu nhi → Storyboard")

if st.session_state.last_error:
    st.error(st.session_state.last_error)

# Sections
render_section_1(client, store, settings, style)
render_section_2(client, store, settings)
render_section_3(client, store, settings, image_size, voice)
