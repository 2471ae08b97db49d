import asyncio

import streamlit as st

from storyboard.actions import start_analysis
from storyboard.env_loader import Settings
from storyboard.store import ProjectStore


def render_section_1(client, store: ProjectStore, settings: Settings, style: str):
    st.header("1) Nhập kịch bản")
    st.caption("Giữ nguyên văn bản, lồng tiếng chuẩn và tải về file dựng phim.")

    script = st.text_area(
        "Full Script Content",
        height=320,
        key="script_input",
        placeholder="Nhập kịch bản tại đây... (Hệ thống sẽ tự động bỏ các phần trong ngoặc như [music], [tiếng cười]...)",
    )

    if st.button("🎬 GENERATE ASSETS", type="primary", disabled=not bool(client and script.strip())):
        st.session_state.last_error = None
        with st.spinner("ANALYZING..."):
            result = asyncio.run(start_analysis(store, client, script, style, settings))
        if not result.ok:
            st.session_state.last_error = result.error
        st.rerun()
