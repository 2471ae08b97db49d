import streamlit as st

from storyboard.env_loader import (
    Settings, clear_runtime_key, get_key_info, load_env, reset_caches_and_rerun,
    set_runtime_key, validate_key_format, write_dotenv_key,
)
from storyboard.presets import (
    DEFAULT_IMAGE_SIZE, DEFAULT_STYLE, DEFAULT_VOICE, IMAGE_SIZES, VISUAL_STYLES, VOICES, voice_label,
)


def _render_key_manager():
    with st.sidebar.expander("🔐 API Key (GEMINI_API_KEY)", expanded=False):
        current_key = load_env()
        st.caption(f"Hiện tại: {get_key_info(current_key)}")

        new_key = st.text_input(
            "Nhập key mới (không lưu nếu chưa bấm nút bên dưới)",
            type="password",
            placeholder="dán GEMINI_API_KEY vào đây…",
            key="api_key_entry_sidebar",
        )

        colK1, colK2 = st.columns(2)
        with colK1:
            if st.button("⚡ Dùng tạm thời (runtime)"):
                if not validate_key_format(new_key):
                    st.warning("Key trống hoặc không hợp lệ.")
                else:
                    set_runtime_key(new_key)
                    st.success("Đã ghi đè key tạm thời cho phiên hiện tại.")
                    reset_caches_and_rerun()
        with colK2:
            if st.button("💾 Ghi vào .env"):
                if not validate_key_format(new_key):
                    st.warning("Key trống hoặc không hợp lệ.")
                elif write_dotenv_key(new_key):
                    st.success("Đã ghi key vào .env và áp dụng ngay.")
                    reset_caches_and_rerun()
                else:
                    st.error("Không ghi được .env. Kiểm tra quyền ghi file.")

        colR1, colR2 = st.columns(2)
        with colR1:
            if st.button("🔄 Reload .env"):
                reset_caches_and_rerun()
        with colR2:
            if st.button("🧽 Xoá override (dùng lại .env)"):
                clear_runtime_key()
                st.info("Đã xoá override. App sẽ tải lại key từ .env.")
                reset_caches_and_rerun()


def render_sidebar(settings: Settings):
    """Trả về (settings đã áp model tuỳ chọn, style, voice, image_size)."""
    st.sidebar.title("⚙️ Cấu hình")
    _render_key_manager()

    st.sidebar.subheader("🎨 Sản xuất")
    style = st.sidebar.selectbox("Visual Style", VISUAL_STYLES, index=VISUAL_STYLES.index(DEFAULT_STYLE))
    voices = list(VOICES.keys())
    voice = st.sidebar.selectbox(
        "Voiceover (Chọn giọng phù hợp)", voices,
        index=voices.index(DEFAULT_VOICE), format_func=voice_label,
    )
    image_size = st.sidebar.radio(
        "Kích thước ảnh cảnh", IMAGE_SIZES, index=IMAGE_SIZES.index(DEFAULT_IMAGE_SIZE), horizontal=True,
    )

    with st.sidebar.expander("🧠 Model", expanded=False):
        text_model = st.text_input("Model phân tích", value=settings.text_model)
        image_model = st.text_input("Model ảnh", value=settings.image_model)
        tts_model = st.text_input("Model TTS", value=settings.tts_model)
    settings = settings.model_copy(update={
        "text_model": text_model or settings.text_model,
        "image_model": image_model or settings.image_model,
        "tts_model": tts_model or settings.tts_model,
    })

    if not load_env():
        st.sidebar.error("Chưa thấy GEMINI_API_KEY trong .env.")

    return settings, style, voice, image_size
