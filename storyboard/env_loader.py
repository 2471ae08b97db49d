import logging
import os
import sys

import streamlit as st
from pydantic import BaseModel

_NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "google_genai", "websockets")


class Settings(BaseModel):
    text_model: str = "gemini-3-pro-preview"
    image_model: str = "gemini-3-pro-image-preview"
    tts_model: str = "gemini-2.5-flash-preview-tts"
    max_retries: int = 5
    initial_backoff: float = 3.0     # giây
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Đọc cấu hình model/retry từ ENV (đã nạp .env); thiếu biến nào thì dùng mặc định."""
    env_map = {
        "text_model": "STORYBOARD_TEXT_MODEL",
        "image_model": "STORYBOARD_IMAGE_MODEL",
        "tts_model": "STORYBOARD_TTS_MODEL",
        "max_retries": "STORYBOARD_MAX_RETRIES",
        "initial_backoff": "STORYBOARD_INITIAL_BACKOFF",
        "log_level": "STORYBOARD_LOG_LEVEL",
    }
    values = {field: os.environ[var] for field, var in env_map.items() if os.environ.get(var)}
    return Settings(**values)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s %(message)s", "%H:%M:%S"))
    root.addHandler(handler)
    quiet_logs()


def quiet_logs():
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def load_env() -> str:
    # Luôn reload .env để chắc chắn đọc key mới trên đĩa
    from dotenv import load_dotenv
    load_dotenv(override=True)
    # Ưu tiên GEMINI_API_KEY (hoặc GOOGLE_API_KEY nếu bạn dùng tên đó)
    return os.getenv("GEMINI_API_KEY", "") or os.getenv("GOOGLE_API_KEY", "")


def get_key_info(key: str) -> str:
    if not key:
        return "chưa có key"
    return f"key_len={len(key)} | key_hash={abs(hash(key)) % 100000}"


def validate_key_format(k: str) -> bool:
    # Chỉ đảm bảo không rỗng và không có khoảng trắng
    return bool(k and k.strip() and " " not in k)


def set_runtime_key(new_key: str):
    """
    Ghi đè key trong ENV của process hiện tại (không đụng file .env).
    Dùng khi bạn muốn thay ngay lập tức trong phiên đang chạy.
    """
    os.environ["GEMINI_API_KEY"] = new_key
    os.environ["GOOGLE_API_KEY"] = new_key  # phòng TH SDK đọc GOOGLE_API_KEY


def clear_runtime_key():
    for var in ("GEMINI_API_KEY", "GOOGLE_API_KEY"):
        os.environ.pop(var, None)


def write_dotenv_key(new_key: str) -> bool:
    """
    Ghi key mới vào file .env. Trả về True nếu thành công.
    """
    from dotenv import find_dotenv, set_key
    env_path = find_dotenv(usecwd=True)
    try:
        if not env_path:
            # nếu chưa có .env, tạo file mới trong cwd
            env_path = os.path.join(os.getcwd(), ".env")
            open(env_path, "a", encoding="utf-8").close()
        set_key(env_path, "GEMINI_API_KEY", new_key)
    except OSError:
        logging.getLogger(__name__).warning("Cannot write .env at %s", env_path, exc_info=True)
        return False
    # Đồng bộ runtime ngay sau khi ghi file
    set_runtime_key(new_key)
    return True


def reset_caches_and_rerun():
    st.cache_resource.clear()
    st.cache_data.clear()
    st.rerun()


@st.cache_resource(show_spinner=False)
def init_client(api_key: str):
    if not api_key:
        return None
    from google import genai
    return genai.Client(api_key=api_key)
