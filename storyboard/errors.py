from dataclasses import dataclass
from typing import Optional


class StoryboardError(Exception):
    """Base class for errors raised by the storyboard pipeline."""


class EmptyScriptError(StoryboardError):
    def __init__(self, message: str = "Kịch bản trống. Hãy nhập nội dung trước khi phân tích."):
        super().__init__(message)


class AnalysisError(StoryboardError):
    """Script analysis failed (remote call or response parsing); no project produced."""


class NoDataReturnedError(StoryboardError):
    """The model answered successfully but without the expected inline payload."""


class NoImageDataError(NoDataReturnedError):
    def __init__(self, message: str = "No image data returned from Gemini"):
        super().__init__(message)


class NoAudioDataError(NoDataReturnedError):
    def __init__(self, message: str = "No audio data returned from Gemini"):
        super().__init__(message)


@dataclass(frozen=True)
class ActionResult:
    """Kết quả của một thao tác UI: ok hoặc thông báo lỗi để hiển thị."""
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "ActionResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, prefix: str, exc: BaseException) -> "ActionResult":
        detail = str(exc) or exc.__class__.__name__
        return cls(ok=False, error=f"{prefix}{detail}")
