"""Application configuration loaded from environment variables."""

import os
import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel

ALLOWED_EXTENSIONS = frozenset({"mp4", "mov", "avi", "webm", "mkv", "flv", "wmv"})
MAX_UPLOAD_BYTES = 500 * 1024 * 1024


class WhisperConfig(BaseModel, frozen=True):
    """Settings shared by both transcription engines."""

    python_binary: str = "python3"
    whisper_binary: str = "whisper"
    model: str = "base"
    language: str = "en"
    beam_size: int = 5
    device: str = "cpu"
    compute_type: str = "int8"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    host: str = "0.0.0.0"
    port: int = 3000
    mode: str = "local-whisper"
    log_level: str = "INFO"
    upload_dir: Path = Path("uploads")
    transcript_dir: Path = Path(tempfile.gettempdir())
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    allowed_extensions: frozenset[str] = ALLOWED_EXTENSIONS
    ffmpeg_binary: str = "ffmpeg"
    process_timeout: float | None = None
    whisper: WhisperConfig = WhisperConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    timeout = os.getenv("PROCESS_TIMEOUT")
    return AppConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        mode=os.getenv("SERVICE_MODE", "local-whisper"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
        transcript_dir=Path(os.getenv("TRANSCRIPT_DIR", tempfile.gettempdir())),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(MAX_UPLOAD_BYTES))),
        ffmpeg_binary=os.getenv("FFMPEG_BINARY", "ffmpeg"),
        process_timeout=float(timeout) if timeout else None,
        whisper=WhisperConfig(
            python_binary=os.getenv("PYTHON_BINARY", "python3"),
            whisper_binary=os.getenv("WHISPER_BINARY", "whisper"),
            model=os.getenv("WHISPER_MODEL", "base"),
            language=os.getenv("WHISPER_LANGUAGE", "en"),
            beam_size=int(os.getenv("WHISPER_BEAM_SIZE", "5")),
            device=os.getenv("WHISPER_DEVICE", "cpu"),
            compute_type=os.getenv("WHISPER_COMPUTE_TYPE", "int8"),
        ),
    )


@lru_cache
def get_config() -> AppConfig:
    """Returns the process-wide configuration, loaded on first use."""
    return load_config()
