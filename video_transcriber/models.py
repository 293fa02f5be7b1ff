"""Request, response and domain models."""

from pathlib import Path

from pydantic import BaseModel


class UploadedVideo(BaseModel, frozen=True):
    """A video stored on disk for the lifetime of one request."""

    original_filename: str
    stored_path: Path
    size: int
    extension: str


class TranscriptResponse(BaseModel):
    transcript: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    mode: str


class YoutubeRequest(BaseModel):
    url: str
