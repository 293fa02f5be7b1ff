"""FastAPI application exposing the transcription endpoints and the single-page UI."""

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.datastructures import UploadFile as FormFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_config
from .dependencies import ConfigDep, CoordinatorDep
from .exceptions import TranscriberError, ValidationError
from .logging import setup_logging
from .models import ErrorResponse, HealthResponse, TranscriptResponse, YoutubeRequest
from .uploads import save_upload, validate_extension

INDEX_PATH = Path(__file__).parent / "static" / "index.html"

setup_logging(get_config().log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Video Transcriber")


@app.exception_handler(TranscriberError)
async def transcriber_error_handler(request: Request, exc: TranscriberError) -> JSONResponse:
    """Flatten pipeline errors into ``{"error": message}``."""
    logger.error(
        "Request failed",
        extra={"path": request.url.path, "error": exc.message, "status_code": exc.status_code},
    )
    return JSONResponse(ErrorResponse(error=exc.message).model_dump(), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Flatten framework errors, such as an unparseable multipart body, the same way."""
    logger.warning("Request rejected", extra={"path": request.url.path, "error": str(exc.detail)})
    return JSONResponse(
        ErrorResponse(error=str(exc.detail)).model_dump(),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.get("/")
async def get_index() -> HTMLResponse:
    """Serve the index.html single-page UI."""
    return HTMLResponse(INDEX_PATH.read_text(encoding="utf-8"))


@app.post("/api/transcribe", response_model=TranscriptResponse)
async def transcribe_video(
    request: Request,
    config: ConfigDep,
    coordinator: CoordinatorDep,
    video: UploadFile | None = File(None),
) -> TranscriptResponse:
    """Store the uploaded video, run it through the pipeline and return the transcript."""
    form = await request.form()
    file_count = sum(1 for _, value in form.multi_items() if isinstance(value, FormFile))
    if file_count > 1:
        raise ValidationError("Only one video file may be uploaded")
    if video is None or not video.filename:
        raise ValidationError("No video file uploaded")
    extension = validate_extension(video.filename, config.allowed_extensions)

    logger.info("Processing video", extra={"file_name": video.filename})
    stored = await save_upload(video, extension, config.upload_dir, config.max_upload_bytes)
    transcript = await coordinator.process(stored)
    return TranscriptResponse(transcript=transcript)


@app.post("/api/transcribe-youtube", status_code=501, response_model=ErrorResponse)
async def transcribe_youtube(payload: YoutubeRequest) -> JSONResponse:
    """Placeholder for the browser's YouTube flow, which this server does not provide."""
    logger.info("YouTube transcription requested", extra={"url": payload.url})
    return JSONResponse(
        ErrorResponse(error="YouTube transcription is not available on this server").model_dump(),
        status_code=501,
    )


@app.get("/api/health", response_model=HealthResponse)
async def health(config: ConfigDep) -> HealthResponse:
    return HealthResponse(status="ok", mode=config.mode)


def main() -> None:
    """Run the app with uvicorn on the configured host and port."""
    config = get_config()
    logger.info("Server starting", extra={"host": config.host, "port": config.port, "mode": config.mode})
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
