"""Sequencing of one uploaded video through extraction and transcription."""

import enum
import logging
from collections.abc import Callable
from pathlib import Path

from .exceptions import InternalError, TranscriberError, ValidationError
from .extractor import AudioExtractor
from .models import UploadedVideo
from .runner import TranscriptionRunner

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    TRANSCRIBING = "transcribing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def derive_audio_path(video_path: Path) -> Path:
    """Audio artifact sits next to the upload: ``<name>`` -> ``<name>.wav``."""
    return video_path.with_name(video_path.name + ".wav")


def remove_artifact(path: Path) -> None:
    """Delete ``path`` if it exists; failures are logged, never raised."""
    try:
        if path.exists():
            path.unlink()
    except OSError as e:
        logger.warning("Could not remove temporary file", extra={"path": str(path), "error": str(e)})


class PipelineCoordinator:
    """Drives one video from upload to transcript and owns artifact cleanup."""

    def __init__(
        self,
        extractor: AudioExtractor,
        runner: TranscriptionRunner,
        on_state: Callable[[PipelineState], None] | None = None,
    ) -> None:
        self.extractor = extractor
        self.runner = runner
        self.on_state = on_state

    def _enter(self, state: PipelineState, video: UploadedVideo) -> PipelineState:
        logger.info("Pipeline state changed", extra={"state": state.value, "video": video.original_filename})
        if self.on_state is not None:
            self.on_state(state)
        return state

    async def process(self, video: UploadedVideo) -> str:
        """
        Extracts and transcribes ``video``, returning the transcript text.

        The uploaded file and the derived audio file are removed on every
        exit path.

        Raises:
            ValidationError: If the uploaded file is not on disk.
            ExtractionError: If ffmpeg fails. Never retried.
            TranscriptionError: If every transcription engine fails.
            InternalError: For any other failure.
        """
        audio_path = derive_audio_path(video.stored_path)
        state = None
        try:
            if not video.stored_path.is_file():
                raise ValidationError("No video file uploaded")
            state = self._enter(PipelineState.RECEIVED, video)

            state = self._enter(PipelineState.EXTRACTING, video)
            await self.extractor.extract(video.stored_path, audio_path)

            state = self._enter(PipelineState.TRANSCRIBING, video)
            result = await self.runner.transcribe(audio_path)
        except TranscriberError as e:
            if state is not None:
                self._enter(PipelineState.FAILED, video)
            logger.error("Pipeline failed", extra={"error": e.message, "detail": e.detail})
            raise
        except Exception as e:
            if state is not None:
                self._enter(PipelineState.FAILED, video)
            logger.exception("Unexpected pipeline failure", extra={"video": video.original_filename})
            raise InternalError("Transcription failed") from e
        finally:
            remove_artifact(video.stored_path)
            remove_artifact(audio_path)

        self._enter(PipelineState.SUCCEEDED, video)
        logger.info("Transcript ready", extra={"engine": result.engine.value, "chars": len(result.text)})
        return result.text
