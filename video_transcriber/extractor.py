"""Audio extraction from uploaded videos via ffmpeg."""

import logging
from pathlib import Path

from .exceptions import ExtractionError
from .process import ProcessInvoker, ProcessTimeoutError

logger = logging.getLogger(__name__)

EXTRACTION_FAILED = "Failed to extract audio from video"


class AudioExtractor:
    """Converts a video's audio track to 16-bit PCM, 16kHz mono WAV."""

    def __init__(
        self,
        invoker: ProcessInvoker,
        ffmpeg_binary: str = "ffmpeg",
        timeout: float | None = None,
    ) -> None:
        self.invoker = invoker
        self.ffmpeg_binary = ffmpeg_binary
        self.timeout = timeout

    def build_command(self, video_path: Path, audio_path: Path) -> list[str]:
        return [
            self.ffmpeg_binary,
            "-y",
            "-i",
            str(video_path),
            "-vn",
            "-acodec",
            "pcm_s16le",
            "-ar",
            "16000",
            "-ac",
            "1",
            str(audio_path),
        ]

    async def extract(self, video_path: Path, audio_path: Path) -> Path:
        """
        Writes the audio track of ``video_path`` to ``audio_path``, overwriting it.

        Raises:
            ExtractionError: If ffmpeg is missing, times out or exits non-zero.
        """
        cmd = self.build_command(video_path, audio_path)
        try:
            result = await self.invoker.run(cmd, timeout=self.timeout)
        except (OSError, ProcessTimeoutError) as e:
            logger.error("FFmpeg could not run", extra={"video": str(video_path), "error": str(e)})
            raise ExtractionError(EXTRACTION_FAILED, detail=str(e)) from e

        if not result.ok:
            logger.error(
                "FFmpeg failed",
                extra={"video": str(video_path), "returncode": result.returncode, "stderr": result.stderr},
            )
            raise ExtractionError(EXTRACTION_FAILED, detail=result.stderr)

        logger.info("Audio extracted successfully", extra={"video": str(video_path), "audio": str(audio_path)})
        return audio_path
