"""Speech-to-text engines driven as external processes.

Both engines take a 16kHz mono WAV and return plain text:

- ``FasterWhisperEngine`` (primary) runs a one-shot faster-whisper script,
- ``WhisperCliEngine`` (fallback) runs the reference ``whisper`` CLI.
"""

import enum
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .config import WhisperConfig
from .exceptions import TranscriptionError
from .process import ProcessInvoker, ProcessResult, ProcessTimeoutError

logger = logging.getLogger(__name__)

FASTER_WHISPER_SCRIPT = """\
import sys
from faster_whisper import WhisperModel

audio_path, model_size, language, beam_size, device, compute_type = sys.argv[1:7]
model = WhisperModel(model_size, device=device, compute_type=compute_type)
segments, info = model.transcribe(audio_path, language=language, beam_size=int(beam_size))
texts = (segment.text.strip() for segment in segments)
print(" ".join(text for text in texts if text))
"""


class EngineChoice(str, enum.Enum):
    """Which engine produced a transcript; used for diagnostics only."""

    PRIMARY = "primary"
    FALLBACK = "fallback"


class TranscriptionEngine(ABC):
    """Common capability of every engine: audio path in, text out."""

    name: str
    choice: EngineChoice

    def __init__(self, invoker: ProcessInvoker, config: WhisperConfig, timeout: float | None = None) -> None:
        self.invoker = invoker
        self.config = config
        self.timeout = timeout

    @abstractmethod
    async def transcribe(self, audio_path: Path) -> str:
        """Return the recognized text of ``audio_path``.

        Raises:
            TranscriptionError: If the engine is unavailable or fails.
        """

    async def _run(self, cmd: list[str]) -> ProcessResult:
        try:
            result = await self.invoker.run(cmd, timeout=self.timeout)
        except OSError as e:
            raise TranscriptionError(f"{self.name} is not available: {e}", detail=str(e)) from e
        except ProcessTimeoutError as e:
            raise TranscriptionError(f"{self.name} timed out", detail=str(e)) from e

        if not result.ok:
            raise TranscriptionError(f"{self.name} exited with code {result.returncode}", detail=result.stderr)
        return result


class FasterWhisperEngine(TranscriptionEngine):
    """Primary engine: faster-whisper through the configured Python interpreter."""

    name = "faster-whisper"
    choice = EngineChoice.PRIMARY

    def build_command(self, audio_path: Path) -> list[str]:
        return [
            self.config.python_binary,
            "-c",
            FASTER_WHISPER_SCRIPT,
            str(audio_path),
            self.config.model,
            self.config.language,
            str(self.config.beam_size),
            self.config.device,
            self.config.compute_type,
        ]

    async def transcribe(self, audio_path: Path) -> str:
        logger.info("Running Faster-Whisper transcription", extra={"audio": str(audio_path)})
        result = await self._run(self.build_command(audio_path))
        return result.stdout.strip()


class WhisperCliEngine(TranscriptionEngine):
    """Fallback engine: the ``whisper`` CLI writing a .txt transcript to ``output_dir``."""

    name = "whisper"
    choice = EngineChoice.FALLBACK

    def __init__(
        self,
        invoker: ProcessInvoker,
        config: WhisperConfig,
        output_dir: Path,
        timeout: float | None = None,
    ) -> None:
        super().__init__(invoker, config, timeout)
        self.output_dir = output_dir

    def build_command(self, audio_path: Path) -> list[str]:
        return [
            self.config.whisper_binary,
            str(audio_path),
            "--model",
            self.config.model,
            "--language",
            self.config.language,
            "--output_format",
            "txt",
            "--output_dir",
            str(self.output_dir),
        ]

    def transcript_path(self, audio_path: Path) -> Path:
        return self.output_dir / f"{audio_path.stem}.txt"

    async def transcribe(self, audio_path: Path) -> str:
        logger.info("Running Whisper transcription", extra={"audio": str(audio_path)})
        self.output_dir.mkdir(parents=True, exist_ok=True)
        transcript_path = self.transcript_path(audio_path)
        try:
            await self._run(self.build_command(audio_path))
            if not transcript_path.exists():
                raise TranscriptionError(f"{self.name}: Transcript file not generated")
            return transcript_path.read_text(encoding="utf-8").strip()
        finally:
            transcript_path.unlink(missing_ok=True)
