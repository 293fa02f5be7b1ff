"""Ordered primary/fallback execution of transcription engines."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .engines import EngineChoice, TranscriptionEngine
from .exceptions import TranscriptionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptionResult:
    text: str
    engine: EngineChoice


class TranscriptionRunner:
    """Tries each engine in order until one returns a transcript."""

    def __init__(self, engines: Sequence[TranscriptionEngine]) -> None:
        if not engines:
            raise ValueError("At least one transcription engine is required")
        self.engines = list(engines)

    async def transcribe(self, audio_path: Path) -> TranscriptionResult:
        """Transcribe ``audio_path`` with the first engine that succeeds.

        Each engine is attempted once, in order. Any exception from an engine
        moves on to the next one.

        Raises:
            TranscriptionError: If every engine failed; the message names each failure.
        """
        failures: list[Exception] = []
        for engine in self.engines:
            try:
                text = await engine.transcribe(audio_path)
            except Exception as e:
                logger.warning(
                    "Transcription engine failed",
                    extra={
                        "engine": engine.name,
                        "choice": engine.choice.value,
                        "error": str(e),
                        "detail": getattr(e, "detail", None),
                    },
                )
                failures.append(e)
                continue

            logger.info("Transcription complete", extra={"engine": engine.name, "choice": engine.choice.value})
            return TranscriptionResult(text=text, engine=engine.choice)

        reasons = "; ".join(str(e) for e in failures)
        raise TranscriptionError(
            f"Transcription failed: {reasons}",
            detail="\n".join(filter(None, (getattr(e, "detail", None) for e in failures))) or None,
        )
