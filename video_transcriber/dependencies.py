"""FastAPI dependency injection configuration."""

from typing import Annotated

from fastapi import Depends

from .config import AppConfig, get_config
from .engines import FasterWhisperEngine, WhisperCliEngine
from .extractor import AudioExtractor
from .pipeline import PipelineCoordinator
from .process import ProcessInvoker
from .runner import TranscriptionRunner

_invoker = ProcessInvoker()


def build_coordinator(config: AppConfig, invoker: ProcessInvoker) -> PipelineCoordinator:
    """Wires ffmpeg extraction and the primary/fallback engines together."""
    extractor = AudioExtractor(invoker, config.ffmpeg_binary, timeout=config.process_timeout)
    runner = TranscriptionRunner(
        [
            FasterWhisperEngine(invoker, config.whisper, timeout=config.process_timeout),
            WhisperCliEngine(invoker, config.whisper, config.transcript_dir, timeout=config.process_timeout),
        ]
    )
    return PipelineCoordinator(extractor, runner)


def get_coordinator(config: Annotated[AppConfig, Depends(get_config)]) -> PipelineCoordinator:
    """Returns a pipeline coordinator for the current configuration."""
    return build_coordinator(config, _invoker)


ConfigDep = Annotated[AppConfig, Depends(get_config)]
CoordinatorDep = Annotated[PipelineCoordinator, Depends(get_coordinator)]
