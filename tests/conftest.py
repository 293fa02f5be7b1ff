import sys
import os
from pathlib import Path

import pytest

# Ensure the project root is in sys.path so `from video_transcriber.main import app`
# works with relative imports inside the package
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from video_transcriber.config import AppConfig  # noqa: E402
from video_transcriber.engines import EngineChoice, TranscriptionEngine  # noqa: E402
from video_transcriber.process import ProcessResult  # noqa: E402


class FakeInvoker:
    """Records commands instead of running them.

    ``results`` are handed out in order (an exception instance is raised);
    once exhausted every run succeeds with empty output. ``on_run`` lets a
    test create the files a real tool would have written.
    """

    def __init__(self, results=None, on_run=None):
        self.results = list(results or [])
        self.on_run = on_run
        self.calls = []

    async def run(self, args, timeout=None):
        self.calls.append(list(args))
        result = self.results.pop(0) if self.results else ProcessResult(0, "", "")
        if isinstance(result, BaseException):
            raise result
        if self.on_run is not None and result.ok:
            self.on_run(list(args))
        return result


def write_ffmpeg_output(args):
    """Simulate ffmpeg writing the WAV file named by the last argument."""
    if "-acodec" in args:
        Path(args[-1]).write_bytes(b"RIFF0000WAVEfmt ")


class FakeEngine(TranscriptionEngine):
    """Engine returning a fixed text or raising a fixed error."""

    def __init__(self, name, choice, text=None, error=None):
        self.name = name
        self.choice = choice
        self.text = text
        self.error = error
        self.calls = []

    async def transcribe(self, audio_path):
        self.calls.append(audio_path)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def config(tmp_path) -> AppConfig:
    return AppConfig(
        upload_dir=tmp_path / "uploads",
        transcript_dir=tmp_path / "transcripts",
    )


@pytest.fixture
def ffmpeg_invoker() -> FakeInvoker:
    return FakeInvoker(on_run=write_ffmpeg_output)


@pytest.fixture
def primary_engine() -> FakeEngine:
    return FakeEngine("faster-whisper", EngineChoice.PRIMARY, text="hello world")


@pytest.fixture
def fallback_engine() -> FakeEngine:
    return FakeEngine("whisper", EngineChoice.FALLBACK, text="fallback text")
