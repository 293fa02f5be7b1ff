import pytest

from conftest import FakeEngine
from video_transcriber.engines import EngineChoice
from video_transcriber.exceptions import TranscriptionError
from video_transcriber.runner import TranscriptionRunner


class TestTranscriptionRunner:
    @pytest.mark.asyncio
    async def test_primary_success_skips_fallback(self, tmp_path, primary_engine, fallback_engine):
        runner = TranscriptionRunner([primary_engine, fallback_engine])

        result = await runner.transcribe(tmp_path / "a.wav")

        assert result.text == "hello world"
        assert result.engine is EngineChoice.PRIMARY
        assert fallback_engine.calls == []

    @pytest.mark.asyncio
    async def test_primary_failure_falls_back_once(self, tmp_path, fallback_engine):
        primary = FakeEngine("faster-whisper", EngineChoice.PRIMARY, error=ImportError("no faster_whisper"))
        runner = TranscriptionRunner([primary, fallback_engine])
        audio = tmp_path / "a.wav"

        result = await runner.transcribe(audio)

        assert result.text == "fallback text"
        assert result.engine is EngineChoice.FALLBACK
        assert primary.calls == [audio]
        assert fallback_engine.calls == [audio]

    @pytest.mark.asyncio
    async def test_all_failures_raise_with_every_reason(self, tmp_path):
        primary = FakeEngine("faster-whisper", EngineChoice.PRIMARY, error=TranscriptionError("faster-whisper exited with code 1"))
        fallback = FakeEngine("whisper", EngineChoice.FALLBACK, error=TranscriptionError("whisper is not available"))
        runner = TranscriptionRunner([primary, fallback])

        with pytest.raises(TranscriptionError) as exc_info:
            await runner.transcribe(tmp_path / "a.wav")

        message = exc_info.value.message
        assert message.startswith("Transcription failed: ")
        assert "faster-whisper exited with code 1" in message
        assert "whisper is not available" in message
        assert len(primary.calls) == 1
        assert len(fallback.calls) == 1

    def test_requires_an_engine(self):
        with pytest.raises(ValueError):
            TranscriptionRunner([])
