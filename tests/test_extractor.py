import pytest

from conftest import FakeInvoker
from video_transcriber.exceptions import ExtractionError
from video_transcriber.extractor import AudioExtractor
from video_transcriber.process import ProcessResult, ProcessTimeoutError


class TestAudioExtractor:
    @pytest.mark.asyncio
    async def test_ffmpeg_called_with_correct_args(self, tmp_path):
        invoker = FakeInvoker()
        video = tmp_path / "clip"
        audio = tmp_path / "clip.wav"

        await AudioExtractor(invoker).extract(video, audio)

        args = invoker.calls[0]
        assert args[0] == "ffmpeg"
        assert "-y" in args
        assert args[args.index("-i") + 1] == str(video)
        assert "-vn" in args
        assert args[args.index("-acodec") + 1] == "pcm_s16le"
        assert args[args.index("-ar") + 1] == "16000"
        assert args[args.index("-ac") + 1] == "1"
        assert args[-1] == str(audio)

    @pytest.mark.asyncio
    async def test_uses_configured_binary(self, tmp_path):
        invoker = FakeInvoker()
        await AudioExtractor(invoker, "/opt/ffmpeg/bin/ffmpeg").extract(tmp_path / "a", tmp_path / "a.wav")
        assert invoker.calls[0][0] == "/opt/ffmpeg/bin/ffmpeg"

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises_with_stderr(self, tmp_path):
        invoker = FakeInvoker([ProcessResult(1, "", "Invalid data found when processing input")])

        with pytest.raises(ExtractionError) as exc_info:
            await AudioExtractor(invoker).extract(tmp_path / "bad", tmp_path / "bad.wav")

        assert exc_info.value.message == "Failed to extract audio from video"
        assert "Invalid data" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_missing_binary_raises(self, tmp_path):
        invoker = FakeInvoker([FileNotFoundError(2, "No such file or directory", "ffmpeg")])

        with pytest.raises(ExtractionError):
            await AudioExtractor(invoker).extract(tmp_path / "a", tmp_path / "a.wav")

    @pytest.mark.asyncio
    async def test_timeout_raises(self, tmp_path):
        invoker = FakeInvoker([ProcessTimeoutError("ffmpeg", 1.0)])

        with pytest.raises(ExtractionError):
            await AudioExtractor(invoker, timeout=1.0).extract(tmp_path / "a", tmp_path / "a.wav")

    @pytest.mark.asyncio
    async def test_extraction_is_not_retried(self, tmp_path):
        invoker = FakeInvoker([ProcessResult(1, "", "boom")])

        with pytest.raises(ExtractionError):
            await AudioExtractor(invoker).extract(tmp_path / "a", tmp_path / "a.wav")

        assert len(invoker.calls) == 1
