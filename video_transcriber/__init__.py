"""
Video-to-text app built with FastAPI, exposing
- an index.html UI,
- a video upload endpoint that extracts the audio track with ffmpeg
and transcribes it locally with faster-whisper, falling back to the whisper CLI,
- and a health endpoint.
"""

__version__ = "0.1.0"
