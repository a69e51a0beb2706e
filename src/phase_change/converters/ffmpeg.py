# converters/ffmpeg.py
import logging
from pathlib import Path
from typing import Callable, Optional

from ffmpeg import FFmpeg, FFmpegError

from .base import BaseConverter
from phase_change.core.exceptions import ConversionFailedError, DependencyError
from phase_change.core.formats import AudioFileType, FileType, MediaCategory
from phase_change.utils.dependencies import get_tool_path, run_subprocess

logger = logging.getLogger(__name__)

# Output options per target format
_CODEC_OPTIONS = {
    AudioFileType.MP3: {'codec:a': 'libmp3lame', 'b:a': '192k'},
    AudioFileType.WAV: {'codec:a': 'pcm_s16le'},
}

class FFmpegAudioConverter(BaseConverter):
    """
    Converter implementation using FFmpeg for audio formats.
    """

    def __init__(self, from_type: FileType, to_type: FileType):
        super().__init__()
        for file_type in (from_type, to_type):
            if file_type.category is not MediaCategory.AUDIO:
                raise ValueError(f"Not an audio file type: {file_type}")
        self._from_type = from_type
        self._to_type = to_type

        # Set by validate_dependencies; convert never writes it
        self._ffmpeg_path = None

    @property
    def from_type(self) -> FileType:
        return self._from_type

    @property
    def to_type(self) -> FileType:
        return self._to_type

    def validate_dependencies(self) -> bool:
        """Check if FFmpeg is available and remember where it is."""
        self._ffmpeg_path = self._locate_ffmpeg()
        return True

    def _locate_ffmpeg(self) -> Path:
        ffmpeg_path = get_tool_path('ffmpeg')
        if not ffmpeg_path:
            raise DependencyError(
                "FFmpeg not found. Please install FFmpeg or use the portable version."
            )

        result = run_subprocess([str(ffmpeg_path), '-version'])
        if result['returncode'] != 0:
            raise DependencyError(
                f"FFmpeg found but failed to run: {result['stderr']}"
            )

        return ffmpeg_path

    def convert(self,
                source_path: Path,
                target_path: Path,
                progress_callback: Optional[Callable[[int], None]] = None) -> bool:
        """
        Convert audio using FFmpeg.
        """
        ffmpeg_path = self._ffmpeg_path or self._locate_ffmpeg()

        if progress_callback:
            progress_callback(0)

        ffmpeg = (
            FFmpeg(executable=str(ffmpeg_path))
            .option('y')
            .input(str(source_path))
            .output(str(target_path), _CODEC_OPTIONS[self._to_type.subtype])
        )

        logger.debug("Running ffmpeg: %s", ' '.join(ffmpeg.arguments))

        try:
            ffmpeg.execute()
        except (FFmpegError, OSError) as e:
            raise ConversionFailedError(
                f"FFmpeg conversion {self._from_type} -> {self._to_type} failed for {source_path}: {e}"
            ) from e

        if progress_callback:
            progress_callback(100)

        return True
