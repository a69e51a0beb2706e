# core/formats.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class MediaCategory(Enum):
    """Top-level media category of a file format."""
    UNKNOWN = "unknown"
    IMAGE = "image"
    AUDIO = "audio"


class ImageFileType(Enum):
    PNG = "png"
    JPEG = "jpg"
    BMP = "bmp"
    GIF = "gif"


class AudioFileType(Enum):
    MP3 = "mp3"
    WAV = "wav"


SubType = Union[ImageFileType, AudioFileType]

_SUBTYPES = {
    MediaCategory.IMAGE: ImageFileType,
    MediaCategory.AUDIO: AudioFileType,
}

# Accepted spellings that differ from the canonical extension
_EXTENSION_ALIASES = {
    'jpeg': 'jpg',
}

UNKNOWN_EXTENSION = "unknown"


@dataclass(frozen=True)
class FileType:
    """
    Identity of a supported file format.

    A format is a media category plus the concrete format inside that
    category, e.g. ``FileType.image(ImageFileType.PNG)``. The default
    value, ``FileType()``, is the unknown sentinel: it is never a valid
    source or target of a conversion.
    """

    category: MediaCategory = MediaCategory.UNKNOWN
    subtype: Optional[SubType] = None

    def __post_init__(self):
        expected = _SUBTYPES.get(self.category)
        if expected is None:
            if self.subtype is not None:
                raise ValueError(f"Unknown file type cannot carry a subtype: {self.subtype!r}")
        elif not isinstance(self.subtype, expected):
            raise ValueError(
                f"{self.category.value} file type requires a {expected.__name__}, "
                f"got {self.subtype!r}"
            )

    @classmethod
    def image(cls, image_type: ImageFileType) -> "FileType":
        return cls(MediaCategory.IMAGE, image_type)

    @classmethod
    def audio(cls, audio_type: AudioFileType) -> "FileType":
        return cls(MediaCategory.AUDIO, audio_type)

    @classmethod
    def unknown(cls) -> "FileType":
        return cls()

    @classmethod
    def from_extension(cls, extension: str) -> "FileType":
        """
        Map a filename extension to its file type.

        Args:
            extension: Extension with or without the leading dot, any case

        Returns:
            FileType: Matching type, or the unknown sentinel if unrecognised
        """
        ext = extension.lower().lstrip('.')
        ext = _EXTENSION_ALIASES.get(ext, ext)
        for category, enum_cls in _SUBTYPES.items():
            for member in enum_cls:
                if member.value == ext:
                    return cls(category, member)
        return cls()

    @property
    def is_unknown(self) -> bool:
        return self.category is MediaCategory.UNKNOWN

    @property
    def extension(self) -> str:
        """Canonical filename extension, without the dot."""
        if self.subtype is None:
            return UNKNOWN_EXTENSION
        return self.subtype.value

    def __str__(self) -> str:
        if self.subtype is None:
            return "Unknown"
        return f"{self.category.name.capitalize()}({self.subtype.name})"


UNKNOWN = FileType()

PNG = FileType.image(ImageFileType.PNG)
JPEG = FileType.image(ImageFileType.JPEG)
BMP = FileType.image(ImageFileType.BMP)
GIF = FileType.image(ImageFileType.GIF)
MP3 = FileType.audio(AudioFileType.MP3)
WAV = FileType.audio(AudioFileType.WAV)


def all_file_types():
    """Every known file type, excluding the unknown sentinel."""
    return [
        FileType(category, member)
        for category, enum_cls in _SUBTYPES.items()
        for member in enum_cls
    ]
