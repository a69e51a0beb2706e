# converters/image.py
import logging
from pathlib import Path
from typing import Callable, Optional

from PIL import Image

from .base import BaseConverter
from phase_change.core.exceptions import ConversionFailedError, DependencyError
from phase_change.core.formats import FileType, ImageFileType, MediaCategory, JPEG, PNG

logger = logging.getLogger(__name__)

_PIL_FORMATS = {
    ImageFileType.PNG: 'PNG',
    ImageFileType.JPEG: 'JPEG',
    ImageFileType.BMP: 'BMP',
    ImageFileType.GIF: 'GIF',
}

# Image modes each encoder writes as-is; anything else is converted first
_WRITABLE_MODES = {
    ImageFileType.PNG: ('1', 'L', 'LA', 'P', 'RGB', 'RGBA'),
    ImageFileType.JPEG: ('L', 'RGB'),
    ImageFileType.BMP: ('L', 'RGB'),
    ImageFileType.GIF: ('1', 'L', 'P', 'RGB', 'RGBA'),
}

class PillowImageConverter(BaseConverter):
    """
    Converter implementation using Pillow for image formats.
    """

    def __init__(self, from_type: FileType, to_type: FileType, quality: Optional[int] = None):
        super().__init__()
        for file_type in (from_type, to_type):
            if file_type.category is not MediaCategory.IMAGE:
                raise ValueError(f"Not an image file type: {file_type}")
        self._from_type = from_type
        self._to_type = to_type
        self._quality = quality

    @property
    def from_type(self) -> FileType:
        return self._from_type

    @property
    def to_type(self) -> FileType:
        return self._to_type

    def validate_dependencies(self) -> bool:
        """Check that Pillow can read the source and write the target format."""
        Image.init()
        source_format = _PIL_FORMATS[self._from_type.subtype]
        target_format = _PIL_FORMATS[self._to_type.subtype]

        if source_format not in Image.OPEN:
            raise DependencyError(f"Pillow cannot read {source_format} images")
        if target_format not in Image.SAVE:
            raise DependencyError(f"Pillow cannot write {target_format} images")
        return True

    def convert(self,
                source_path: Path,
                target_path: Path,
                progress_callback: Optional[Callable[[int], None]] = None) -> bool:
        """
        Convert image using Pillow.
        """
        source_path = Path(source_path)
        target_path = Path(target_path)
        target = self._to_type.subtype

        if progress_callback:
            progress_callback(0)

        try:
            with Image.open(source_path) as img:
                if img.mode not in _WRITABLE_MODES[target]:
                    keep_alpha = 'A' in img.mode.upper() and 'RGBA' in _WRITABLE_MODES[target]
                    img = img.convert('RGBA' if keep_alpha else 'RGB')

                save_kwargs = {}
                if target is ImageFileType.JPEG and self._quality is not None:
                    save_kwargs['quality'] = self._quality
                if target is ImageFileType.PNG:
                    save_kwargs['optimize'] = True

                img.save(target_path, format=_PIL_FORMATS[target], **save_kwargs)

        except (OSError, ValueError) as e:
            raise ConversionFailedError(
                f"Image conversion {self._from_type} -> {self._to_type} failed for {source_path}: {e}"
            ) from e

        logger.debug("Wrote %s from %s", target_path, source_path)

        if progress_callback:
            progress_callback(100)

        return True

class PngToJpegConverter(PillowImageConverter):
    """Encodes PNG images as JPEG."""

    def __init__(self, quality: Optional[int] = None):
        super().__init__(PNG, JPEG, quality=quality)
