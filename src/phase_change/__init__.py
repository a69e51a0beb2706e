"""
Local file format converter with multi-step conversion chains.
"""

# Import main components for easier access
from .core.formats import (
    AudioFileType,
    FileType,
    ImageFileType,
    MediaCategory,
    UNKNOWN,
    PNG,
    JPEG,
    BMP,
    GIF,
    MP3,
    WAV,
)
from .core.exceptions import (
    ConfigurationError,
    ConversionFailedError,
    ConverterError,
    DependencyError,
    NoConversionPathError,
    NoDirectConverterError,
    UnsupportedFormatError,
)
from .converters.base import BaseConverter
from .core.registry import ConverterRegistry, create_default_registry
from .core.manager import ConversionManager, ConversionRequest
from .core.builder import FileConvertBuilder

__version__ = "0.1"
