# converters/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from phase_change.core.formats import FileType

class BaseConverter(ABC):
    """
    Abstract base class for all file converters.

    A converter is a single directed edge between two file types. It keeps
    no per-call state, so one instance can serve several threads at once.
    """

    @property
    @abstractmethod
    def from_type(self) -> FileType:
        """Returns the file type this converter reads"""

    @property
    @abstractmethod
    def to_type(self) -> FileType:
        """Returns the file type this converter writes"""

    def can_convert(self, source_type: FileType, target_type: FileType) -> bool:
        """
        Check if converter supports the given format conversion.

        Args:
            source_type: Input file type
            target_type: Output file type

        Returns:
            bool: True if this converter's edge is exactly the given pair
        """
        return source_type == self.from_type and target_type == self.to_type

    @abstractmethod
    def convert(self,
                source_path: Path,
                target_path: Path,
                progress_callback: Optional[Callable[[int], None]] = None) -> bool:
        """
        Convert file from source path to target path.

        Any existing file at the target path is overwritten. If the
        conversion fails the target path may hold a partial file.

        Args:
            source_path: Path to source file
            target_path: Path where converted file should be saved
            progress_callback: Optional callback function to report progress (0-100)

        Returns:
            bool: True if conversion successful

        Raises:
            ConversionFailedError: If conversion fails
        """
        pass

    @abstractmethod
    def validate_dependencies(self) -> bool:
        """
        Check if all required dependencies are available.

        Returns:
            bool: True if all dependencies are satisfied
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.from_type} -> {self.to_type})"
