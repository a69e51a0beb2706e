# core/registry.py
"""Conversion registry for file format transformations.

The registry is the adjacency representation of a directed graph: nodes are
file types, edges are registered converters. It answers direct lookups and
finds the shortest chain of converters between two file types.
"""
import logging
from collections import deque
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from phase_change.converters.base import BaseConverter
from phase_change.core.exceptions import (
    ConversionFailedError,
    ConverterError,
    NoDirectConverterError,
)
from phase_change.core.formats import FileType

logger = logging.getLogger(__name__)

class ConverterRegistry:
    """
    Holds at most one converter per ordered (source, target) pair.
    """

    def __init__(self):
        self._converters: Dict[Tuple[FileType, FileType], BaseConverter] = {}

    def register(self, converter: BaseConverter) -> None:
        """
        Register a converter, replacing any converter for the same pair.
        """
        key = (converter.from_type, converter.to_type)
        previous = self._converters.get(key)
        if previous is not None:
            logger.debug("Replacing %r with %r", previous, converter)
        else:
            logger.debug("Registered %r", converter)
        self._converters[key] = converter

    def unregister(self, from_type: FileType, to_type: FileType) -> bool:
        """Remove the converter for a pair. Returns whether one was registered."""
        return self._converters.pop((from_type, to_type), None) is not None

    def get_converter(self, from_type: FileType, to_type: FileType) -> Optional[BaseConverter]:
        return self._converters.get((from_type, to_type))

    def can_convert(self, from_type: FileType, to_type: FileType) -> bool:
        """True if a converter covers exactly this pair. Chains are not considered."""
        return (from_type, to_type) in self._converters

    def convert(self,
                from_type: FileType,
                to_type: FileType,
                input_path: Path,
                output_path: Path,
                progress_callback: Optional[Callable[[int], None]] = None) -> None:
        """
        Run the direct converter for a pair.

        Raises:
            NoDirectConverterError: If no converter is registered for the pair
            ConversionFailedError: If the converter fails
        """
        converter = self._converters.get((from_type, to_type))
        if converter is None:
            raise NoDirectConverterError(from_type, to_type)

        try:
            success = converter.convert(input_path, output_path, progress_callback)
        except ConverterError:
            raise
        except Exception as e:
            raise ConversionFailedError(
                f"Conversion from {from_type} to {to_type} failed: {e}"
            ) from e

        if not success:
            raise ConversionFailedError(f"Conversion from {from_type} to {to_type} failed")

    def find_conversion_path(self, from_type: FileType, to_type: FileType) -> Optional[List[FileType]]:
        """
        Find a shortest chain of converters using BFS.

        Returns the list of file types from ``from_type`` to ``to_type``
        inclusive, or None if ``to_type`` is unreachable. When several
        chains share the minimal length, which one is returned is
        unspecified.
        """
        if from_type == to_type:
            return [from_type]

        neighbors = self._adjacency()

        queue = deque([from_type])
        visited = {from_type}
        parent: Dict[FileType, FileType] = {}

        while queue:
            current = queue.popleft()
            if current == to_type:
                path = [current]
                while current in parent:
                    current = parent[current]
                    path.append(current)
                path.reverse()
                return path

            for next_type in neighbors.get(current, []):
                if next_type not in visited:
                    visited.add(next_type)
                    parent[next_type] = current
                    queue.append(next_type)

        return None

    def reachable_formats(self, from_type: FileType) -> Set[FileType]:
        """Every file type reachable from ``from_type`` in one or more hops."""
        neighbors = self._adjacency()
        reached: Set[FileType] = set()
        queue = deque([from_type])

        while queue:
            current = queue.popleft()
            for next_type in neighbors.get(current, []):
                if next_type not in reached:
                    reached.add(next_type)
                    queue.append(next_type)

        return reached

    def copy(self) -> "ConverterRegistry":
        """A new registry holding the same converter instances."""
        clone = ConverterRegistry()
        clone._converters = dict(self._converters)
        return clone

    @property
    def formats(self) -> Set[FileType]:
        """Every file type that appears on a registered edge."""
        result = set()
        for src, tgt in self._converters:
            result.add(src)
            result.add(tgt)
        return result

    def _adjacency(self) -> Dict[FileType, List[FileType]]:
        neighbors: Dict[FileType, List[FileType]] = {}
        for src, tgt in self._converters:
            neighbors.setdefault(src, []).append(tgt)
        return neighbors

    def __len__(self) -> int:
        return len(self._converters)

    def __contains__(self, pair) -> bool:
        return pair in self._converters

    def __iter__(self) -> Iterator[BaseConverter]:
        return iter(list(self._converters.values()))


def create_default_registry(jpeg_quality: Optional[int] = None) -> ConverterRegistry:
    """
    Build a registry holding the built-in converters.

    Args:
        jpeg_quality: Optional JPEG quality passed to the image converters

    Returns:
        ConverterRegistry: A new registry; callers may register more converters
    """
    # Codec libraries load only when the built-in set is requested
    from phase_change.converters.ffmpeg import FFmpegAudioConverter
    from phase_change.converters.image import PillowImageConverter, PngToJpegConverter
    from phase_change.core.formats import BMP, GIF, JPEG, MP3, PNG, WAV

    registry = ConverterRegistry()
    registry.register(PngToJpegConverter(quality=jpeg_quality))
    for source, target in ((JPEG, PNG), (PNG, BMP), (BMP, PNG), (PNG, GIF), (GIF, PNG)):
        registry.register(PillowImageConverter(source, target, quality=jpeg_quality))
    registry.register(FFmpegAudioConverter(WAV, MP3))
    registry.register(FFmpegAudioConverter(MP3, WAV))
    return registry
