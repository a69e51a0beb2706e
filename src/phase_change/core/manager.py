# core/manager.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from phase_change.converters.base import BaseConverter
from phase_change.core.exceptions import ConfigurationError, NoConversionPathError
from phase_change.core.formats import FileType
from phase_change.core.registry import ConverterRegistry, create_default_registry

logger = logging.getLogger(__name__)

TEMP_PREFIX = "temp_"

PathLike = Union[str, Path]

@dataclass(frozen=True)
class ConversionRequest:
    """A single conversion: declared source, declared target, optional output path."""
    source_type: FileType
    source_path: Path
    target_type: FileType
    output_path: Optional[Path] = None


def default_output_path(source_path: Path, target_type: FileType) -> Path:
    """Source path with its extension replaced by the target's extension."""
    return source_path.with_suffix(f".{target_type.extension}")


def intermediate_path(input_path: Path, file_type: FileType) -> Path:
    """Temporary artifact path for a non-final hop, next to the hop's input."""
    return input_path.with_name(f"{TEMP_PREFIX}{input_path.stem}.{file_type.extension}")


class ConversionManager:
    """
    Manages file conversions, chaining converters when no direct one exists.
    """

    def __init__(self, registry: Optional[ConverterRegistry] = None):
        self.registry = registry if registry is not None else create_default_registry()
        self.last_intermediates: List[Path] = []

    def register_converter(self, converter: BaseConverter) -> None:
        """
        Register a converter instance, replacing any for the same pair.
        """
        self.registry.register(converter)

    def find_conversion_path(self, source_type: FileType, target_type: FileType) -> Optional[List[FileType]]:
        return self.registry.find_conversion_path(source_type, target_type)

    def convert(self,
                source_type: FileType,
                source_path: PathLike,
                target_type: FileType,
                output_path: Optional[PathLike] = None,
                progress_callback: Optional[Callable[[int], None]] = None) -> Path:
        """
        Convert a file to the target type.

        Args:
            source_type: Declared type of the source file
            source_path: Path to source file
            target_type: Desired output type
            output_path: Where to write the result (default: source path
                with the target extension)
            progress_callback: Optional callback for progress updates

        Returns:
            Path: Path to converted file

        Raises:
            ConfigurationError: If either type is unknown
            NoConversionPathError: If no chain of converters exists
            ConversionFailedError: If a converter fails
        """
        request = ConversionRequest(
            source_type=source_type,
            source_path=Path(source_path),
            target_type=target_type,
            output_path=Path(output_path) if output_path is not None else None,
        )
        return self.execute(request, progress_callback)

    def execute(self,
                request: ConversionRequest,
                progress_callback: Optional[Callable[[int], None]] = None) -> Path:
        """Run a conversion request. See ``convert`` for details."""
        if request.source_type.is_unknown:
            raise ConfigurationError("Source file type not specified")
        if request.target_type.is_unknown:
            raise ConfigurationError("Target file type not specified")

        source_path = Path(request.source_path)
        if not source_path.name:
            raise ConfigurationError("Source file not specified")

        if request.output_path is not None:
            output_path = Path(request.output_path)
        else:
            output_path = default_output_path(source_path, request.target_type)

        self.last_intermediates = []

        # A direct converter always wins over a chain
        if self.registry.can_convert(request.source_type, request.target_type):
            logger.debug("Direct conversion %s -> %s", request.source_type, request.target_type)
            self.registry.convert(
                request.source_type,
                request.target_type,
                source_path,
                output_path,
                progress_callback,
            )
            return output_path

        path = self.registry.find_conversion_path(request.source_type, request.target_type)
        if path is None:
            raise NoConversionPathError(request.source_type, request.target_type)

        logger.info("Multi-step conversion path: %s", " -> ".join(str(t) for t in path))

        hops = list(zip(path, path[1:]))
        current_input = source_path

        for index, (from_type, to_type) in enumerate(hops):
            is_last = index == len(hops) - 1
            hop_output = output_path if is_last else intermediate_path(current_input, to_type)

            logger.debug("Hop %d/%d: %s (%s) -> %s (%s)",
                         index + 1, len(hops), current_input, from_type, hop_output, to_type)

            if not is_last:
                self.last_intermediates.append(hop_output)

            self.registry.convert(
                from_type,
                to_type,
                current_input,
                hop_output,
                _scaled_progress(progress_callback, index, len(hops)),
            )
            current_input = hop_output

        return output_path


def _scaled_progress(progress_callback: Optional[Callable[[int], None]],
                     index: int,
                     total: int) -> Optional[Callable[[int], None]]:
    """Map one hop's 0-100 progress onto its share of the whole request."""
    if progress_callback is None:
        return None

    def report(percent: int) -> None:
        progress_callback((index * 100 + percent) // total)

    return report
