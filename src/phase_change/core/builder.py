# core/builder.py
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from phase_change.converters.base import BaseConverter
from phase_change.core.exceptions import ConfigurationError
from phase_change.core.formats import FileType
from phase_change.core.manager import ConversionManager, ConversionRequest
from phase_change.core.registry import ConverterRegistry, create_default_registry

class FileConvertBuilder:
    """
    Fluent front end for a single conversion.

    Example:
        FileConvertBuilder() \\
            .from_file(PNG, "input.png") \\
            .to_file(JPEG, "output.jpg") \\
            .convert()
    """

    def __init__(self):
        self._source_type = FileType()
        self._source_path: Optional[Path] = None
        self._target_type = FileType()
        self._output_path: Optional[Path] = None
        self._registry: Optional[ConverterRegistry] = None
        self._custom_converters: List[BaseConverter] = []

    def from_file(self, file_type: FileType, file_path: Union[str, Path]) -> "FileConvertBuilder":
        self._source_type = file_type
        self._source_path = Path(file_path)
        return self

    def to_file(self, file_type: FileType, file_path: Optional[Union[str, Path]] = None) -> "FileConvertBuilder":
        self._target_type = file_type
        self._output_path = Path(file_path) if file_path is not None else None
        return self

    def with_registry(self, registry: ConverterRegistry) -> "FileConvertBuilder":
        """Start from a copy of ``registry`` instead of a fresh default registry."""
        self._registry = registry
        return self

    def with_converter(self, converter: BaseConverter) -> "FileConvertBuilder":
        self._custom_converters.append(converter)
        return self

    def with_converters(self, converters: Iterable[BaseConverter]) -> "FileConvertBuilder":
        self._custom_converters.extend(converters)
        return self

    def convert(self, progress_callback: Optional[Callable[[int], None]] = None) -> Path:
        """
        Register custom converters and run the conversion.

        Custom converters override built-in ones for the same pair. They
        apply to this conversion only: a registry passed to
        ``with_registry`` is copied, never modified.

        Returns:
            Path: Path to converted file
        """
        if self._source_path is None:
            raise ConfigurationError("Source file not specified")

        registry = self._registry.copy() if self._registry is not None else create_default_registry()
        for converter in self._custom_converters:
            registry.register(converter)

        request = ConversionRequest(
            source_type=self._source_type,
            source_path=self._source_path,
            target_type=self._target_type,
            output_path=self._output_path,
        )
        return ConversionManager(registry).execute(request, progress_callback)
