# utils/format_utils.py
from pathlib import Path
from typing import List, Union

from phase_change.core.formats import FileType, MediaCategory, all_file_types
from phase_change.core.registry import ConverterRegistry

def file_type_from_path(file_path: Union[str, Path]) -> FileType:
    """
    Determine the file type of a path from its extension.

    Args:
        file_path: Path object or string representing the file path or extension

    Returns:
        FileType: Matching type, or the unknown sentinel
    """
    if isinstance(file_path, str):
        if '.' in file_path:
            extension = file_path.rsplit('.', 1)[-1]
        else:
            extension = file_path
    else:
        extension = file_path.suffix

    return FileType.from_extension(extension)

def get_file_category(file_path: Union[str, Path]) -> MediaCategory:
    """
    Determine the category of a file based on its extension.

    Args:
        file_path: Path object or string representing the file path or extension

    Returns:
        MediaCategory: IMAGE, AUDIO or UNKNOWN
    """
    return file_type_from_path(file_path).category

def get_compatible_formats(source_type: FileType, registry: ConverterRegistry) -> List[FileType]:
    """
    Get every file type the source can be converted to, directly or in several steps.

    Args:
        source_type: Input file type
        registry: ConverterRegistry instance

    Returns:
        List of reachable file types, sorted by extension
    """
    if source_type.is_unknown:
        return []

    reachable = registry.reachable_formats(source_type)
    reachable.discard(source_type)
    return sorted(reachable, key=lambda t: t.extension)

def format_can_be_converted(source_type: FileType, target_type: FileType, registry: ConverterRegistry) -> bool:
    """
    Check if a conversion between two file types is possible.

    Args:
        source_type: Input file type
        target_type: Output file type
        registry: ConverterRegistry instance

    Returns:
        True if a chain of converters exists, False otherwise
    """
    if source_type.is_unknown or target_type.is_unknown:
        return False
    return registry.find_conversion_path(source_type, target_type) is not None

def get_supported_formats(registry: ConverterRegistry) -> List[FileType]:
    """Every file type that appears on a registered converter, sorted by extension."""
    return sorted(registry.formats, key=lambda t: t.extension)

def list_extensions() -> List[str]:
    """Canonical extensions of every known file type."""
    return sorted(t.extension for t in all_file_types())
