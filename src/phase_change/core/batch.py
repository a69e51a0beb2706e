# core/batch.py
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from phase_change.core.exceptions import ConverterError
from phase_change.core.formats import FileType

logger = logging.getLogger(__name__)

class BatchConverter:
    """Handles batch conversion of multiple files."""

    def __init__(self, conversion_manager):
        """Initialize with a conversion manager instance."""
        self.manager = conversion_manager

    def batch_convert(self, source_dir: Union[str, Path], target_type: FileType,
                      output_dir: Union[str, Path] = None,
                      file_patterns: List[str] = None,
                      source_type: Optional[FileType] = None,
                      show_progress: bool = True) -> Dict[str, List[str]]:
        """
        Convert multiple files matching patterns to the target type.

        Files are converted one after another. A failing file is recorded
        and the batch carries on with the next one.

        Args:
            source_dir: Directory containing source files
            target_type: Target file type
            output_dir: Directory to save converted files (default: source_dir)
            file_patterns: List of glob patterns to match files (default: ["*.*"])
            source_type: Declared type of every source file (default: taken
                from each file's extension)
            show_progress: Display a progress bar

        Returns:
            Dict with 'successful' and 'failed' lists of file paths
        """
        source_dir = Path(source_dir)
        output_dir = Path(output_dir) if output_dir else source_dir

        os.makedirs(output_dir, exist_ok=True)

        if not file_patterns:
            file_patterns = ["*.*"]

        all_files = []
        for pattern in file_patterns:
            all_files.extend(source_dir.glob(pattern))

        # Remove duplicates and directories
        all_files = sorted(set(f for f in all_files if f.is_file()))

        results = {
            "successful": [],
            "failed": []
        }

        for source_path in tqdm(all_files, desc="Converting", unit="file", disable=not show_progress):
            file_type = source_type if source_type is not None else FileType.from_extension(source_path.suffix)
            output_path = output_dir / f"{source_path.stem}.{target_type.extension}"

            try:
                self.manager.convert(file_type, source_path, target_type, output_path)
                results["successful"].append(str(source_path))
            except ConverterError as e:
                logger.warning("Failed to convert %s: %s", source_path, e)
                results["failed"].append(str(source_path))

        return results
