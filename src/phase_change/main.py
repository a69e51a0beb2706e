# main.py
import argparse
import logging
import sys
from pathlib import Path

import tqdm

from phase_change.core.batch import BatchConverter
from phase_change.core.exceptions import (
    ConfigurationError,
    ConverterError,
    DependencyError,
    UnsupportedFormatError,
)
from phase_change.core.formats import FileType
from phase_change.core.manager import ConversionManager
from phase_change.utils.dependencies import check_dependencies
from phase_change.utils.format_utils import (
    file_type_from_path,
    get_compatible_formats,
    get_supported_formats,
)

def create_progress_bar(desc: str) -> tqdm.tqdm:
    return tqdm.tqdm(total=100, desc=desc, unit="%")

def parse_file_type(parser: argparse.ArgumentParser, value: str) -> FileType:
    file_type = FileType.from_extension(value)
    if file_type.is_unknown:
        parser.error(f"Unknown format: {value}. Use list-formats to see supported formats")
    return file_type

def show_dependency_status():
    """Display status of the codec backends"""
    status = check_dependencies()

    print("\nDependency Status:")
    print("-" * 60)

    for tool, info in status.items():
        if info['available']:
            print(f"{tool.capitalize()}: Available")
            print(f"   Path: {info['path']}")
            if info['version']:
                print(f"   Version: {info['version']}")
        else:
            print(f"{tool.capitalize()}: Not found")

    print("\nNote: Missing dependencies will limit conversion capabilities.")
    print("-" * 60)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phase-change",
        description="Local file format converter",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--verbose", "-v",
                        action="store_true",
                        help="Show debug output")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert a single file")
    convert_parser.add_argument("--input", "-i", required=True, help="Input file path")
    convert_parser.add_argument("--output-format", "-f", required=True,
                                help="Output format (e.g., jpg, mp3)")
    convert_parser.add_argument("--from", dest="source_format",
                                help="Input format (default: taken from the input extension)")
    convert_parser.add_argument("--output", "-o", help="Output file path (optional)")
    convert_parser.add_argument("--quiet", "-q",
                                action="store_true",
                                help="Suppress progress bar")

    # Batch convert command
    batch_parser = subparsers.add_parser("batch-convert", help="Convert multiple files")
    batch_parser.add_argument("--input-dir", "-i", required=True, help="Input directory")
    batch_parser.add_argument("--output-format", "-f", required=True,
                              help="Output format for all files")
    batch_parser.add_argument("--output-dir", "-o", help="Output directory (optional)")
    batch_parser.add_argument("--pattern", "-p", action="append",
                              help="File pattern to match (can specify multiple times)")

    # List formats command
    list_parser = subparsers.add_parser("list-formats", help="List supported formats")
    list_parser.add_argument("--from", dest="source_format",
                             help="Only list formats reachable from this format")

    subparsers.add_parser("check-deps", help="Check dependencies")

    return parser

def run_convert(parser, args, manager: ConversionManager) -> int:
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        return 1

    target_type = parse_file_type(parser, args.output_format)
    if args.source_format:
        source_type = parse_file_type(parser, args.source_format)
    else:
        source_type = file_type_from_path(input_path)

    if not manager.registry.can_convert(source_type, target_type):
        path = manager.find_conversion_path(source_type, target_type)
        if path and len(path) > 2:
            print("Multi-step conversion path: " + " -> ".join(str(t) for t in path))

    pbar = None
    progress_callback = None
    if not args.quiet:
        pbar = create_progress_bar("Converting")
        progress_callback = lambda x: pbar.update(x - pbar.n)

    try:
        output_path = manager.convert(
            source_type,
            input_path,
            target_type,
            args.output,
            progress_callback=progress_callback
        )
    finally:
        if pbar is not None:
            pbar.close()

    print(f"\nConversion successful! Output saved to: {output_path}")
    return 0

def run_batch(parser, args, manager: ConversionManager) -> int:
    input_dir = Path(args.input_dir)
    if not input_dir.is_dir():
        print(f"Error: Input directory not found: {input_dir}", file=sys.stderr)
        return 1

    target_type = parse_file_type(parser, args.output_format)
    batch_converter = BatchConverter(manager)
    results = batch_converter.batch_convert(
        input_dir,
        target_type,
        args.output_dir,
        args.pattern
    )

    print("Batch conversion complete!")
    print(f"Successfully converted: {len(results['successful'])} files")
    print(f"Failed: {len(results['failed'])} files")

    if results['failed']:
        print("\nFailed conversions:")
        for failed in results['failed']:
            print(f"  - {failed}")
        return 1
    return 0

def run_list_formats(parser, args, manager: ConversionManager) -> int:
    if args.source_format:
        source_type = parse_file_type(parser, args.source_format)
        formats = get_compatible_formats(source_type, manager.registry)
        print(f"\nFormats reachable from {source_type.extension}:")
    else:
        formats = get_supported_formats(manager.registry)
        print("\nSupported formats:")

    for file_type in formats:
        print(f"  - {file_type.extension} ({file_type})")
    return 0

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "check-deps":
        show_dependency_status()
        return 0

    manager = ConversionManager()

    try:
        if args.command == "convert":
            return run_convert(parser, args, manager)
        if args.command == "batch-convert":
            return run_batch(parser, args, manager)
        return run_list_formats(parser, args, manager)

    except ConfigurationError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("\nTip: Use --from to declare the input format", file=sys.stderr)
        return 1
    except UnsupportedFormatError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("\nTip: Use list-formats to see supported formats", file=sys.stderr)
        return 1
    except DependencyError as e:
        print(f"Dependency error: {str(e)}", file=sys.stderr)
        print("Use check-deps to verify the external tools", file=sys.stderr)
        return 1
    except ConverterError as e:
        print(f"Conversion error: {str(e)}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
