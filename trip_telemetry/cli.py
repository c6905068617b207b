"""
Command-line interface for Trip Telemetry.

Validates and summarizes telemetry CSV logs and renders their chart and map.
"""

import argparse
import sys
import json
import logging
from pathlib import Path
from typing import List

from . import __version__
from .config import TelemetryConfig
from .parsers import CsvLogParser
from .pipeline import TripLogProcessor
from .utils import FileHandler, SummaryReporter, CorruptedFileError


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Validate and summarize e-bike telemetry CSV logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize one trip
  trip-telemetry ride.csv

  # Write reports and images to a custom directory
  trip-telemetry ride.csv -o /path/to/output

  # Use configuration file
  trip-telemetry ride.csv --config config.json

  # Process every CSV in a directory, one file at a time
  trip-telemetry --input-dir /path/to/logs

  # Print the JSON report instead of the text summary
  trip-telemetry ride.csv --json --no-visualizations
        """
    )

    # Input arguments
    parser.add_argument(
        'files',
        nargs='*',
        help='Telemetry CSV files to process'
    )
    parser.add_argument(
        '--input-dir', '-i',
        type=str,
        help='Directory to search for CSV files (alternative to specifying files)'
    )

    # Output arguments
    parser.add_argument(
        '--output', '-o',
        type=str,
        default='output',
        help='Output directory (default: output)'
    )

    # Configuration arguments
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration file path (JSON format)'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        help='Save current configuration to file'
    )

    # Validation ranges
    parser.add_argument(
        '--battery-min',
        type=float,
        help='Lowest valid battery level in %% (default: 0)'
    )

    parser.add_argument(
        '--battery-max',
        type=float,
        help='Highest valid battery level in %% (default: 100)'
    )

    parser.add_argument(
        '--temp-min',
        type=float,
        help='Lowest valid system temperature in °C (default: -50)'
    )

    parser.add_argument(
        '--temp-max',
        type=float,
        help='Highest valid system temperature in °C (default: 100)'
    )

    parser.add_argument(
        '--flag-unparseable',
        action='store_true',
        help='Report non-numeric battery and temperature values as invalid'
    )

    # Output control
    parser.add_argument(
        '--no-visualizations',
        action='store_true',
        help='Skip rendering the chart and map images'
    )

    parser.add_argument(
        '--no-report',
        action='store_true',
        help='Skip writing summary, findings and JSON report files'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the JSON report to stdout'
    )

    # Logging and debugging
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False):
    """Configure logging based on command line arguments."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def discover_csv_files(input_dir: str) -> List[str]:
    """Discover telemetry CSV files in the specified directory."""
    file_handler = FileHandler()
    return file_handler.find_csv_files(input_dir)


def validate_files(files: List[str]) -> List[str]:
    """Validate that input files exist and are readable."""
    parser = CsvLogParser()
    valid_files = []

    for file_path in files:
        path = Path(file_path)
        if not path.exists():
            print(f"Warning: File not found: {file_path}", file=sys.stderr)
            continue

        if not path.is_file():
            print(f"Warning: Not a file: {file_path}", file=sys.stderr)
            continue

        if not parser.validate_file(file_path):
            print(f"Warning: Unsupported file format: {file_path}", file=sys.stderr)
            continue

        valid_files.append(str(path.absolute()))

    return valid_files


def create_config_from_args(args: argparse.Namespace) -> TelemetryConfig:
    """Create TelemetryConfig from command line arguments."""
    # Start with config file if provided
    if args.config:
        try:
            config = TelemetryConfig.from_file(args.config)
        except (OSError, ValueError, TypeError) as e:
            print(f"Error loading config file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        config = TelemetryConfig()

    # Override with command line arguments
    if args.battery_min is not None:
        config.battery_min = args.battery_min

    if args.battery_max is not None:
        config.battery_max = args.battery_max

    if args.temp_min is not None:
        config.temperature_min = args.temp_min

    if args.temp_max is not None:
        config.temperature_max = args.temp_max

    if args.flag_unparseable:
        config.flag_unparseable = True

    if args.no_visualizations:
        config.create_visualizations = False

    if args.no_report:
        config.save_report = False

    if args.verbose or args.debug:
        config.verbose = True

    # Set output directory
    config.output_dir = args.output

    # Re-run validation after overrides
    return config.copy()


def print_results(results: dict, reporter: SummaryReporter, source: str):
    """Print the text summary and findings of one file."""
    print(f"\n== {Path(source).name} ==")

    if results['summary'] is None:
        print("Cannot determine trip summary (file has no data rows)")
    else:
        print(reporter.render_text(results['summary']))

    if not results['gps_available']:
        print("No GPS data in file")

    for line in reporter.render_findings(results['findings']):
        print(line)

    if results.get('output_files'):
        print("Output files generated:")
        for file_path in results['output_files']:
            print(f"  {file_path}")


def main():
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Handle special cases first
    if not args.files and not args.input_dir:
        parser.print_help()
        return 1

    # Ensure only one input method is used
    if args.files and args.input_dir:
        print("Error: Cannot specify both files and --input-dir", file=sys.stderr)
        return 1

    # Setup logging
    setup_logging(args.verbose, args.debug, args.quiet)
    logger = logging.getLogger('trip_telemetry.cli')

    try:
        # Discover input files
        if args.input_dir:
            logger.info(f"Discovering CSV files in: {args.input_dir}")
            files = discover_csv_files(args.input_dir)
            if not files:
                print(f"No CSV files found in directory: {args.input_dir}", file=sys.stderr)
                return 1
        else:
            files = args.files

        # Validate files
        valid_files = validate_files(files)
        if not valid_files:
            print("No valid telemetry files to process", file=sys.stderr)
            return 1

        # Create configuration
        try:
            config = create_config_from_args(args)
        except ValueError as e:
            print(f"Error: Invalid configuration: {e}", file=sys.stderr)
            return 1

        # Save configuration if requested
        if args.save_config:
            config.to_file(args.save_config)
            logger.info(f"Configuration saved to: {args.save_config}")

        # Validate output directory
        file_handler = FileHandler()
        if not file_handler.validate_output_directory(config.output_dir):
            print(f"Error: Cannot write to output directory: {config.output_dir}", file=sys.stderr)
            return 1

        processor = TripLogProcessor(config)
        exit_code = 0

        # Each file is an independent load
        for file_path in valid_files:
            try:
                results = processor.process_file(file_path)
            except (FileNotFoundError, CorruptedFileError) as e:
                print(f"Error: {e}", file=sys.stderr)
                exit_code = 1
                continue

            if args.json:
                report = processor.reporter.generate_report(
                    results['summary'], results['findings'],
                    gps_available=results['gps_available'],
                    source=Path(file_path).name
                )
                print(json.dumps(report, indent=2, default=str, ensure_ascii=False))
            elif not args.quiet:
                print_results(results, processor.reporter, file_path)

        return exit_code

    except KeyboardInterrupt:
        print("\nProcessing interrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Processing failed: {str(e)}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
