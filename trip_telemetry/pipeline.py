"""
Main pipeline orchestrator for trip telemetry processing.

Coordinates loading, validation, summarization and rendering of one
telemetry CSV file.
"""

from typing import List, Dict, Any, Optional, Tuple, Union
from pathlib import Path
import logging

from .config import TelemetryConfig
from .parsers import CsvLogParser, RowTable
from .processors import (
    SensorRangeValidator, TripSummarizer, ChartSeriesBuilder, TrackExtractor,
    ValidationFinding, TripSummary
)
from .utils import (
    FileHandler, RobustErrorHandler, SummaryReporter, TelemetryChart, TrackMap
)


def analyze_rows(rows, config: Optional[TelemetryConfig] = None
                 ) -> Tuple[List[ValidationFinding], Optional[TripSummary]]:
    """
    Validate and summarize a row table.

    Args:
        rows: RowTable, DataFrame or list of row mappings
        config: Processing configuration. If None, uses default config.

    Returns:
        (findings, summary); summary is None when the table has no rows
    """
    config = config or TelemetryConfig()
    table = RowTable.coerce(rows)

    findings = SensorRangeValidator(config.to_dict()).validate(table)
    summary = TripSummarizer(config.to_dict()).summarize(table)
    return findings, summary


class TripLogProcessor:
    """Main pipeline for processing a trip telemetry file."""

    def __init__(self, config: Optional[TelemetryConfig] = None):
        """
        Initialize the trip log processor.

        Args:
            config: Processing configuration. If None, uses default config.
        """
        self.config = config or TelemetryConfig()
        self.logger = self._setup_logging()

        settings = self.config.to_dict()

        self.parser = CsvLogParser(settings)

        # Initialize processors
        self.validator = SensorRangeValidator(settings)
        self.summarizer = TripSummarizer(settings)
        self.chart_builder = ChartSeriesBuilder(settings)
        self.track_extractor = TrackExtractor(settings)

        # Initialize utilities
        self.file_handler = FileHandler(settings)
        self.reporter = SummaryReporter(settings)

    def load(self, source: Union[str, Path]) -> RowTable:
        """
        Load a telemetry CSV file.

        Args:
            source: Path to the CSV file

        Returns:
            RowTable in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            CorruptedFileError: If the file cannot be read as CSV
        """
        return self.parser.parse(str(source))

    def analyze(self, rows, error_handler: Optional[RobustErrorHandler] = None) -> Dict[str, Any]:
        """
        Run every stage on a row table.

        Stages are isolated: a failing stage is logged and recorded, and the
        remaining stages still run.

        Args:
            rows: RowTable, DataFrame or list of row mappings
            error_handler: Handler collecting stage failures (new one if None)

        Returns:
            Dictionary with rows, findings, summary, chart_data, track,
            gps_available and errors
        """
        handler = error_handler or RobustErrorHandler()
        table = RowTable.coerce(rows)

        findings = []
        summary = None
        chart_data = None
        track = []

        with handler.handle_processing_errors("validation"):
            findings = self.validator.validate(table)

        with handler.handle_processing_errors("summary"):
            summary = self.summarizer.summarize(table)

        with handler.handle_processing_errors("chart series"):
            chart_data = self.chart_builder.build(table)

        with handler.handle_processing_errors("GPS track"):
            track = self.track_extractor.extract(table)

        if summary is None:
            self.logger.warning("No summary available for this file")
        if not track:
            self.logger.warning("No GPS data in file")

        return {
            'rows': table,
            'findings': findings,
            'summary': summary,
            'chart_data': chart_data,
            'track': track,
            'gps_available': bool(track),
            'errors': handler.get_error_summary()
        }

    def process_file(self, file_path: str, output_dir: Optional[str] = None) -> Dict[str, Any]:
        """
        Process one telemetry file and write its outputs.

        Args:
            file_path: Path to the CSV file
            output_dir: Output directory (overrides config if provided)

        Returns:
            Dictionary with analysis results and the list of output files
        """
        if output_dir:
            self.config.output_dir = output_dir

        output_path = Path(self.config.output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        source = Path(file_path)
        self.logger.info(f"Processing telemetry file: {source.name}")
        self.logger.info(f"Output directory: {output_path.absolute()}")

        try:
            rows = self.load(file_path)
        except Exception as e:
            self.logger.error(f"Failed to load {file_path}: {str(e)}")
            raise

        handler = RobustErrorHandler()
        results = self.analyze(rows, handler)
        results['output_files'] = self._generate_outputs(results, source, output_path, handler)
        results['errors'] = handler.get_error_summary()

        self.logger.info(f"Finished {source.name}: {len(results['findings'])} invalid rows, "
                         f"{len(results['output_files'])} output files")
        return results

    def _generate_outputs(self, results: Dict[str, Any], source: Path,
                          output_path: Path, handler: RobustErrorHandler) -> List[str]:
        """Write the report files and images."""
        output_files = []
        stem = source.stem

        if self.config.save_report:
            with handler.handle_processing_errors("summary report"):
                if results['summary'] is not None:
                    summary_path = output_path / f"{stem}_summary.html"
                    self.file_handler.save_text(self.reporter.render_html(results['summary']),
                                                str(summary_path))
                    output_files.append(str(summary_path))

            with handler.handle_processing_errors("findings report"):
                findings_path = output_path / f"{stem}_findings.txt"
                lines = self.reporter.render_findings(results['findings'])
                self.file_handler.save_text('\n'.join(lines) + ('\n' if lines else ''),
                                            str(findings_path))
                output_files.append(str(findings_path))

            with handler.handle_processing_errors("JSON report"):
                report_path = output_path / f"{stem}_report.json"
                self.reporter.generate_report(
                    results['summary'], results['findings'],
                    gps_available=results['gps_available'],
                    output_path=str(report_path),
                    source=source.name
                )
                output_files.append(str(report_path))

        if self.config.create_visualizations:
            settings = self.config.to_dict()

            with handler.handle_processing_errors("chart rendering"):
                if results['chart_data'] is not None:
                    chart = TelemetryChart(settings)
                    try:
                        chart_path = output_path / f"{stem}_chart.png"
                        chart.render(results['chart_data'], str(chart_path))
                        output_files.append(str(chart_path))
                    finally:
                        chart.close()

            with handler.handle_processing_errors("map rendering"):
                track_map = TrackMap(settings)
                try:
                    map_path = output_path / f"{stem}_map.png"
                    track_map.render(results['track'], str(map_path))
                    output_files.append(str(map_path))
                finally:
                    track_map.close()

        return output_files

    def _setup_logging(self) -> logging.Logger:
        """Set up logging configuration."""
        logger = logging.getLogger('trip_telemetry')

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        logger.setLevel(logging.INFO if self.config.verbose else logging.WARNING)

        return logger
