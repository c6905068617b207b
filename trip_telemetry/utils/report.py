"""
Trip summary and validation reporting.

Renders the trip summary in its fixed layout (distance/duration banner plus
eight labelled statistic blocks) as HTML or plain text, lists validation
findings, and assembles a JSON-serializable report.
"""

import html
import logging
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple

from .numeric import format_fixed
from .io_utils import FileHandler

logger = logging.getLogger(__name__)

REPORT_VERSION = '1.0'

# Block title, field name, statistics shown
STAT_BLOCKS = [
    ('PWM', 'pwm', ('max', 'avg', 'median')),
    ('SPEED', 'speed', ('max', 'avg', 'median')),
    ('POWER', 'power', ('max', 'avg', 'median')),
    ('CURRENT', 'current', ('max', 'avg', 'median')),
    ('VOLTAGE', 'voltage', ('max', 'min', 'avg', 'median')),
    ('BATTERY', 'battery_level', ('max', 'min', 'avg', 'median')),
    ('TEMPERATURE', 'system_temp', ('max', 'min', 'avg', 'median')),
]

STAT_LABELS = {'max': 'Max', 'min': 'Min', 'avg': 'Avg', 'median': 'Median'}


def format_timestamp(timestamp) -> str:
    """Format as 'D MMMM YYYY HH:mm', e.g. '1 January 2024 10:00'."""
    if timestamp is None:
        return 'unknown'
    return f"{timestamp.day} {timestamp.strftime('%B %Y %H:%M')}"


class SummaryReporter:
    """Generates summary and findings reports for one trip."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize reporter.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.no_data = self.config.get('no_data_marker', '-')
        self.file_handler = FileHandler(self.config)

    def summary_blocks(self, summary) -> List[Tuple[str, List[str]]]:
        """
        Lay out the summary as (title, lines) blocks.

        Args:
            summary: TripSummary

        Returns:
            START & FINISH block followed by one block per tracked field
        """
        blocks = [(
            'START & FINISH',
            [
                f"START: {format_timestamp(summary.start_time)}",
                f"FINISH: {format_timestamp(summary.end_time)}",
                f"MILEAGE: {format_fixed(summary.start_odometer_km)} km "
                f"→ {format_fixed(summary.end_odometer_km)} km",
            ]
        )]

        for title, field_name, shown in STAT_BLOCKS:
            stats = summary.fields.get(field_name)
            lines = []
            for stat in shown:
                value = getattr(stats, stat) if stats is not None else self.no_data
                lines.append(f"{STAT_LABELS[stat]}: {value}")
            blocks.append((title, lines))

        return blocks

    def banner(self, summary) -> Tuple[str, str]:
        """Distance and duration lines of the banner."""
        return (f"{format_fixed(summary.distance_km)} km", f"in {summary.duration}")

    def render_html(self, summary) -> str:
        """
        Render the summary as an HTML fragment.

        Args:
            summary: TripSummary

        Returns:
            HTML with a summary container and a stats container
        """
        distance, duration = self.banner(summary)
        parts = [
            '<div class="summary-container">',
            f'  <p>{html.escape(distance)}<br>{html.escape(duration)}</p>',
            '</div>',
            '<div class="stats-container">',
        ]

        for title, lines in self.summary_blocks(summary):
            parts.append('  <div class="stat-block">')
            parts.append(f'    <h3>{html.escape(title)}</h3>')
            parts.append('    ' + ''.join(f'<p>{html.escape(line)}</p>' for line in lines))
            parts.append('  </div>')

        parts.append('</div>')
        return '\n'.join(parts) + '\n'

    def render_text(self, summary) -> str:
        """Render the summary as plain text for terminal output."""
        distance, duration = self.banner(summary)
        lines = [f"{distance} {duration}", ""]
        for title, block_lines in self.summary_blocks(summary):
            lines.append(title)
            lines.extend(f"  {line}" for line in block_lines)
        return '\n'.join(lines) + '\n'

    def render_findings(self, findings) -> List[str]:
        """One 'Invalid data in row N: ...' line per finding."""
        return [
            f"Invalid data in row {finding.row_number}: {finding.description}"
            for finding in findings
        ]

    def render_findings_html(self, findings) -> str:
        """Findings as an HTML block, empty string when there are none."""
        if not findings:
            return ''
        paragraphs = ''.join(f'<p>{html.escape(line)}</p>' for line in self.render_findings(findings))
        return f'<div class="invalid-data">{paragraphs}</div>\n'

    def generate_report(self, summary, findings,
                        gps_available: bool = True,
                        output_path: Optional[str] = None,
                        source: Optional[str] = None) -> Dict[str, Any]:
        """
        Assemble the full trip report.

        Args:
            summary: TripSummary or None when no summary could be computed
            findings: Validation findings
            gps_available: Whether the file contained GPS coordinates
            output_path: Optional path to save the report as JSON
            source: Optional name of the input file

        Returns:
            Dictionary with the complete report
        """
        report = {
            'report_metadata': {
                'generated_at': datetime.now().isoformat(),
                'report_version': REPORT_VERSION,
                'source': source
            },
            'summary': summary.to_dict() if summary is not None else None,
            'summary_available': summary is not None,
            'gps_available': gps_available,
            'validation': {
                'invalid_row_count': len(findings),
                'findings': [finding.to_dict() for finding in findings]
            }
        }

        if output_path:
            self.file_handler.save_json(report, output_path)
            logger.info(f"Trip report saved to {output_path}")

        return report
