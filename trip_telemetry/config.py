"""
Configuration management for trip telemetry processing.

Provides centralized configuration handling with validation and defaults.
"""

from dataclasses import dataclass
from typing import Dict, Any
import json
from pathlib import Path

from .utils.error_handling import ConfigurationError


@dataclass
class TelemetryConfig:
    """Configuration class for the trip telemetry pipeline."""

    # Sensor range validation settings (inclusive bounds)
    battery_min: float = 0.0  # % - lowest plausible battery level
    battery_max: float = 100.0  # % - highest plausible battery level
    temperature_min: float = -50.0  # °C - lowest plausible controller temperature
    temperature_max: float = 100.0  # °C - highest plausible controller temperature
    flag_unparseable: bool = False  # Report non-numeric sensor values as findings

    # Summary settings
    no_data_marker: str = "-"  # Shown for statistics of fields without numeric data
    distance_divisor: float = 1000.0  # Odometer units per kilometre

    # Output settings
    output_dir: str = "output"  # Directory for output files
    create_visualizations: bool = True  # Render chart and map images
    save_report: bool = True  # Write summary HTML, findings and JSON report
    chart_dpi: int = 150  # Resolution of saved images

    # Processing settings
    verbose: bool = False  # Enable verbose logging

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_config()

    def _validate_config(self):
        """Validate configuration parameters."""
        if self.battery_min > self.battery_max:
            raise ConfigurationError("battery_min must not exceed battery_max")

        if self.temperature_min > self.temperature_max:
            raise ConfigurationError("temperature_min must not exceed temperature_max")

        if self.distance_divisor <= 0:
            raise ConfigurationError("distance_divisor must be positive")

        if self.chart_dpi <= 0:
            raise ConfigurationError("chart_dpi must be positive")

        if not isinstance(self.no_data_marker, str):
            raise ConfigurationError("no_data_marker must be a string")

    @property
    def battery_range(self):
        """Inclusive (min, max) battery level range."""
        return (self.battery_min, self.battery_max)

    @property
    def temperature_range(self):
        """Inclusive (min, max) system temperature range."""
        return (self.temperature_min, self.temperature_max)

    @classmethod
    def from_file(cls, config_path: str) -> 'TelemetryConfig':
        """
        Load configuration from JSON file.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            TelemetryConfig instance
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, 'r') as f:
            config_dict = json.load(f)

        return cls(**config_dict)

    def to_file(self, config_path: str):
        """
        Save configuration to JSON file.

        Args:
            config_path: Path where to save the configuration
        """
        path = Path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return {key: value for key, value in self.__dict__.items() if not key.startswith('_')}

    def copy(self) -> 'TelemetryConfig':
        """Create a copy of the configuration."""
        return TelemetryConfig(
            battery_min=self.battery_min,
            battery_max=self.battery_max,
            temperature_min=self.temperature_min,
            temperature_max=self.temperature_max,
            flag_unparseable=self.flag_unparseable,
            no_data_marker=self.no_data_marker,
            distance_divisor=self.distance_divisor,
            output_dir=self.output_dir,
            create_visualizations=self.create_visualizations,
            save_report=self.save_report,
            chart_dpi=self.chart_dpi,
            verbose=self.verbose
        )
