"""Record Withings body measurements into InfluxDB."""

__version__ = "0.1.0"
