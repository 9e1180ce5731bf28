"""Infrastructure helpers for Withings integration."""

from .client import (
    WithingsMeasurementsAdapter,
    create_withings_measurements_adapter,
)
from .oauth import WithingsOAuthClient, create_withings_oauth_client

__all__ = [
    "WithingsMeasurementsAdapter",
    "WithingsOAuthClient",
    "create_withings_measurements_adapter",
    "create_withings_oauth_client",
]
