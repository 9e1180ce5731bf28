from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol, Sequence

import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from ..errors import SinkWriteError
from ..models import Sample
from ..settings import Settings

logger = logging.getLogger(__name__)


class PointWriter(Protocol):
    def write_points(self, points: List[Dict[str, Any]], time_precision: str | None = None) -> bool:
        ...


def to_point(sample: Sample) -> Dict[str, Any]:
    return {
        "measurement": sample.metric_name,
        "time": sample.timestamp,
        "fields": {"value": float(sample.value)},
    }


class InfluxSampleSink:
    """Write samples as one point per measurement into InfluxDB."""

    def __init__(self, client: PointWriter) -> None:
        self._client = client

    def write(self, samples: Sequence[Sample]) -> None:
        if not samples:
            logger.debug("no samples to write")
            return

        points = [to_point(sample) for sample in samples]
        try:
            ok = self._client.write_points(points, time_precision="s")
        except (InfluxDBClientError, InfluxDBServerError, requests.RequestException) as exc:
            raise SinkWriteError(f"InfluxDB write failed: {exc}") from exc
        if ok is False:
            raise SinkWriteError("InfluxDB rejected the batch")


def create_influx_client(settings: Settings) -> InfluxDBClient:
    return InfluxDBClient(
        host=settings.influxdb_host,
        port=settings.influxdb_port,
        username=settings.influxdb_username,
        password=settings.influxdb_password,
        database=settings.influxdb_database,
        ssl=settings.influxdb_ssl,
        verify_ssl=settings.influxdb_ssl,
    )


__all__ = ["InfluxSampleSink", "PointWriter", "create_influx_client", "to_point"]
