from .sink import InfluxSampleSink, create_influx_client, to_point

__all__ = ["InfluxSampleSink", "create_influx_client", "to_point"]
