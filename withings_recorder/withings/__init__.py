"""Withings integration modules."""
