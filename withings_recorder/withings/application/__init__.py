"""Application layer helpers for Withings integration."""

from .authorize import AuthorizeUseCase, extract_code
from .ports import CredentialStore, MeasurementsPort, SampleSink, TokenProvider
from .recorder import RecordStatusUseCase
from .session import TokenSession

__all__ = [
    "AuthorizeUseCase",
    "CredentialStore",
    "MeasurementsPort",
    "RecordStatusUseCase",
    "SampleSink",
    "TokenProvider",
    "TokenSession",
    "extract_code",
]
