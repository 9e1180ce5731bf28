from .credential import Credential, TokenGrant
from .measure import (
    FetchWindow,
    RawMeasure,
    RawMeasureGroup,
    RunReport,
    Sample,
    TransformResult,
)

__all__ = [
    'Credential',
    'TokenGrant',
    'FetchWindow',
    'RawMeasure',
    'RawMeasureGroup',
    'RunReport',
    'Sample',
    'TransformResult',
]
