"""
Contracts Module

Explicit data types exchanged between layers. No layer may import
implementation details from another layer.

DESIGN PRINCIPLES:
==================
1. Records and outcomes are immutable (frozen dataclasses)
2. Every failure mode has an explicit ErrorCode
3. Time is carried as integer units, never floats
"""

from .base import (
    ErrorCode, Error, Result,
    JumpScareError, InvalidInputError,
    CollaboratorUnavailableError, StorageUnavailableError,
)
from .records import (
    UNITS_PER_SECOND, DEFAULT_START_DELTA_SECONDS, DEFAULT_END_DELTA_SECONDS,
    ParsedEnum, ScareIntensity, ScareType, ItemKind, VIDEO_KINDS,
    CatalogItem, CatalogMatch, CanonicalRecord, DisplayInterval,
    PluginConfiguration, MergeResult, ImportStatistics, ImportResult,
)

__all__ = [
    'ErrorCode', 'Error', 'Result',
    'JumpScareError', 'InvalidInputError',
    'CollaboratorUnavailableError', 'StorageUnavailableError',
    'UNITS_PER_SECOND', 'DEFAULT_START_DELTA_SECONDS', 'DEFAULT_END_DELTA_SECONDS',
    'ParsedEnum', 'ScareIntensity', 'ScareType', 'ItemKind', 'VIDEO_KINDS',
    'CatalogItem', 'CatalogMatch', 'CanonicalRecord', 'DisplayInterval',
    'PluginConfiguration', 'MergeResult', 'ImportStatistics', 'ImportResult',
]
