"""
Segment Layer

RESPONSIBILITY: Turn stored single-point records into display intervals
WHAT THIS LAYER MUST NOT DO:
- Persist intervals (they are derived, never stored)
- Mutate records or offsets
"""

from .deriver import derive
from .provider import SegmentProvider

__all__ = [
    'derive',
    'SegmentProvider',
]
