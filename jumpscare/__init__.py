"""
Jump Scare Markers Backend

This package reconciles community jump scare timestamps against a media
catalog and serves them as timeline segments. Each layer communicates
only through explicit contracts, never through shared mutable state.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Immutable records, error codes, outcome types

2. TEMPORAL (temporal/)
   - Exact fixed-point time codec (10,000,000 units per second)

3. CATALOG (catalog/)
   - Catalog collaborator interface and the name/external-id matcher

4. INGESTION (ingestion/)
   - CSV parsing into canonical records, import orchestration

5. STORAGE (storage/)
   - Deduplicating record store over a pluggable configuration store

6. SEGMENTS (segments/)
   - Pure interval derivation and the per-item segment provider

7. API (api/)
   - HTTP surface over the engine

DEPENDENCY RULES:
=================
- Collaborators are passed in explicitly; nothing reaches for a global
- Layers import only contracts from layers beside them
"""

from .engine import JumpScareBackend, ServiceConfig

__all__ = [
    'JumpScareBackend',
    'ServiceConfig',
]
