"""
Pass Pipeline Module
====================

Validation and transformation passes over a Schedule.

Components:
- base: pass interface
- pipeline: sequential composition and the fixed pass order
- validation: header completeness, time bounds, chronology and overlap checks
- ordering: stable re-sorting of sessions by start time
"""

from seri.core.passes.base import BasePass
from seri.core.passes.pipeline import PassPipeline, build_pipeline, run_passes
from seri.core.passes.ordering import OrderingPass
from seri.core.passes.validation import (
    ChronologyPass,
    HeaderCompletenessPass,
    OverlapValidationPass,
    TimeBoundsPass,
)

__all__ = [
    "BasePass",
    "PassPipeline",
    "build_pipeline",
    "run_passes",
    "HeaderCompletenessPass",
    "TimeBoundsPass",
    "OrderingPass",
    "ChronologyPass",
    "OverlapValidationPass",
]
