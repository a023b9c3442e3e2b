"""
Candidate pool filtering for random monster draws.

Reduces the enabled roster to the monsters a random draw may use.
"""

from encounterforge.filtering.candidate_pool import (
    CandidatePoolMetrics,
    build_available_pool,
    build_candidate_pool,
    get_pool_metrics,
    reset_pool_metrics,
)

__all__ = [
    "CandidatePoolMetrics",
    "build_available_pool",
    "build_candidate_pool",
    "get_pool_metrics",
    "reset_pool_metrics",
]
