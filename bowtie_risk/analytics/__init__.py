from .reduction import clamp01, dependency_groups, effective_barrier, effective_barrier_reduction
from .engine import chain_probability, evaluate
from .simulation import sample_distribution, simulate
from .sensitivity import sensitivity_tornado

__all__ = [
    "clamp01",
    "dependency_groups",
    "effective_barrier",
    "effective_barrier_reduction",
    "evaluate",
    "chain_probability",
    "sample_distribution",
    "simulate",
    "sensitivity_tornado",
]
