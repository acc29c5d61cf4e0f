"""Barrier reduction: combine barriers on a path into a survival factor."""
import math
from typing import Iterable, Sequence, Union

from bowtie_risk.models.bowtie import (
    DEPENDENT,
    INDEPENDENT,
    NO_DEPENDENCY,
    SUPPORTED_MODES,
    Barrier,
    EscalationFactor,
    ProbabilityModel,
)
from bowtie_risk.models.errors import InvalidModelError

Mode = Union[str, ProbabilityModel]


def clamp01(value: float) -> float:
    """Clamp a finite number into [0, 1].

    Raises:
        InvalidModelError: If value is NaN or infinite.
    """
    if not math.isfinite(value):
        raise InvalidModelError(f"Non-finite value cannot be clamped: {value!r}")
    return min(1.0, max(0.0, value))


def check_mode(mode: Mode) -> str:
    """Return the mode string, raising if it is not supported."""
    name = mode.mode if isinstance(mode, ProbabilityModel) else mode
    if name not in SUPPORTED_MODES:
        raise InvalidModelError(
            f"Unknown probability model mode: {name!r}. Supported: {', '.join(SUPPORTED_MODES)}"
        )
    return name


def effective_barrier(barrier: Barrier, escalation_factors: Iterable[EscalationFactor] = ()) -> float:
    """Degraded, escalation-adjusted effectiveness of a single barrier.

    Each component is clamped on its own before combining, so the result
    stays in [0, 1] for any finite input.
    """
    base = clamp01(barrier.effectiveness)
    degraded = base * (1.0 - clamp01(barrier.degradation))
    factor_reduction = 1.0
    for factor in escalation_factors:
        factor_reduction *= 1.0 - clamp01(factor.multiplier)
    return clamp01(degraded * factor_reduction)


def dependency_groups(
    barriers: Sequence[Barrier],
    escalation_factors: Sequence[EscalationFactor] = (),
) -> dict[object, list[float]]:
    """Group effective barrier values by shared-cause tag.

    Barriers tagged "none" get a singleton group keyed by their position on
    the path, so they never share a cause with each other or with a user tag.
    """
    groups: dict[object, list[float]] = {}
    for position, barrier in enumerate(barriers):
        key = ("position", position) if barrier.dependency == NO_DEPENDENCY else barrier.dependency
        groups.setdefault(key, []).append(effective_barrier(barrier, escalation_factors))
    return groups


def effective_barrier_reduction(
    barriers: Sequence[Barrier],
    escalation_factors: Sequence[EscalationFactor],
    mode: Mode,
) -> float:
    """Combine barriers into the probability that progression gets through.

    Args:
        barriers: Barriers on one path, in order.
        escalation_factors: Factors applying to every barrier on that path.
        mode: "independent" or "dependent" (or a ProbabilityModel).

    Returns:
        Reduction factor in [0, 1]; 1.0 when there are no barriers.

    Raises:
        InvalidModelError: If the mode is unknown, even with no barriers.
    """
    name = check_mode(mode)
    if not barriers:
        return 1.0

    if name == INDEPENDENT:
        effective = [effective_barrier(b, escalation_factors) for b in barriers]
    elif name == DEPENDENT:
        # Weakest link: a shared-cause failure defeats every member of the group
        effective = [min(values) for values in dependency_groups(barriers, escalation_factors).values()]
    else:
        raise InvalidModelError(f"Unknown probability model mode: {name!r}")

    reduction = 1.0
    for value in effective:
        reduction *= 1.0 - value
    return reduction


def residual_probability(
    base: float,
    barriers: Sequence[Barrier],
    escalation_factors: Sequence[EscalationFactor],
    mode: Mode,
) -> float:
    """Probability remaining after applying a path's barriers to ``base``."""
    return base * effective_barrier_reduction(barriers, escalation_factors, mode)
