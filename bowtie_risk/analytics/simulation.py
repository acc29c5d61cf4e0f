"""Monte Carlo propagation of barrier-effectiveness uncertainty."""
import logging
import math
from typing import Mapping, Optional, Sequence

import numpy as np

from bowtie_risk.analytics.engine import evaluate
from bowtie_risk.analytics.reduction import check_mode, clamp01
from bowtie_risk.config import DEFAULT_SAMPLES
from bowtie_risk.models.bowtie import (
    SUPPORTED_DISTRIBUTIONS,
    Barrier,
    BarrierDistribution,
    BowtieModel,
    SimulationResult,
)
from bowtie_risk.models.errors import InvalidModelError

logger = logging.getLogger(__name__)


def validate_distribution(dist: BarrierDistribution) -> None:
    """Reject unknown kinds and parameters that cannot be sampled."""
    if dist.kind not in SUPPORTED_DISTRIBUTIONS:
        raise InvalidModelError(
            f"Unknown distribution kind: {dist.kind!r}. Supported: {', '.join(SUPPORTED_DISTRIBUTIONS)}"
        )
    if dist.kind == "beta":
        a, b, _ = dist.params
        if a <= 0 or b <= 0:
            raise InvalidModelError(f"Beta parameters must be positive, got alpha={a}, beta={b}")
    elif dist.kind == "triangular":
        low, mode, high = dist.params
        if not low <= mode <= high:
            raise InvalidModelError(
                f"Triangular parameters must satisfy low <= mode <= high, got {dist.params}"
            )


def sample_distribution(dist: BarrierDistribution, rng: np.random.Generator) -> float:
    """Draw one effectiveness value.

    ``fixed`` consumes no entropy; ``beta`` and ``triangular`` consume
    exactly one draw from ``rng``.
    """
    validate_distribution(dist)

    if dist.kind == "fixed":
        return clamp01(dist.params[0])

    if dist.kind == "beta":
        a, b, _ = dist.params
        return clamp01(float(rng.beta(a, b)))

    # triangular, via inverse CDF
    low, mode, high = dist.params
    u = float(rng.random())
    if high == low:
        return low
    c = (mode - low) / (high - low)
    if u < c:
        return low + math.sqrt(u * (high - low) * (mode - low))
    return high - math.sqrt((1.0 - u) * (high - low) * (high - mode))


def _sample_barriers(
    barriers: Sequence[Barrier],
    dists: Mapping[str, BarrierDistribution],
    rng: np.random.Generator,
) -> tuple[Barrier, ...]:
    return tuple(
        b.model_copy(update={"effectiveness": sample_distribution(dists[b.name], rng)})
        if b.name in dists
        else b
        for b in barriers
    )


def apply_distributions(
    model: BowtieModel,
    dists: Mapping[str, BarrierDistribution],
    rng: np.random.Generator,
) -> BowtieModel:
    """Derive a model with each listed barrier's effectiveness resampled.

    Barriers are visited threat paths first, then consequence paths, each in
    path order; every occurrence of a listed barrier gets its own draw.
    """
    if not dists:
        return model

    threat_paths = tuple(
        p.model_copy(update={"barriers": _sample_barriers(p.barriers, dists, rng)})
        for p in model.threat_paths
    )
    consequence_paths = tuple(
        p.model_copy(update={"barriers": _sample_barriers(p.barriers, dists, rng)})
        for p in model.consequence_paths
    )
    return model.model_copy(
        update={"threat_paths": threat_paths, "consequence_paths": consequence_paths}
    )


def simulate(
    model: BowtieModel,
    sample_count: int = DEFAULT_SAMPLES,
    barrier_distributions: Optional[Mapping[str, BarrierDistribution]] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> SimulationResult:
    """Run a Monte Carlo simulation over barrier effectiveness distributions.

    Args:
        model: The bowtie model to perturb.
        sample_count: Number of independent trials (must be >= 1).
        barrier_distributions: Barrier name -> distribution. Barriers not
            listed are used verbatim.
        rng: Random generator to draw from. Takes precedence over ``seed``.
        seed: Seed for a fresh ``numpy.random.default_rng`` when no rng is given.

    Returns:
        SimulationResult with means and the ordered top-event samples.

    Raises:
        InvalidModelError: On a bad sample count, mode or distribution,
            before any trial runs.
    """
    if sample_count < 1:
        raise InvalidModelError(f"sample_count must be >= 1, got {sample_count}")
    check_mode(model.probability_model)

    dists = dict(barrier_distributions or {})
    for dist in dists.values():
        validate_distribution(dist)

    if rng is None:
        rng = np.random.default_rng(seed)

    logger.info(
        f"Simulating {sample_count} trials over {len(dists)} uncertain barrier(s) "
        f"for {model.top_event.name}"
    )

    top_samples: list[float] = []
    consequence_totals = {p.consequence.name: 0.0 for p in model.consequence_paths}

    for _ in range(sample_count):
        summary = evaluate(apply_distributions(model, dists, rng))
        top_samples.append(summary.top_event_probability)
        for name, probability in summary.consequence_probabilities.items():
            consequence_totals[name] += probability

    top_event_mean = float(np.mean(top_samples))
    consequence_means = {name: total / sample_count for name, total in consequence_totals.items()}

    logger.info(f"Simulation complete: mean top event probability {top_event_mean:.4f}")
    return SimulationResult(
        top_event_mean=top_event_mean,
        consequence_means=consequence_means,
        samples=tuple(top_samples),
    )
