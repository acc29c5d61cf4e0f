from bowtie_risk.analytics.reduction import (
    check_mode,
    clamp01,
    effective_barrier_reduction,
    residual_probability,
)
from bowtie_risk.models.bowtie import INDEPENDENT, BowtieModel, BowtieSummary, EventChain


def evaluate(model: BowtieModel) -> BowtieSummary:
    """
    Computes residual threat probabilities, the top event probability and
    consequence risk for a bowtie model.

    Args:
        model: The bowtie model to evaluate.

    Returns:
        A fresh BowtieSummary. Every probability and risk is in [0, 1].

    Raises:
        InvalidModelError: If the probability model mode is unknown or a
            non-finite value reaches the engine.
    """
    mode = check_mode(model.probability_model)

    threat_residuals: dict[str, float] = {}
    survivals = 1.0
    for path in model.threat_paths:
        base = clamp01(path.threat.probability)
        residual = residual_probability(base, path.barriers, path.escalation_factors, mode)
        threat_residuals[path.threat.name] = residual
        survivals *= 1.0 - residual

    # No threat paths: the union of zero events is empty
    top_event_probability = 1.0 - survivals if model.threat_paths else 0.0

    consequence_probabilities: dict[str, float] = {}
    consequence_risks: dict[str, float] = {}
    for path in model.consequence_paths:
        probability = residual_probability(
            top_event_probability, path.barriers, path.escalation_factors, mode
        )
        name = path.consequence.name
        consequence_probabilities[name] = probability
        consequence_risks[name] = probability * clamp01(path.consequence.severity)

    return BowtieSummary(
        top_event_probability=top_event_probability,
        threat_residuals=threat_residuals,
        consequence_probabilities=consequence_probabilities,
        consequence_risks=consequence_risks,
    )


def chain_probability(chain: EventChain) -> float:
    """Probability of a linear event chain under independent assumptions.

    An empty event list contributes a base of 1.0, so the result is the
    barrier reduction alone.
    """
    base = 1.0
    for event in chain.events:
        base *= event.probability
    return base * effective_barrier_reduction(chain.barriers, chain.escalation_factors, INDEPENDENT)
