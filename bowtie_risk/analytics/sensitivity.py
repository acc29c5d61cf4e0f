"""Tornado sensitivity of the top event to each preventive barrier."""
from bowtie_risk.analytics.engine import evaluate
from bowtie_risk.analytics.reduction import check_mode, clamp01
from bowtie_risk.config import DEFAULT_DELTA
from bowtie_risk.models.bowtie import BowtieModel, TornadoEntry
from bowtie_risk.models.errors import InvalidModelError


def with_threat_barrier_effectiveness(
    model: BowtieModel, path_index: int, barrier_index: int, effectiveness: float
) -> BowtieModel:
    """Copy of ``model`` with one threat-path barrier's effectiveness overridden."""
    path = model.threat_paths[path_index]
    barriers = list(path.barriers)
    barriers[barrier_index] = barriers[barrier_index].model_copy(
        update={"effectiveness": effectiveness}
    )
    threat_paths = list(model.threat_paths)
    threat_paths[path_index] = path.model_copy(update={"barriers": tuple(barriers)})
    return model.model_copy(update={"threat_paths": tuple(threat_paths)})


def sensitivity_tornado(model: BowtieModel, delta: float = DEFAULT_DELTA) -> list[TornadoEntry]:
    """
    Tornado data: top event probability with each threat-path barrier shifted
    down and up by ``delta``.

    Consequence-path barriers are not perturbed. Entries are sorted by swing
    (``|high - low|``), largest first; ties keep path order.

    Raises:
        InvalidModelError: If the mode is unknown or ``delta`` is negative.
    """
    check_mode(model.probability_model)
    if delta < 0:
        raise InvalidModelError(f"delta must be non-negative, got {delta}")

    results: list[TornadoEntry] = []
    for pidx, path in enumerate(model.threat_paths):
        for bidx, barrier in enumerate(path.barriers):
            lower = clamp01(barrier.effectiveness - delta)
            upper = clamp01(barrier.effectiveness + delta)

            low_model = with_threat_barrier_effectiveness(model, pidx, bidx, lower)
            high_model = with_threat_barrier_effectiveness(model, pidx, bidx, upper)

            results.append(TornadoEntry(
                barrier=barrier.name,
                low=evaluate(low_model).top_event_probability,
                high=evaluate(high_model).top_event_probability,
            ))

    results.sort(key=lambda entry: entry.swing, reverse=True)
    return results
