"""Template registry: pre-built example bowtie models for oil and gas hazards."""
from typing import Callable

from bowtie_risk.models.bowtie import (
    Barrier,
    BowtieModel,
    Consequence,
    ConsequencePath,
    EscalationFactor,
    Hazard,
    ProbabilityModel,
    Threat,
    ThreatPath,
    TopEvent,
)


def loss_of_containment() -> BowtieModel:
    """Hydrocarbon release from process piping, independent barriers."""
    return BowtieModel(
        hazard=Hazard(name="Hydrocarbons under pressure", description="Gas and condensate in process piping"),
        top_event=TopEvent(name="Loss of containment", description="Uncontrolled release from piping"),
        threat_paths=(
            ThreatPath(
                threat=Threat(name="Internal corrosion", probability=0.05, description="Wall loss from produced water"),
                barriers=(
                    Barrier(name="Corrosion inhibitor injection", effectiveness=0.7, degradation=0.1),
                    Barrier(name="Inline inspection", effectiveness=0.6),
                ),
                escalation_factors=(
                    EscalationFactor(name="Inhibitor pump downtime", multiplier=0.2),
                ),
            ),
            ThreatPath(
                threat=Threat(name="Overpressure", probability=0.02, description="Blocked outlet during start-up"),
                barriers=(
                    Barrier(name="High pressure trip", effectiveness=0.9),
                    Barrier(name="Pressure safety valve", effectiveness=0.95),
                ),
            ),
            ThreatPath(
                threat=Threat(name="Dropped object", probability=0.01, description="Crane lift over live piping"),
                barriers=(Barrier(name="Lifting procedure", effectiveness=0.5),),
            ),
        ),
        consequence_paths=(
            ConsequencePath(
                consequence=Consequence(name="Jet fire", severity=0.9),
                barriers=(
                    Barrier(name="Gas detection", effectiveness=0.8, kind="mitigative"),
                    Barrier(name="Emergency shutdown", effectiveness=0.85, kind="mitigative"),
                ),
            ),
            ConsequencePath(
                consequence=Consequence(name="Environmental release", severity=0.5),
                barriers=(Barrier(name="Bunding", effectiveness=0.6, kind="mitigative"),),
            ),
        ),
        probability_model=ProbabilityModel(mode="independent"),
    )


def vessel_overpressure() -> BowtieModel:
    """Separator overpressure where protection layers share a power supply."""
    return BowtieModel(
        hazard=Hazard(name="Pressurised separator", description="Three-phase production separator"),
        top_event=TopEvent(name="Vessel overpressure", description="Pressure above design limit"),
        threat_paths=(
            ThreatPath(
                threat=Threat(name="Control valve fails closed", probability=0.1),
                barriers=(
                    Barrier(name="Pressure alarm", effectiveness=0.6, dependency="ups_power"),
                    Barrier(name="High pressure shutdown", effectiveness=0.9, dependency="ups_power"),
                    Barrier(name="Relief valve", effectiveness=0.95),
                ),
            ),
            ThreatPath(
                threat=Threat(name="Gas blow-by from upstream", probability=0.03),
                barriers=(
                    Barrier(name="Level trip", effectiveness=0.8, dependency="ups_power", degradation=0.1),
                ),
                escalation_factors=(
                    EscalationFactor(name="Bypassed trip during maintenance", multiplier=0.3),
                ),
            ),
        ),
        consequence_paths=(
            ConsequencePath(
                consequence=Consequence(name="Vessel rupture", severity=1.0),
                barriers=(Barrier(name="Blast wall", effectiveness=0.5, kind="mitigative"),),
            ),
        ),
        probability_model=ProbabilityModel(mode="dependent"),
    )


TEMPLATES: dict[str, Callable[[], BowtieModel]] = {
    "loss_of_containment": loss_of_containment,
    "vessel_overpressure": vessel_overpressure,
}

SUPPORTED_TEMPLATES = tuple(TEMPLATES)


def get_template(name: str) -> BowtieModel:
    """Return a fresh copy of the named template model.

    Raises:
        ValueError: If *name* is not a supported template.
    """
    if name not in TEMPLATES:
        raise ValueError(
            f"Unknown template: {name!r}. Supported: {', '.join(SUPPORTED_TEMPLATES)}"
        )
    return TEMPLATES[name]()
