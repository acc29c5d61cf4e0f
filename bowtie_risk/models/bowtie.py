"""Pydantic v2 models for quantitative bowtie diagrams."""

from typing import Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

INDEPENDENT = "independent"
DEPENDENT = "dependent"
SUPPORTED_MODES = (INDEPENDENT, DEPENDENT)

NO_DEPENDENCY = "none"

SUPPORTED_DISTRIBUTIONS = ("fixed", "beta", "triangular")


class _Record(BaseModel):
    """Immutable base: records are never mutated, only copied."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


# ---------------------------------------------------------------------------
# Diagram elements
# ---------------------------------------------------------------------------

class Hazard(_Record):
    """
    Represents a hazard (source of potential harm).
    """
    name: str = Field(..., description="Identifier of the hazard")
    description: str = Field("", description="Detailed description")


class Threat(_Record):
    """
    Represents a threat (initiating cause) with a baseline probability.
    """
    name: str = Field(..., description="Identifier of the threat")
    probability: float = Field(..., description="Baseline probability, clamped to [0, 1] on use")
    description: str = Field("", description="Detailed description")


class TopEvent(_Record):
    """
    Represents the central top event (loss of control) of the bowtie.
    """
    name: str = Field(..., description="Identifier of the top event")
    description: str = Field("", description="Detailed description")


class Consequence(_Record):
    """
    Represents a consequence (outcome) with a severity factor.
    """
    name: str = Field(..., description="Identifier of the consequence")
    severity: float = Field(..., description="Severity factor, clamped to [0, 1] on use")
    description: str = Field("", description="Detailed description")


class Barrier(_Record):
    """
    Represents a barrier (control) on a threat or consequence path.

    Barriers sharing a ``dependency`` tag fail together under the dependent
    probability model. The ``kind`` is descriptive only.
    """
    name: str = Field(..., description="Identifier of the barrier")
    effectiveness: float = Field(..., description="Probability the barrier stops progression")
    kind: Literal["preventive", "mitigative"] = Field(
        "preventive", description="Side of the bowtie the barrier sits on"
    )
    description: str = Field("", description="Detailed description")
    degradation: float = Field(0.0, description="Fractional loss of effectiveness")
    dependency: str = Field(NO_DEPENDENCY, description="Shared-cause group tag")


class EscalationFactor(_Record):
    """
    Represents a condition that reduces barrier effectiveness on a path.
    """
    name: str = Field(..., description="Identifier of the escalation factor")
    multiplier: float = Field(..., description="Fractional reduction applied to each barrier")
    description: str = Field("", description="Detailed description")


class ProbabilityModel(_Record):
    """Controls how barriers on a path are combined.

    The mode is not restricted here so that documents with an unknown mode
    still load; the engine rejects it before evaluating.
    """
    mode: str = Field(INDEPENDENT, description="One of 'independent' or 'dependent'")


# ---------------------------------------------------------------------------
# Paths and the full model
# ---------------------------------------------------------------------------

class ThreatPath(_Record):
    """A threat path leading into the top event."""
    threat: Threat
    barriers: tuple[Barrier, ...] = Field(default_factory=tuple)
    escalation_factors: tuple[EscalationFactor, ...] = Field(default_factory=tuple)


class ConsequencePath(_Record):
    """A consequence path following the top event."""
    consequence: Consequence
    barriers: tuple[Barrier, ...] = Field(default_factory=tuple)
    escalation_factors: tuple[EscalationFactor, ...] = Field(default_factory=tuple)


class BowtieModel(_Record):
    """
    Represents the full quantitative bowtie diagram.
    """
    hazard: Hazard = Field(..., description="The primary hazard")
    top_event: TopEvent = Field(..., description="The top event (loss of control)")
    threat_paths: tuple[ThreatPath, ...] = Field(default_factory=tuple)
    consequence_paths: tuple[ConsequencePath, ...] = Field(default_factory=tuple)
    probability_model: ProbabilityModel = Field(default_factory=ProbabilityModel)

    @property
    def mode(self) -> str:
        return self.probability_model.mode

    def threat_barriers(self) -> list[Barrier]:
        """All barriers on threat paths, in path order."""
        return [b for path in self.threat_paths for b in path.barriers]


# ---------------------------------------------------------------------------
# Event chains
# ---------------------------------------------------------------------------

class Event(_Record):
    """Event used in an event chain."""
    name: str
    probability: float
    description: str = ""


class EventChain(_Record):
    """Ordered event chain with optional barriers and escalation factors."""
    events: tuple[Event, ...] = Field(default_factory=tuple)
    barriers: tuple[Barrier, ...] = Field(default_factory=tuple)
    escalation_factors: tuple[EscalationFactor, ...] = Field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Uncertainty inputs and results
# ---------------------------------------------------------------------------

class BarrierDistribution(_Record):
    """Distribution of a barrier's effectiveness for Monte Carlo runs.

    Parameter meaning depends on ``kind``:

    - ``fixed``: (value, unused, unused)
    - ``beta``: (alpha, beta, unused)
    - ``triangular``: (low, mode, high)
    """
    kind: str = Field(..., description="One of 'fixed', 'beta' or 'triangular'")
    params: tuple[float, float, float] = Field(..., description="Distribution parameters")

    @field_validator("params", mode="before")
    @classmethod
    def _pad_params(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return (v, 0.0, 0.0)
        if isinstance(v, (list, tuple)) and len(v) < 3:
            return tuple(v) + (0.0,) * (3 - len(v))
        return v


class BowtieSummary(_Record):
    """Result of a deterministic evaluation."""
    top_event_probability: float
    threat_residuals: dict[str, float] = Field(default_factory=dict)
    consequence_probabilities: dict[str, float] = Field(default_factory=dict)
    consequence_risks: dict[str, float] = Field(default_factory=dict)


class SimulationResult(_Record):
    """Monte Carlo simulation result."""
    top_event_mean: float
    consequence_means: dict[str, float] = Field(default_factory=dict)
    samples: tuple[float, ...] = Field(default_factory=tuple)


class TornadoEntry(NamedTuple):
    """One bar of a tornado chart: top-event probability at low/high effectiveness."""
    barrier: str
    low: float
    high: float

    @property
    def swing(self) -> float:
        return abs(self.high - self.low)
