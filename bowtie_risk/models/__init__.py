"""Data models for Bowtie Risk."""

from .errors import InvalidModelError
from .bowtie import (
    DEPENDENT,
    INDEPENDENT,
    NO_DEPENDENCY,
    SUPPORTED_DISTRIBUTIONS,
    SUPPORTED_MODES,
    Barrier,
    BarrierDistribution,
    BowtieModel,
    BowtieSummary,
    Consequence,
    ConsequencePath,
    EscalationFactor,
    Event,
    EventChain,
    Hazard,
    ProbabilityModel,
    SimulationResult,
    Threat,
    ThreatPath,
    TopEvent,
    TornadoEntry,
)

__all__ = [
    "InvalidModelError",
    "INDEPENDENT",
    "DEPENDENT",
    "NO_DEPENDENCY",
    "SUPPORTED_MODES",
    "SUPPORTED_DISTRIBUTIONS",
    "Hazard",
    "Threat",
    "TopEvent",
    "Consequence",
    "Barrier",
    "EscalationFactor",
    "ProbabilityModel",
    "ThreatPath",
    "ConsequencePath",
    "BowtieModel",
    "Event",
    "EventChain",
    "BarrierDistribution",
    "BowtieSummary",
    "SimulationResult",
    "TornadoEntry",
]
