import pytest
from bowtie_risk.models.bowtie import (
    Barrier,
    BowtieModel,
    Consequence,
    ConsequencePath,
    EscalationFactor,
    Event,
    EventChain,
    Hazard,
    ProbabilityModel,
    Threat,
    ThreatPath,
    TopEvent,
)
from bowtie_risk.models.errors import InvalidModelError
from bowtie_risk.analytics.engine import chain_probability, evaluate


@pytest.fixture
def simple_model():
    """Single threat, single barrier, one consequence without barriers."""
    return BowtieModel(
        hazard=Hazard(name="H"),
        top_event=TopEvent(name="Top"),
        threat_paths=[
            ThreatPath(
                threat=Threat(name="T1", probability=0.2),
                barriers=[Barrier(name="B1", effectiveness=0.5)],
            )
        ],
        consequence_paths=[
            ConsequencePath(consequence=Consequence(name="C1", severity=0.8))
        ],
        probability_model=ProbabilityModel(mode="independent"),
    )


@pytest.fixture
def two_sided_model():
    return BowtieModel(
        hazard=Hazard(name="Hazard", description="Test hazard"),
        top_event=TopEvent(name="Top", description="Top event"),
        threat_paths=[
            ThreatPath(threat=Threat(name="T1", probability=0.2),
                       barriers=[Barrier(name="B1", effectiveness=0.5)]),
            ThreatPath(threat=Threat(name="T2", probability=0.1),
                       barriers=[Barrier(name="B2", effectiveness=0.25)]),
        ],
        consequence_paths=[
            ConsequencePath(
                consequence=Consequence(name="C1", severity=0.8),
                barriers=[Barrier(name="M1", effectiveness=0.5, kind="mitigative",
                                  degradation=0.1, dependency="shared_power")],
            ),
            ConsequencePath(consequence=Consequence(name="C2", severity=0.4)),
        ],
    )


class TestEvaluate:
    """Test cases for deterministic bowtie evaluation."""

    def test_end_to_end_scenario(self, simple_model):
        summary = evaluate(simple_model)

        assert summary.threat_residuals["T1"] == pytest.approx(0.1)
        assert summary.top_event_probability == pytest.approx(0.1)
        assert summary.consequence_probabilities["C1"] == pytest.approx(0.1)
        assert summary.consequence_risks["C1"] == pytest.approx(0.08)

    def test_top_event_is_union_of_residuals(self, two_sided_model):
        summary = evaluate(two_sided_model)

        r1 = 0.2 * 0.5
        r2 = 0.1 * 0.75
        top = 1.0 - (1.0 - r1) * (1.0 - r2)
        assert summary.threat_residuals == {"T1": pytest.approx(r1), "T2": pytest.approx(r2)}
        assert summary.top_event_probability == pytest.approx(top)
        # M1: 0.5 * (1 - 0.1) = 0.45 effective
        assert summary.consequence_probabilities["C1"] == pytest.approx(top * 0.55)
        assert summary.consequence_probabilities["C2"] == pytest.approx(top)
        assert summary.consequence_risks["C2"] == pytest.approx(top * 0.4)

    def test_no_threat_paths_gives_zero(self):
        model = BowtieModel(
            hazard=Hazard(name="H"),
            top_event=TopEvent(name="Top"),
            consequence_paths=[ConsequencePath(consequence=Consequence(name="C1", severity=1.0))],
        )
        summary = evaluate(model)
        assert summary.top_event_probability == 0.0
        assert summary.consequence_probabilities["C1"] == 0.0
        assert summary.consequence_risks["C1"] == 0.0

    def test_no_barriers_residual_equals_probability(self):
        model = BowtieModel(
            hazard=Hazard(name="H"),
            top_event=TopEvent(name="Top"),
            threat_paths=[ThreatPath(threat=Threat(name="T1", probability=0.3))],
        )
        assert evaluate(model).threat_residuals["T1"] == pytest.approx(0.3)

    def test_out_of_range_inputs_are_clamped(self):
        model = BowtieModel(
            hazard=Hazard(name="H"),
            top_event=TopEvent(name="Top"),
            threat_paths=[
                ThreatPath(threat=Threat(name="T1", probability=4.0),
                           barriers=[Barrier(name="B1", effectiveness=-1.0)]),
                ThreatPath(threat=Threat(name="T2", probability=-0.3)),
            ],
            consequence_paths=[ConsequencePath(consequence=Consequence(name="C1", severity=9.0))],
        )
        summary = evaluate(model)

        assert summary.threat_residuals["T1"] == 1.0
        assert summary.threat_residuals["T2"] == 0.0
        assert summary.top_event_probability == 1.0
        assert summary.consequence_risks["C1"] == 1.0

    def test_outputs_within_unit_interval(self, two_sided_model):
        summary = evaluate(two_sided_model)
        values = [summary.top_event_probability]
        values += list(summary.threat_residuals.values())
        values += list(summary.consequence_probabilities.values())
        values += list(summary.consequence_risks.values())
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_escalation_factors_apply_only_to_their_path(self):
        factor = EscalationFactor(name="E1", multiplier=0.5)
        model = BowtieModel(
            hazard=Hazard(name="H"),
            top_event=TopEvent(name="Top"),
            threat_paths=[
                ThreatPath(threat=Threat(name="T1", probability=1.0),
                           barriers=[Barrier(name="B1", effectiveness=0.8)],
                           escalation_factors=[factor]),
                ThreatPath(threat=Threat(name="T2", probability=1.0),
                           barriers=[Barrier(name="B2", effectiveness=0.8)]),
            ],
        )
        summary = evaluate(model)
        assert summary.threat_residuals["T1"] == pytest.approx(0.6)
        assert summary.threat_residuals["T2"] == pytest.approx(0.2)

    def test_dependent_mode_applies_to_every_path(self):
        barriers = [
            Barrier(name="B1", effectiveness=0.3, dependency="power"),
            Barrier(name="B2", effectiveness=0.6, dependency="power"),
        ]
        model = BowtieModel(
            hazard=Hazard(name="H"),
            top_event=TopEvent(name="Top"),
            threat_paths=[ThreatPath(threat=Threat(name="T1", probability=1.0), barriers=barriers)],
            consequence_paths=[
                ConsequencePath(consequence=Consequence(name="C1", severity=1.0), barriers=barriers)
            ],
            probability_model=ProbabilityModel(mode="dependent"),
        )
        summary = evaluate(model)
        assert summary.top_event_probability == pytest.approx(0.7)
        assert summary.consequence_probabilities["C1"] == pytest.approx(0.49)

    def test_unknown_mode_raises(self, simple_model):
        model = simple_model.model_copy(update={"probability_model": ProbabilityModel(mode="fuzzy")})
        with pytest.raises(InvalidModelError):
            evaluate(model)

    def test_evaluate_is_pure(self, two_sided_model):
        first = evaluate(two_sided_model)
        second = evaluate(two_sided_model)
        assert first == second
        assert first is not second


class TestChainProbability:
    def test_events_times_barrier_reduction(self):
        chain = EventChain(
            events=[Event(name="E1", probability=0.2), Event(name="E2", probability=0.5)],
            barriers=[Barrier(name="M1", effectiveness=0.5, degradation=0.1, dependency="shared_power")],
        )
        assert chain_probability(chain) == pytest.approx(0.2 * 0.5 * (1.0 - 0.5 * 0.9))

    def test_empty_events_gives_reduction_only(self):
        chain = EventChain(barriers=[Barrier(name="B1", effectiveness=0.4)])
        assert chain_probability(chain) == pytest.approx(0.6)

    def test_empty_chain_is_one(self):
        assert chain_probability(EventChain()) == 1.0
