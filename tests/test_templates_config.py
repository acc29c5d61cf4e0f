import pytest

from bowtie_risk.analytics.engine import evaluate
from bowtie_risk.config import SEED_ENV_VAR, resolve_seed
from bowtie_risk.templates import SUPPORTED_TEMPLATES, get_template


class TestTemplates:
    @pytest.mark.parametrize("name", SUPPORTED_TEMPLATES)
    def test_templates_evaluate(self, name):
        summary = evaluate(get_template(name))
        assert 0.0 < summary.top_event_probability < 1.0

    def test_vessel_overpressure_shares_cause(self):
        model = get_template("vessel_overpressure")
        tags = {b.dependency for b in model.threat_barriers()}
        assert model.probability_model.mode == "dependent"
        assert "ups_power" in tags

    def test_unknown_template_raises(self):
        with pytest.raises(ValueError, match="Unknown template"):
            get_template("does_not_exist")


class TestResolveSeed:
    def test_cli_value_wins(self, monkeypatch):
        monkeypatch.setenv(SEED_ENV_VAR, "5")
        assert resolve_seed(9) == 9

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv(SEED_ENV_VAR, "5")
        assert resolve_seed(None) == 5

    def test_unset_is_none(self, monkeypatch):
        monkeypatch.delenv(SEED_ENV_VAR, raising=False)
        assert resolve_seed() is None

    def test_bad_env_raises(self, monkeypatch):
        monkeypatch.setenv(SEED_ENV_VAR, "abc")
        with pytest.raises(ValueError, match=SEED_ENV_VAR):
            resolve_seed()
