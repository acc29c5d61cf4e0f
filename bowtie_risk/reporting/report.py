"""Markdown reports and CSV exports for evaluation, tornado and simulation output."""
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from bowtie_risk.analytics.engine import evaluate
from bowtie_risk.config import REPORT_DIGITS
from bowtie_risk.models.bowtie import BowtieModel, BowtieSummary, SimulationResult, TornadoEntry

logger = logging.getLogger(__name__)

TORNADO_CSV_COLUMNS = ["barrier", "low", "high"]


def tornado_frame(data: Sequence[TornadoEntry]) -> pd.DataFrame:
    """Tornado entries as a DataFrame with a ``swing`` column, in input order."""
    df = pd.DataFrame([tuple(entry) for entry in data], columns=TORNADO_CSV_COLUMNS)
    df = df.astype({"low": float, "high": float})
    df["swing"] = (df["high"] - df["low"]).abs()
    return df


def simulation_frame(result: SimulationResult) -> pd.DataFrame:
    """Per-trial top event probabilities, one row per sample."""
    return pd.DataFrame({
        "sample": range(1, len(result.samples) + 1),
        "top_event_probability": list(result.samples),
    })


def simulation_quantiles(result: SimulationResult, quantiles: Sequence[float] = (0.05, 0.5, 0.95)) -> dict[str, float]:
    """Quantiles of the top event samples keyed like ``p5``, ``p50``, ``p95``."""
    series = pd.Series(result.samples, dtype=float)
    return {f"p{round(q * 100)}": float(series.quantile(q)) for q in quantiles}


def report_markdown(
    model: BowtieModel,
    summary: Optional[BowtieSummary] = None,
    tornado_data: Optional[Sequence[TornadoEntry]] = None,
    simulation: Optional[SimulationResult] = None,
) -> str:
    """
    Markdown report for a model.

    Args:
        model: The evaluated model.
        summary: Evaluation summary; computed from ``model`` when omitted.
        tornado_data: Optional sensitivity entries to include.
        simulation: Optional Monte Carlo result to include.
    """
    if summary is None:
        summary = evaluate(model)
    digits = REPORT_DIGITS

    lines = [
        "# Bowtie Risk Report",
        f"- Hazard: {model.hazard.name}",
        f"- Top event: {model.top_event.name}",
        f"- Probability model: {model.probability_model.mode}",
        f"- Top event probability: {round(summary.top_event_probability, digits)}",
        "",
        "## Threats",
    ]
    for name, residual in summary.threat_residuals.items():
        lines.append(f"- {name}: residual={round(residual, digits)}")

    lines.append("")
    lines.append("## Consequences")
    for name, probability in summary.consequence_probabilities.items():
        risk = summary.consequence_risks.get(name, 0.0)
        lines.append(f"- {name}: probability={round(probability, digits)} risk={round(risk, digits)}")

    if tornado_data:
        lines.append("")
        lines.append("## Sensitivity (Tornado)")
        for name, low, high in tornado_data:
            lines.append(f"- {name}: low={round(low, digits)} high={round(high, digits)}")

    if simulation is not None:
        quantiles = simulation_quantiles(simulation)
        lines.append("")
        lines.append("## Monte Carlo")
        lines.append(f"- Samples: {len(simulation.samples)}")
        lines.append(f"- Mean top event probability: {round(simulation.top_event_mean, digits)}")
        for label, value in quantiles.items():
            lines.append(f"- {label.upper()}: {round(value, digits)}")
        for name, mean in simulation.consequence_means.items():
            lines.append(f"- {name} mean: {round(mean, digits)}")

    return "\n".join(lines)


def write_report_markdown(
    path: Path,
    model: BowtieModel,
    summary: Optional[BowtieSummary] = None,
    tornado_data: Optional[Sequence[TornadoEntry]] = None,
    simulation: Optional[SimulationResult] = None,
) -> None:
    """Write the Markdown report to disk."""
    path.parent.mkdir(parents=True, exist_ok=True)
    text = report_markdown(model, summary=summary, tornado_data=tornado_data, simulation=simulation)
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote report to {path}")


def write_tornado_csv(path: Path, data: Sequence[TornadoEntry]) -> None:
    """Write tornado data to CSV with columns barrier,low,high."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tornado_frame(data)[TORNADO_CSV_COLUMNS].to_csv(path, index=False)
    logger.info(f"Wrote {len(data)} tornado rows to {path}")


def write_samples_csv(path: Path, result: SimulationResult) -> None:
    """Write Monte Carlo top event samples to CSV for histogramming."""
    path.parent.mkdir(parents=True, exist_ok=True)
    simulation_frame(result).to_csv(path, index=False)
    logger.info(f"Wrote {len(result.samples)} samples to {path}")
