import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from bowtie_risk.analytics.engine import evaluate
from bowtie_risk.analytics.sensitivity import sensitivity_tornado
from bowtie_risk.analytics.simulation import simulate
from bowtie_risk.config import DEFAULT_DELTA, DEFAULT_SAMPLES, resolve_seed
from bowtie_risk.ingestion.model_json import (
    read_distributions_json,
    read_model_json,
    write_model_json,
    write_model_schema,
)
from bowtie_risk.models.bowtie import BarrierDistribution, SimulationResult
from bowtie_risk.reporting.diagrams import to_graphviz, to_mermaid
from bowtie_risk.reporting.report import (
    simulation_quantiles,
    write_report_markdown,
    write_samples_csv,
    write_tornado_csv,
)
from bowtie_risk.templates import SUPPORTED_TEMPLATES, get_template

logger = logging.getLogger(__name__)


def _emit(text: str, out: Optional[str]) -> None:
    """Print text, or write it to *out* when given."""
    if out is None:
        print(text)
        return
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote {out_path}")


def _load_distributions(path: Optional[str]) -> dict[str, BarrierDistribution]:
    if not path:
        return {}
    dists = read_distributions_json(Path(path))
    logger.info(f"Loaded {len(dists)} barrier distribution(s) from {path}")
    return dists


def _run_simulation(args: argparse.Namespace) -> SimulationResult:
    model = read_model_json(Path(args.model))
    return simulate(
        model,
        sample_count=args.samples,
        barrier_distributions=_load_distributions(args.distributions),
        seed=resolve_seed(args.seed),
    )


def cmd_evaluate(args: argparse.Namespace) -> None:
    """Evaluate a model and output its summary as JSON."""
    model = read_model_json(Path(args.model))
    summary = evaluate(model)
    logger.info(f"Top event probability for {model.top_event.name}: {summary.top_event_probability:.4f}")
    _emit(json.dumps(summary.model_dump(), indent=2), args.out)


def cmd_simulate(args: argparse.Namespace) -> None:
    """Run Monte Carlo simulation and output means and quantiles as JSON."""
    result = _run_simulation(args)
    payload = {
        "samples": len(result.samples),
        "top_event_mean": result.top_event_mean,
        "top_event_quantiles": simulation_quantiles(result),
        "consequence_means": result.consequence_means,
    }
    print(json.dumps(payload, indent=2))
    if args.samples_csv:
        write_samples_csv(Path(args.samples_csv), result)


def cmd_tornado(args: argparse.Namespace) -> None:
    """Run sensitivity analysis on threat-path barriers."""
    model = read_model_json(Path(args.model))
    data = sensitivity_tornado(model, delta=args.delta)
    if args.out:
        write_tornado_csv(Path(args.out), data)
        return
    for name, low, high in data:
        print(f"{name},{low},{high}")


def cmd_report(args: argparse.Namespace) -> None:
    """Write a Markdown report with tornado and optional Monte Carlo sections."""
    model = read_model_json(Path(args.model))
    tornado = sensitivity_tornado(model, delta=args.delta)
    simulation = _run_simulation(args) if args.distributions else None
    write_report_markdown(Path(args.out), model, tornado_data=tornado, simulation=simulation)


def cmd_diagram(args: argparse.Namespace) -> None:
    """Render the model structure as Mermaid or GraphViz text."""
    model = read_model_json(Path(args.model))
    text = to_mermaid(model) if args.format == "mermaid" else to_graphviz(model)
    _emit(text, args.out)


def cmd_template(args: argparse.Namespace) -> None:
    """Write a pre-built example model to JSON."""
    write_model_json(Path(args.out), get_template(args.name))


def cmd_schema(args: argparse.Namespace) -> None:
    """Export the model document JSON Schema."""
    write_model_schema(Path(args.out))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m bowtie_risk.pipeline", description="Bowtie risk evaluation pipeline"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # evaluate subcommand
    p_eval = subparsers.add_parser("evaluate", help="Deterministic evaluation of a model")
    p_eval.add_argument("--model", required=True, help="Bowtie model JSON")
    p_eval.add_argument("--out", default=None, help="Write summary JSON here instead of stdout")
    p_eval.set_defaults(func=cmd_evaluate)

    # simulate subcommand
    p_sim = subparsers.add_parser("simulate", help="Monte Carlo over barrier effectiveness")
    p_sim.add_argument("--model", required=True, help="Bowtie model JSON")
    p_sim.add_argument("--distributions", default=None, help="Barrier distributions JSON")
    p_sim.add_argument("--samples", type=int, default=DEFAULT_SAMPLES, help="Number of trials")
    p_sim.add_argument("--seed", type=int, default=None, help="Random seed (or BOWTIE_RISK_SEED)")
    p_sim.add_argument("--samples-csv", default=None, help="Write per-trial samples to CSV")
    p_sim.set_defaults(func=cmd_simulate)

    # tornado subcommand
    p_tornado = subparsers.add_parser("tornado", help="Sensitivity of the top event to each barrier")
    p_tornado.add_argument("--model", required=True, help="Bowtie model JSON")
    p_tornado.add_argument("--delta", type=float, default=DEFAULT_DELTA, help="Effectiveness shift")
    p_tornado.add_argument("--out", default=None, help="Write tornado CSV here")
    p_tornado.set_defaults(func=cmd_tornado)

    # report subcommand
    p_report = subparsers.add_parser("report", help="Markdown risk report")
    p_report.add_argument("--model", required=True, help="Bowtie model JSON")
    p_report.add_argument("--out", required=True, help="Output Markdown path")
    p_report.add_argument("--delta", type=float, default=DEFAULT_DELTA, help="Tornado effectiveness shift")
    p_report.add_argument("--distributions", default=None, help="Include a Monte Carlo section")
    p_report.add_argument("--samples", type=int, default=DEFAULT_SAMPLES, help="Number of trials")
    p_report.add_argument("--seed", type=int, default=None, help="Random seed (or BOWTIE_RISK_SEED)")
    p_report.set_defaults(func=cmd_report)

    # diagram subcommand
    p_diagram = subparsers.add_parser("diagram", help="Render model structure as text diagram")
    p_diagram.add_argument("--model", required=True, help="Bowtie model JSON")
    p_diagram.add_argument("--format", choices=["mermaid", "graphviz"], default="mermaid")
    p_diagram.add_argument("--out", default=None, help="Write diagram here instead of stdout")
    p_diagram.set_defaults(func=cmd_diagram)

    # template subcommand
    p_template = subparsers.add_parser("template", help="Write an example model")
    p_template.add_argument("--name", required=True, choices=SUPPORTED_TEMPLATES)
    p_template.add_argument("--out", required=True, help="Output model JSON path")
    p_template.set_defaults(func=cmd_template)

    # schema subcommand
    p_schema = subparsers.add_parser("schema", help="Export the model JSON Schema")
    p_schema.add_argument("--out", required=True, help="Output schema path")
    p_schema.set_defaults(func=cmd_schema)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point with CLI argument parsing."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (FileNotFoundError, ValueError) as e:
        # InvalidModelError and pydantic ValidationError are both ValueErrors
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
