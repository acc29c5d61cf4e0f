"""JSON I/O for bowtie models and barrier distributions."""
import json
import logging
from pathlib import Path
from typing import Any

from bowtie_risk.models.bowtie import BarrierDistribution, BowtieModel

logger = logging.getLogger(__name__)


def model_to_dict(model: BowtieModel) -> dict[str, Any]:
    """JSON-shaped document for a model (sequences become lists)."""
    return model.model_dump(mode="json")


def model_from_dict(data: dict[str, Any]) -> BowtieModel:
    """Build a model from a document produced by :func:`model_to_dict`.

    Raises:
        pydantic.ValidationError: If the document does not match the schema.
    """
    return BowtieModel.model_validate(data)


def write_model_json(path: Path, model: BowtieModel) -> None:
    """Write a bowtie model to JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model_to_dict(model), indent=2), encoding="utf-8")
    logger.info(f"Wrote bowtie model {model.top_event.name} to {path}")


def read_model_json(path: Path) -> BowtieModel:
    """Read a bowtie model from JSON produced by :func:`write_model_json`."""
    if not path.exists():
        raise FileNotFoundError(f"Bowtie model not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    return model_from_dict(data)


def read_distributions_json(path: Path) -> dict[str, BarrierDistribution]:
    """Read barrier distributions keyed by barrier name.

    Expected format::

        {"Gas detection": {"kind": "beta", "params": [8, 2]}}
    """
    if not path.exists():
        raise FileNotFoundError(f"Distributions file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Distributions file must contain a JSON object: {path}")
    return {name: BarrierDistribution.model_validate(entry) for name, entry in data.items()}


def write_distributions_json(path: Path, dists: dict[str, BarrierDistribution]) -> None:
    """Write barrier distributions in the format read by :func:`read_distributions_json`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {name: dist.model_dump(mode="json") for name, dist in dists.items()}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def write_model_schema(path: Path) -> None:
    """Export the JSON Schema of the bowtie model document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    schema = BowtieModel.model_json_schema()
    path.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    logger.info(f"Wrote bowtie model schema to {path}")
