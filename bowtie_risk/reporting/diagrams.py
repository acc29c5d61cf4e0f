"""Mermaid and GraphViz text diagrams of a bowtie model's structure."""
import re

from bowtie_risk.models.bowtie import BowtieModel

_UNSAFE_ID_CHARS = re.compile(r"\W")


def _node_ids(model: BowtieModel) -> tuple[str, str]:
    # Names may contain spaces; node ids may not
    hazard = _UNSAFE_ID_CHARS.sub("_", model.hazard.name)
    top = _UNSAFE_ID_CHARS.sub("_", model.top_event.name)
    return f"hazard{hazard}", f"top{top}"


def to_mermaid(model: BowtieModel) -> str:
    """Return a Mermaid flowchart for a bowtie model.

    Threats feed the top event from the left and consequences leave it on
    the right. Barriers hang off their path with solid links and escalation
    factors with dotted arrows.
    """
    hazard_id, top_id = _node_ids(model)
    lines = [
        "flowchart LR",
        f'  {hazard_id}["{model.hazard.name}"]',
        f'  {top_id}(("{model.top_event.name}"))',
    ]

    for i, path in enumerate(model.threat_paths, start=1):
        threat_id = f"threat{i}"
        lines.append(f'  {threat_id}["{path.threat.name}"]')
        lines.append(f"  {threat_id} --> {top_id}")
        for j, barrier in enumerate(path.barriers, start=1):
            lines.append(f'  {threat_id} --- pb{i}_{j}["{barrier.name}"]')
        for j, factor in enumerate(path.escalation_factors, start=1):
            lines.append(f'  {threat_id} -.-> pe{i}_{j}["{factor.name}"]')

    for i, path in enumerate(model.consequence_paths, start=1):
        cons_id = f"cons{i}"
        lines.append(f'  {top_id} --> {cons_id}["{path.consequence.name}"]')
        for j, barrier in enumerate(path.barriers, start=1):
            lines.append(f'  {cons_id} --- mb{i}_{j}["{barrier.name}"]')
        for j, factor in enumerate(path.escalation_factors, start=1):
            lines.append(f'  {cons_id} -.-> me{i}_{j}["{factor.name}"]')

    lines.append(f"  {hazard_id} --> {top_id}")
    return "\n".join(lines)


def to_graphviz(model: BowtieModel) -> str:
    """Return a GraphViz DOT digraph for a bowtie model."""
    hazard_id, top_id = _node_ids(model)
    lines = [
        "digraph Bowtie {",
        "  rankdir=LR;",
        f'  "{hazard_id}" [shape=box,label="{model.hazard.name}"];',
        f'  "{top_id}" [shape=doublecircle,label="{model.top_event.name}"];',
    ]

    for i, path in enumerate(model.threat_paths, start=1):
        threat_id = f"threat{i}"
        lines.append(f'  {threat_id} [shape=box,label="{path.threat.name}"];')
        lines.append(f'  {threat_id} -> "{top_id}";')
        for j, barrier in enumerate(path.barriers, start=1):
            lines.append(f'  pb{i}_{j} [shape=box,label="{barrier.name}"];')
            lines.append(f"  {threat_id} -> pb{i}_{j} [style=dashed];")

    for i, path in enumerate(model.consequence_paths, start=1):
        cons_id = f"cons{i}"
        lines.append(f'  {cons_id} [shape=box,label="{path.consequence.name}"];')
        lines.append(f'  "{top_id}" -> {cons_id};')
        for j, barrier in enumerate(path.barriers, start=1):
            lines.append(f'  mb{i}_{j} [shape=box,label="{barrier.name}"];')
            lines.append(f"  {cons_id} -> mb{i}_{j} [style=dashed];")

    lines.append(f'  "{hazard_id}" -> "{top_id}";')
    lines.append("}")
    return "\n".join(lines)
