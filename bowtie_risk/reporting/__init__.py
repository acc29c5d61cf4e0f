from .diagrams import to_graphviz, to_mermaid
from .report import (
    report_markdown,
    simulation_frame,
    simulation_quantiles,
    tornado_frame,
    write_report_markdown,
    write_samples_csv,
    write_tornado_csv,
)

__all__ = [
    "to_mermaid",
    "to_graphviz",
    "report_markdown",
    "write_report_markdown",
    "tornado_frame",
    "write_tornado_csv",
    "simulation_frame",
    "simulation_quantiles",
    "write_samples_csv",
]
