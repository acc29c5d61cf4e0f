"""Run defaults and environment-driven settings."""
import os
from typing import Optional

# ---------------------------------------------------------------------------
# Tunable constants
# ---------------------------------------------------------------------------
DEFAULT_SAMPLES: int = 1000
DEFAULT_DELTA: float = 0.1
DEFAULT_MODE: str = "independent"
REPORT_DIGITS: int = 4

SEED_ENV_VAR = "BOWTIE_RISK_SEED"


def resolve_seed(cli_seed: Optional[int] = None) -> Optional[int]:
    """Return the Monte Carlo seed: CLI value first, then the env var.

    Raises:
        ValueError: If the env var is set but is not an integer.
    """
    if cli_seed is not None:
        return cli_seed

    raw = os.environ.get(SEED_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{SEED_ENV_VAR} must be an integer, got {raw!r}") from None
