"""Quantitative bowtie risk modelling: evaluation, Monte Carlo and sensitivity."""

__version__ = "0.1.0"
