"""Error taxonomy for bowtie model configuration problems."""


class InvalidModelError(ValueError):
    """Raised when a model, distribution or run setting cannot be evaluated.

    Covers unknown probability-model modes, unknown distribution kinds,
    non-positive sample counts and non-finite numbers reaching the engine.
    """
