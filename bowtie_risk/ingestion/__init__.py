from .model_json import (
    model_from_dict,
    model_to_dict,
    read_distributions_json,
    read_model_json,
    write_distributions_json,
    write_model_json,
    write_model_schema,
)

__all__ = [
    "model_to_dict",
    "model_from_dict",
    "read_model_json",
    "write_model_json",
    "read_distributions_json",
    "write_distributions_json",
    "write_model_schema",
]
