from .filters import (
    prune_features,
    drop_empty_samples,
)
from .names import (
    default_names,
    sanitize_name,
    resolve_dataset_names,
)

__all__ = [
    "prune_features",
    "drop_empty_samples",
    "default_names",
    "sanitize_name",
    "resolve_dataset_names",
]
