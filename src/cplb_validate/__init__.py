"""Validation and defaulting for k0s control plane load balancing configuration."""

from cplb_validate.errors import ErrorCollector, SpecError
from cplb_validate.loader import ConfigLoadError, dump_spec, load_spec
from cplb_validate.models import LoadBalancingSpec
from cplb_validate.validation import validate

__version__ = "0.1.0"

__all__ = [
    "ConfigLoadError",
    "ErrorCollector",
    "LoadBalancingSpec",
    "SpecError",
    "dump_spec",
    "load_spec",
    "validate",
    "__version__",
]
