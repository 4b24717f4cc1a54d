"""
ACME Fitness Shop on Kubernetes
Table-driven topology builder plus the Pulumi code that submits it
"""

from .config import Configuration, get_config
from .errors import AcmefitError, ConfigurationError, SubmissionError, TopologyError
from .resources import ResourceGraph
from .topology import build

__all__ = [
    "Configuration",
    "get_config",
    "AcmefitError",
    "ConfigurationError",
    "SubmissionError",
    "TopologyError",
    "ResourceGraph",
    "build",
]
