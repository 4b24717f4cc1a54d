"""
Errors raised while building and submitting the ACME Fitness topology
"""

from typing import Iterable


class AcmefitError(Exception):
    """Base class for all topology errors"""


class ConfigurationError(AcmefitError):
    """The kubevars configuration is missing fields or holds invalid values"""

    def __init__(self, missing: Iterable[str] = (), invalid: Iterable[str] = ()):
        self.missing = tuple(missing)
        self.invalid = tuple(invalid)
        problems = []
        if self.missing:
            problems.append(f"missing: {', '.join(self.missing)}")
        if self.invalid:
            problems.append(f"invalid: {'; '.join(self.invalid)}")
        super().__init__("Invalid kubevars configuration (" + " | ".join(problems) + ")")


class TopologyError(AcmefitError):
    """The service catalog or resource graph is inconsistent"""


class SubmissionError(AcmefitError):
    """A resource could not be registered with the Pulumi engine"""

    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(f"Failed to register {resource}: {reason}")
