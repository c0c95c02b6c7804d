"""
Errors raised by learners and ensembles.

All derive from ``ValueError`` so callers that already guard model
calls with ``except ValueError`` keep working.
"""


class EnsembleError(ValueError):
    """Base class for errors raised by this package."""


class ConfigurationError(EnsembleError):
    """Invalid configuration: missing fields, malformed grid, bad partitions."""


class NotFittedError(EnsembleError):
    """A learner was asked to transform before being fitted."""


class InconsistentDataError(EnsembleError):
    """Instances, labels or predictions disagree in length."""


class UnseenLabelError(EnsembleError, KeyError):
    """A label is absent from the label map built at fit time."""

    def __str__(self) -> str:
        return ValueError.__str__(self)
