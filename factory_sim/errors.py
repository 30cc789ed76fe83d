"""Error taxonomy — every condition here aborts the run."""


class FactorySimError(Exception):
    """Base class for all simulation errors."""


class ConfigurationError(FactorySimError, ValueError):
    """Invalid parameters: non-positive or non-finite means, horizon or seed."""


class DomainError(FactorySimError):
    """An event the transition engine does not know how to handle reached it."""


class EmptyQueueError(FactorySimError, IndexError):
    """Extraction from an empty future event set.

    The arrival and breakdown/resume chains always re-schedule themselves, so
    this only happens when the event set was built incorrectly.
    """
