from __future__ import annotations


class SchedulerError(ValueError):
    """
    Base class for invalid simulation requests. Raised before any strategy
    runs, so no partial timeline is ever produced.
    """


class EmptyInputError(SchedulerError):
    pass


class InvalidDurationError(SchedulerError):
    pass


class InvalidProcessError(SchedulerError):
    pass


class InvalidQuantumError(SchedulerError):
    pass


class MissingPriorityError(SchedulerError):
    pass


class UnknownAlgorithmError(SchedulerError):
    pass


class WorkloadFormatError(SchedulerError):
    pass


class TimelineConsistencyError(AssertionError):
    """
    A strategy produced output that breaks a timeline invariant.

    This is a bug in the engine, not a user error.
    """
