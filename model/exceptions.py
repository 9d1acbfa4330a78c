# model/exceptions.py
# This file is part of Procov - Process Model Test Coverage
#
# Lookup and ordering errors raised by the deployed-model registry and event log

"""Errors raised by the read-only views over the execution engine.

Both are integration errors: they indicate that the caller asked about
something the engine never produced, or tried to append to the log out of
order. They are surfaced immediately and never retried.
"""


class UnknownModel(LookupError):
    """Raised when a model key that was never deployed is queried."""

    def __init__(self, model_key: str):
        super().__init__(f"Model '{model_key}' was not deployed in this run")
        self.model_key = model_key


class EventLogError(ValueError):
    """Raised when an event would break the monotonic ordering of the log."""

    pass
