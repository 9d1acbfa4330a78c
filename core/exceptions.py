# core/exceptions.py
# This file is part of Procov - Process Model Test Coverage
#
# Lifecycle errors for the begin/end test protocol

"""Errors raised when the begin/end test protocol is misused.

The collector never corrects a mismatched call sequence on its own, since
doing so would silently produce wrong coverage numbers. Both errors carry
the offending method name for the integration layer to report.
"""


class CoverageLifecycleError(RuntimeError):
    """Base class for begin/end protocol violations."""

    def __init__(self, method_name: str, message: str):
        super().__init__(message)
        self.method_name = method_name


class DuplicateWindow(CoverageLifecycleError):
    """Raised when a test is begun while a window for it is still recording."""

    def __init__(self, method_name: str):
        super().__init__(method_name, f"Test '{method_name}' is already being recorded")


class NoActiveWindow(CoverageLifecycleError):
    """Raised when a test is ended without a preceding begin."""

    def __init__(self, method_name: str):
        super().__init__(method_name, f"Test '{method_name}' has no active recording window")
