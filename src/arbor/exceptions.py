# src/arbor/exceptions.py

"""
Exception hierarchy for arbor.

Assertion failures inside specs are plain ``AssertionError``s and are never
wrapped in these types. The classes below describe problems with the harness
itself: bad configuration, spec files that cannot be loaded, and misuse of
the registration/execution API.
"""


class ArborError(Exception):
    """Base class for all arbor specific errors."""

    pass


class ConfigurationError(ArborError):
    """Raised when run options or a config file are invalid."""

    pass


class SpecLoadError(ArborError):
    """Raised when a spec file cannot be imported."""

    def __init__(self, message: str, path: str | None = None, details: Exception | None = None):
        self.path = path
        self.details = details
        full_message = message
        if path:
            full_message += f" (File: '{path}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ArborUsageError(ArborError):
    """
    A programming error in how the harness is driven.

    These are fatal: the runner never reports them as a spec outcome, they
    abort the whole run.
    """

    pass


class RegistrationError(ArborUsageError):
    """Registration attempted after execution started, or with bad arguments."""

    pass


class ExecutionStackError(ArborUsageError):
    """The execution stack was used while empty."""

    pass


class ExecutionStateError(ArborUsageError):
    """A finalized run result was mutated."""

    pass

# 🔼⚙️
