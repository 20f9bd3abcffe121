"""
Exceptions

Custom exceptions shared by the domain, execution and service layers.
Everything derives from TriageError so the API layer can map them in one place.
"""


class TriageError(Exception):
    """Base class for all incident triage errors."""
    pass


class DuplicateStepIdError(TriageError):
    """Raised when a guide contains two steps with the same id."""

    def __init__(self, step_id: str):
        self.step_id = step_id
        super().__init__(f"Duplicate step id '{step_id}' in guide.")


class InvalidPatternError(TriageError):
    """Raised when a step's expectation pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid expectation pattern '{pattern}': {reason}")


class ExecutorFailure(TriageError):
    """Raised when the command executor cannot produce output (transport error, timeout, bad response)."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"Executor failed for '{command}': {reason}")


class GuideNotFoundError(TriageError):
    """Raised when a guide name is not known to the repository."""
    pass


class RunNotFoundError(TriageError):
    """Raised when a run id is not known to the run repository."""
    pass


class SummarizerUnavailableError(TriageError):
    """Raised when the summarization service is not configured (e.g. no API key)."""
    pass
