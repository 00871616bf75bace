"""Domain errors (typed) for the LLM bridge.

Every failure a client can surface derives from DomainError, so callers can
catch the whole family without depending on infrastructure exceptions.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


class ExecutionError(DomainError):
    """Sandbox provisioning or process execution failed.

    exit_code is None when the process never produced a status (e.g. the
    docker binary is missing).
    """

    def __init__(self, message: str, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        if self.exit_code is None:
            return self.message
        return f"{self.message} (exit code {self.exit_code})"


class ExecutionCancelled(ExecutionError):
    """The caller cancelled an in-flight sandbox execution."""
