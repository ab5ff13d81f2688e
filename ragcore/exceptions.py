"""
Exception types raised by the RAG core.
"""
from typing import Optional


class RagCoreError(Exception):
    """Base class for all core errors."""


class DimensionMismatch(RagCoreError, ValueError):
    """Two vectors of different lengths were compared."""

    def __init__(self, left: int, right: int):
        self.left = left
        self.right = right
        super().__init__(f"Vectors must have the same length (got {left} and {right})")


class EmbeddingError(RagCoreError):
    """A model-backed embedding request failed."""


class ModelRunnerError(RagCoreError):
    """Running the external model failed."""

    def __init__(self, message: str, kind: str = "unknown", suggestion: Optional[str] = None):
        self.kind = kind
        self.suggestion = suggestion
        super().__init__(message)


class SubprocessSpawnFailure(ModelRunnerError):
    """The model process could not be started."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(message, kind="not_installed", suggestion=suggestion)


class SubprocessExitFailure(ModelRunnerError):
    """The model process exited with a non-zero code."""

    def __init__(
        self,
        message: str,
        exit_code: int,
        stderr: str = "",
        kind: str = "unknown",
        suggestion: Optional[str] = None,
    ):
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message, kind=kind, suggestion=suggestion)


class SubprocessTimeout(ModelRunnerError):
    """The model process did not finish in time."""

    def __init__(self, message: str):
        super().__init__(message, kind="timeout")
