"""
Model runner - executes prompts against a local model through the Ollama CLI.
"""
from typing import Optional, Protocol
import re
import shutil
import subprocess

from ragcore.exceptions import (
    ModelRunnerError,
    SubprocessExitFailure,
    SubprocessSpawnFailure,
    SubprocessTimeout,
)
from ragcore.utils.logger import get_logger

logger = get_logger(__name__)

# Alphanumerics plus colons, underscores, periods, slashes and hyphens
_MODEL_NAME = re.compile(r"^[a-zA-Z0-9:_./-]+$")
_MODEL_NOT_FOUND = re.compile(r"model ['\"]?([^'\"]+)['\"]? not found", re.IGNORECASE)


class ModelRunner(Protocol):
    """Runs a prompt through a model and returns the generated text."""

    def run(self, prompt: str, model: str) -> str:
        ...


def classify_error(stderr: str, model: str) -> ModelRunnerError:
    """Turn Ollama stderr output into a ModelRunnerError with a kind and hint."""
    lowered = stderr.lower()
    message = stderr.strip() or "Command execution failed"

    if "not found" in lowered:
        match = _MODEL_NOT_FOUND.search(stderr)
        name = match.group(1) if match else model
        return ModelRunnerError(
            f"Model '{name}' not found. Try pulling it first.",
            kind="model_not_found",
            suggestion=f"Run: ollama pull {name}",
        )
    if "connection refused" in lowered or "dial tcp" in lowered:
        return ModelRunnerError(
            "Cannot connect to Ollama server. Is Ollama running?",
            kind="connection_error",
            suggestion="Start Ollama service: ollama serve",
        )
    if "timeout" in lowered:
        return ModelRunnerError("Command execution timed out", kind="timeout")
    return ModelRunnerError(message)


class OllamaCLIRunner:
    """Runs ``ollama run <model>`` with the prompt on standard input."""

    def __init__(self, binary: str = "ollama", timeout: Optional[float] = 120.0):
        self.binary = binary
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check whether the Ollama binary is on PATH."""
        return shutil.which(self.binary) is not None

    def run(self, prompt: str, model: str) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Literal prompt text
            model: Model identifier, e.g. ``llama2`` or ``mistral:7b-instruct``

        Returns:
            Captured standard output, stripped

        Raises:
            ModelRunnerError: on an invalid model name, spawn failure,
                non-zero exit or timeout
        """
        if not _MODEL_NAME.match(model):
            raise ModelRunnerError(
                f"Invalid model name: '{model}'",
                kind="invalid_model",
            )

        command = [self.binary, "run", model]
        try:
            result = subprocess.run(
                command,
                input=prompt,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SubprocessTimeout(f"Ollama process timed out after {self.timeout}s") from e
        except OSError as e:
            raise SubprocessSpawnFailure(
                f"Failed to spawn Ollama: {e}",
                suggestion="Install Ollama and make sure it is on PATH",
            ) from e

        # A negative code means the process was killed by a signal; whatever
        # it printed is still used.
        if result.returncode > 0:
            error = classify_error(result.stderr, model)
            raise SubprocessExitFailure(
                f"Ollama process exited with code {result.returncode}: {error}",
                exit_code=result.returncode,
                stderr=result.stderr,
                kind=error.kind,
                suggestion=error.suggestion,
            )

        return result.stdout.strip()
