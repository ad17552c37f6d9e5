"""Custom exception definitions for flake-junit."""

from pathlib import Path
from typing import Any


class FlakeJunitError(Exception):
    """Base exception for all flake-junit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ToolInvocationError(FlakeJunitError):
    """Exception raised when an external tool exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        return_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize tool invocation error.

        Args:
            message: Error message.
            command: Command line that was executed.
            return_code: Exit status, or None if the process never ran.
            stdout: Captured standard output.
            stderr: Captured standard error.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = " ".join(command)
        if return_code is not None:
            details["return_code"] = return_code
        super().__init__(message, details)
        self.command = command or []
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr

    def __str__(self) -> str:
        """Include the captured output so CI logs show what nix said."""
        return f"{super().__str__()}\nStdout:{self.stdout}\nStderr:{self.stderr}"


class OutputParseError(FlakeJunitError):
    """Exception raised when tool output cannot be parsed into the expected shape."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        stdout: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize output parse error.

        Args:
            message: Error message.
            command: Command line whose output failed to parse.
            stdout: The raw output that was rejected.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = " ".join(command)
        super().__init__(message, details)
        self.command = command or []
        self.stdout = stdout


class SchemaError(FlakeJunitError):
    """Exception raised when the flake outputs do not have the expected checks shape."""


class LogRetrievalError(FlakeJunitError):
    """Exception raised when the build log of a failed check cannot be fetched."""

    def __init__(
        self,
        message: str,
        drv_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize log retrieval error.

        Args:
            message: Error message.
            drv_path: Derivation whose log was requested.
            details: Additional error details.
        """
        details = details or {}
        if drv_path:
            details["drv_path"] = drv_path
        super().__init__(message, details)
        self.drv_path = drv_path


class ArtifactWriteError(FlakeJunitError):
    """Exception raised when the report cannot be written."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize artifact write error.

        Args:
            message: Error message.
            path: Destination path of the report.
            details: Additional error details.
        """
        details = details or {}
        if path is not None:
            details["path"] = str(path)
        super().__init__(message, details)
        self.path = path


class ConfigurationError(FlakeJunitError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
