"""Exception definitions module."""

from flake_junit.core.exceptions.errors import (
    ArtifactWriteError,
    ConfigurationError,
    FlakeJunitError,
    LogRetrievalError,
    OutputParseError,
    SchemaError,
    ToolInvocationError,
)

__all__ = [
    "FlakeJunitError",
    "ToolInvocationError",
    "OutputParseError",
    "SchemaError",
    "LogRetrievalError",
    "ArtifactWriteError",
    "ConfigurationError",
]
