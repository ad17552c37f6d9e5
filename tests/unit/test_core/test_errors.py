"""Tests for the exception hierarchy."""

from pathlib import Path

from flake_junit.core.exceptions import (
    ArtifactWriteError,
    FlakeJunitError,
    LogRetrievalError,
    OutputParseError,
    SchemaError,
    ToolInvocationError,
)


class TestErrors:
    """Test exception details and string forms."""

    def test_all_errors_share_base(self) -> None:
        """Test that every error is a FlakeJunitError."""
        for error_type in (
            ToolInvocationError,
            OutputParseError,
            SchemaError,
            LogRetrievalError,
            ArtifactWriteError,
        ):
            assert issubclass(error_type, FlakeJunitError)

    def test_tool_invocation_error_details(self) -> None:
        """Test command and captured output on ToolInvocationError."""
        error = ToolInvocationError(
            "`nix log x` did not run successfully.",
            command=["nix", "log", "x"],
            return_code=1,
            stdout="",
            stderr="error: no log",
        )

        assert error.details == {"command": "nix log x", "return_code": 1}
        text = str(error)
        assert text.startswith("`nix log x` did not run successfully.")
        assert text.endswith("Stdout:\nStderr:error: no log")

    def test_output_parse_error_keeps_stdout(self) -> None:
        """Test that the rejected output is kept."""
        error = OutputParseError("bad", command=["nix", "flake", "show"], stdout="{")
        assert error.stdout == "{"
        assert error.details["command"] == "nix flake show"

    def test_artifact_write_error_path(self) -> None:
        """Test that the path appears in the details."""
        error = ArtifactWriteError("cannot write", path=Path("/ro/report.xml"))
        assert "/ro/report.xml" in str(error)

    def test_plain_message(self) -> None:
        """Test str() without details."""
        assert str(SchemaError("broken")) == "broken"

    def test_log_retrieval_error(self) -> None:
        """Test the derivation path detail."""
        error = LogRetrievalError("nix-log call failed", drv_path="/nix/store/a.drv")
        assert error.drv_path == "/nix/store/a.drv"
        assert error.details == {"drv_path": "/nix/store/a.drv"}
