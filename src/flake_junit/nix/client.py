"""
Nix Client - async wrapper around the nix command line.

Each public method runs exactly one nix process with no stdin and with
stdout and stderr captured separately. A non-zero exit status raises
ToolInvocationError; output that does not parse raises OutputParseError.
Nothing is retried and no timeout is applied.
"""

import asyncio
import json
import time
from typing import Any

from pydantic import TypeAdapter, ValidationError

from flake_junit.core.exceptions.errors import OutputParseError, ToolInvocationError
from flake_junit.core.logger.logger import get_logger
from flake_junit.core.observer import LoggingObserver, RunObserver
from flake_junit.nix.models import BuildDerivation, BuildMode

logger = get_logger(__name__)

CURRENT_SYSTEM_EXPR = "builtins.currentSystem"

_BUILD_RESULT_ADAPTER = TypeAdapter(list[BuildDerivation])


def _lossy(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class NixClient:
    """
    Runs the four nix subcommands the check pipeline needs.

    ``nix flake show`` enumerates the flake outputs, ``nix eval`` resolves
    the current system, ``nix build`` probes or builds a check and
    ``nix log`` fetches the build log of a derivation.
    """

    def __init__(
        self,
        nix_path: str = "nix",
        observer: RunObserver | None = None,
    ):
        """
        Initialize the client.

        Args:
            nix_path: Path to the nix binary (default: looks in PATH).
            observer: Receives invocation-start and invocation-end events.
        """
        self.nix_path = nix_path
        self.observer: RunObserver = observer or LoggingObserver()

    async def run_command(self, args: list[str]) -> tuple[int, bytes, bytes]:
        """
        Run nix with the given arguments.

        Args:
            args: Arguments after the nix executable.

        Returns:
            Tuple of (return_code, stdout, stderr).

        Raises:
            ToolInvocationError: If the process cannot be started.
        """
        cmd = [self.nix_path, *args]
        self.observer.on_invocation_start(cmd)
        start_time = time.monotonic()

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.observer.on_invocation_end(cmd, None, time.monotonic() - start_time)
            raise ToolInvocationError(
                f"Could not start `{' '.join(cmd)}`: {e}",
                command=cmd,
            ) from e

        stdout, stderr = await process.communicate()
        return_code = process.returncode if process.returncode is not None else -1
        self.observer.on_invocation_end(cmd, return_code, time.monotonic() - start_time)

        return return_code, stdout, stderr

    async def _run_checked(self, args: list[str]) -> bytes:
        """Run nix and return raw stdout, raising on a non-zero exit."""
        cmd = [self.nix_path, *args]
        return_code, stdout, stderr = await self.run_command(args)

        if return_code != 0:
            raise ToolInvocationError(
                f"`{' '.join(cmd)}` did not run successfully.",
                command=cmd,
                return_code=return_code,
                stdout=_lossy(stdout),
                stderr=_lossy(stderr),
            )
        return stdout

    def _decode_text(self, args: list[str], stdout: bytes) -> str:
        # Text output is used verbatim, so undecodable bytes are an error
        # instead of being replaced.
        try:
            return stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ToolInvocationError(
                f"`nix {' '.join(args)}` returned output that is not valid UTF-8: {e}",
                command=[self.nix_path, *args],
                return_code=0,
                stdout=_lossy(stdout),
            ) from e

    def _parse_json(self, args: list[str], stdout: bytes) -> Any:
        try:
            return json.loads(stdout)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise OutputParseError(
                f"`nix {' '.join(args)}` produced invalid JSON: {e}",
                command=[self.nix_path, *args],
                stdout=_lossy(stdout),
            ) from e

    async def show(self) -> dict[str, Any]:
        """
        Enumerate the flake outputs.

        Returns:
            The parsed ``nix flake show --json`` document.
        """
        args = ["flake", "show", "--json"]
        stdout = await self._run_checked(args)
        document = self._parse_json(args, stdout)

        if not isinstance(document, dict):
            raise OutputParseError(
                "`nix flake show --json` did not return a JSON object",
                command=[self.nix_path, *args],
                stdout=_lossy(stdout),
            )
        return document

    async def current_system(self) -> str:
        """
        Resolve the system nix is running on (e.g. ``x86_64-linux``).

        Returns:
            The raw system string.
        """
        args = ["eval", "--impure", "--raw", "--expr", CURRENT_SYSTEM_EXPR]
        stdout = await self._run_checked(args)
        try:
            system = stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OutputParseError(
                f"`nix eval` returned a value for {CURRENT_SYSTEM_EXPR} that is not valid UTF-8: {e}",
                command=[self.nix_path, *args],
                stdout=_lossy(stdout),
            ) from e

        if not system:
            raise OutputParseError(
                f"`nix eval` returned an empty value for {CURRENT_SYSTEM_EXPR}",
                command=[self.nix_path, *args],
                stdout=system,
            )
        return system

    async def build(
        self,
        target: str,
        mode: BuildMode,
        extra_options: list[str] | None = None,
    ) -> list[BuildDerivation]:
        """
        Build (or dry-run build) a flake attribute.

        Args:
            target: Installable, e.g. ``.#checks.x86_64-linux.fmt``.
            mode: DRY_RUN only resolves derivations, REAL builds them.
            extra_options: Options appended verbatim after the built-in flags.

        Returns:
            Derivations reported by nix, in nix's order.
        """
        args = ["build", target, "--json"]
        if mode == BuildMode.DRY_RUN:
            args.append("--dry-run")
        args.extend(extra_options or [])

        stdout = await self._run_checked(args)
        raw = self._parse_json(args, stdout)

        try:
            derivations = _BUILD_RESULT_ADAPTER.validate_python(raw)
        except ValidationError as e:
            raise OutputParseError(
                f"`nix build {target} --json` returned an unexpected structure: {e}",
                command=[self.nix_path, *args],
                stdout=_lossy(stdout),
            ) from e

        logger.debug(f"`nix build {target}` reported {len(derivations)} derivation(s)")
        return derivations

    async def log(self, drv_path: str) -> str:
        """
        Fetch the build log of a derivation.

        Fails with ToolInvocationError when nix has no log for it, for
        example after the derivation was garbage-collected.

        Args:
            drv_path: Derivation store path.

        Returns:
            The log text.
        """
        args = ["log", drv_path]
        stdout = await self._run_checked(args)
        return self._decode_text(args, stdout)
