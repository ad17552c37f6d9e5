"""flake-junit: run nix flake checks and report them as JUnit XML."""

__version__ = "0.1.0"
