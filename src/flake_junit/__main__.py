"""Allow running with python -m flake_junit."""

from flake_junit.cli.main import main

if __name__ == "__main__":
    main()
