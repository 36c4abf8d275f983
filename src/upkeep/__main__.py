"""Allow ``python -m upkeep``."""

from upkeep.cli.app import app

if __name__ == "__main__":
    app()
