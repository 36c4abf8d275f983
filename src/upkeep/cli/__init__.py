"""
upkeep command-line interface.

Entry point: ``upkeep`` (see :mod:`upkeep.cli.app`).
"""

from upkeep.cli.app import app

__all__ = ["app"]
