"""
upkeep - Run every package-manager upgrade at once.

- upkeep.core: errors, Result envelope, structured logging
- upkeep.jobs: job registry, discovery, and the concurrent engine
- upkeep.cli: the ``upkeep`` command
"""

__version__ = "0.1.0"
