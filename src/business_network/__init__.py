# ABOUTME: Main package initialization for the business network core.
# ABOUTME: Exports version information from pyproject.toml.

from importlib.metadata import version

__version__ = version("business-network")
