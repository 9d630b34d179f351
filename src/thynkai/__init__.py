"""Thynkai toolkits - contributor CLI for the models registry."""

from importlib.metadata import version

__version__ = version("thynkai-cli")
