"""
CLI Module - Command-line interface for the margin simulation engine.
"""

from .simulation_commands import cli, main

__all__ = ['cli', 'main']
