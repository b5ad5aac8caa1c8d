"""Command Line Interface package for the Rwanda Cinema content service."""

from .cli_main import main, RwandaCinemaCLI

__all__ = [
    'main',
    'RwandaCinemaCLI',
]
