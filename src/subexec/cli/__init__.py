"""Command-line front end for subexec.

``cli`` and ``main`` resolve on first access so that ``import subexec``
never pulls in click command registration, and ``python -m
subexec.cli.main`` runs without runpy's double-import warning.
"""

__all__ = ["cli", "main"]


def __getattr__(name):  # pragma: no cover - trivial lazy import
    if name == "cli":
        from .main import cli

        return cli
    if name == "main":
        from .main import main

        return main
    raise AttributeError(name)
