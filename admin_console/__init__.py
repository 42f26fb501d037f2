"""Headless core of the users / taxi-rides administration console."""

from .main import AdminConsole, create_console

__all__ = [
    "AdminConsole",
    "create_console",
]
