"""Per-package signal providers and parallel gathering."""

from .base import ExternalSignals, SignalProvider
from .commands import CommandError, CommandSignalProvider
from .filesystem import FilesystemSignalProvider
from .gather import collect_package_signals, gather_signals

__all__ = [
    "ExternalSignals",
    "SignalProvider",
    "CommandError",
    "CommandSignalProvider",
    "FilesystemSignalProvider",
    "collect_package_signals",
    "gather_signals",
]
