"""Language toolchain adapters — node package manager version reports."""

from jpd.adapters.languages.node import ManagerVersionReporter

__all__ = ["ManagerVersionReporter"]
