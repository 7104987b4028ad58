"""jpd — one set of verbs for every JavaScript package manager."""

__version__ = "0.4.0"
