"""Shell adapters — subprocess runner and PATH lookup."""

from jpd.adapters.shell.command import ShutilPathLookup, SubprocessRunner

__all__ = ["ShutilPathLookup", "SubprocessRunner"]
