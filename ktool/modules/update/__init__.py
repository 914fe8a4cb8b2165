"""
Update Module - Black Box Interface

Purpose: Keep the installed tool current
Interface: UpdateChecker.check_for_updates(), UpdateChecker.upgrade(), parse_major_version()
Hidden: release registry lookup, install script execution

Checks are best-effort: an unreachable registry never blocks a command.
A newer major release does block every command except version, help and
upgrade.
"""

from .updater import UpdateChecker, parse_major_version

__all__ = ["UpdateChecker", "parse_major_version"]
