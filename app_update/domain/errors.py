"""Errors surfaced to callers of the update workflow."""


class AppUpdateError(Exception):
    pass


class ParseError(AppUpdateError, ValueError):
    """A version string does not fit the major.minor.patch+build grammar."""


class ConfigurationError(AppUpdateError):
    """No store identifier or custom endpoint is configured."""


class NetworkPolicyError(AppUpdateError):
    """An update check was refused by the WiFi-only policy."""
