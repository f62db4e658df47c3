"""
Error taxonomy — every fatal condition the injector can report.

Core services raise these; the CLI catches ``InjectorError`` once and
maps ``exit_code`` to the process exit status.  Reload failures are
not errors: they ride on the result objects as warnings.
"""

from __future__ import annotations

# ── Exit codes ──────────────────────────────────────────────────

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_SERVICE_MANAGER = 2
EXIT_UNSUPPORTED = 3
EXIT_USAGE = 64


class InjectorError(Exception):
    """Base class for fatal injector errors."""

    exit_code: int = EXIT_FAILURE


class ConfigError(InjectorError):
    """Raised when the settings file or SLSsteam config cannot be used."""


class EnvironmentUnsupportedError(InjectorError):
    """Host OS is neither Bazzite nor SteamOS."""

    exit_code = EXIT_UNSUPPORTED


class ServiceManagerUnavailableError(InjectorError):
    """``systemctl`` is not on PATH."""

    exit_code = EXIT_NO_SERVICE_MANAGER


class SourceMissingError(InjectorError, FileNotFoundError):
    """The library directory does not exist."""


class EmptySetError(InjectorError):
    """The library directory holds no matching library files."""


class SafeModeKeyMissingError(InjectorError):
    """The SafeMode config is non-empty but has no ``SafeMode:`` line."""
