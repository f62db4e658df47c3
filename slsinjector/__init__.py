"""slssteam-injector — keep the LD_AUDIT systemd drop-in in sync."""

__version__ = "0.1.0"
