"""Restart, start or stop a systemd service or compose stack."""

__version__ = "0.3.1"
