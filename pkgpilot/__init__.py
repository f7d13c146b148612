"""pkgpilot — JavaScript package-manager resolution and command synthesis."""

__version__ = "0.1.0"
