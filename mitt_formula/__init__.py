"""Installer for the prebuilt mitt encrypted file transfer CLI."""

__version__ = "0.4.0"
