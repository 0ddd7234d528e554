"""Command-line tool and helpers for reading CPU information on Linux and macOS."""

__version__ = "0.0.3"