"""Core of a tabbed terminal emulator: command-line options, session key files and encodings."""

__version__ = "0.1.0"