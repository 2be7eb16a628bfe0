"""toolbin — install developer tools from package managers and GitHub releases."""

__version__ = "0.1.0"
