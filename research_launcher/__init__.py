"""research-cli native launcher: finds the Node.js module and delegates to it."""

__version__ = "0.2.7"
