"""Turn a directory of text files into a table of contents for static sites."""

__version__ = "0.1.0"
