"""cocolog — parse custom-format git logs into commit records."""

__version__ = "0.1.0"
