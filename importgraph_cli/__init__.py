"""ImportGraph CLI: find Python imports, split stdlib from third-party, and graph them."""

__version__ = "0.3.0"
