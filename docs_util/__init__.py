"""docs-util: merged release changelogs and security-scan reports."""

__version__ = "0.3.0"
