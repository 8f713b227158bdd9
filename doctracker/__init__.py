"""DocTracker - document processing time tracker."""

__version__ = "0.1.0"
