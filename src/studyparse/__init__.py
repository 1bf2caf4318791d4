"""Turn free-form study-content responses into typed records."""

__version__ = "0.1.0"
