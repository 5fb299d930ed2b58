"""
Utility modules for the table override layer

Provides:
- logging: Structured logging configuration
- tracing: OpenTelemetry spans for override application and row transforms
"""

__version__ = "1.0.0"
__all__ = ["logging", "tracing"]
