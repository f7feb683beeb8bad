"""
Core Module

Core functionality including:
- Primitives (authenticated encryption backends)
- Logging (structured logging)
- Metrics (Prometheus)
- Exceptions (custom exceptions)
"""

__all__ = [
    "primitives",
    "logging",
    "metrics",
    "exceptions",
]
