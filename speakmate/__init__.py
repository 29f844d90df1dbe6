"""
Application package containing configuration, persistence, scoring and
feedback services for the SpeakMate FastAPI project.
"""

__all__ = [
    "config",
    "time_utils",
    "db",
    "repositories",
    "phrases",
    "services",
    "schemas",
]
