"""
Core module for application infrastructure.
"""
from app.core.logging_config import setup_logging

__all__ = [
    "setup_logging",
]
