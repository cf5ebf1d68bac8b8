"""
Test Tools Package
Tests for the tools module (history simulator)
"""

__all__ = [
    "test_history_simulator",
]
