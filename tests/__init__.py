"""
DoseKeeper Test Suite
=====================

This package contains all tests for the DoseKeeper medication tracker.

Test Structure:
- test_services/: Adherence, schedule, suggestion and tracker logic
- test_tools/: History simulator
- test_api/: API endpoint tests for FastAPI routes
- conftest.py: Shared pytest fixtures
- e2e_test.py: Smoke run against a live backend (python tests/e2e_test.py)

Running Tests:
    # Run all tests
    pytest

    # Run specific test module
    pytest tests/test_api/

    # Run with verbose output
    pytest -v

    # Run only marked tests
    pytest -m "api"
"""

# Common test data
SAMPLE_MEDICATIONS = [
    {"name": "Metformin", "dosage": "500mg", "schedule": {"type": "daily", "times": ["09:00", "21:00"]}},
    {"name": "Lisinopril", "dosage": "10mg", "schedule": {"type": "daily", "times": ["08:00"]}},
    {"name": "Vitamin D", "dosage": "1000IU", "schedule": {"type": "weekly", "times": ["08:00"], "days": [0]}},
]
