"""
Pytest configuration for the sequence tests.

This file ensures that the project root is in the Python path
so that test files can import sequence, models, and utils modules.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest


@pytest.fixture
def call_counter():
    """Callable that squares its input and records every call"""
    calls = []

    def square(x):
        calls.append(x)
        return x * x

    square.calls = calls
    return square
