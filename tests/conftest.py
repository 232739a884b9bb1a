"""
Pytest configuration and shared fixtures for typedparams tests.
"""

import sys
from pathlib import Path

import pytest

# Ensure src is importable without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typedparams import arrayp, intp, parameters, stringp  # noqa: E402


@pytest.fixture
def simple_parameters():
    """Collection with one required string and one defaulted int."""
    return parameters(one=stringp(), two=intp(default=222))


@pytest.fixture
def nested_parameters():
    """Collection with a nested array whose members all have defaults."""
    return parameters(
        one=stringp(),
        two=intp(default=222),
        nest=arrayp(nestOne=intp(default=1), nestTwo=intp(default=2)),
    )
