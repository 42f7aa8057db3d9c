"""
Pytest configuration and shared fixtures for all syntaxlens tests.

This conftest.py provides session and class-scoped fixtures so the Lark
parser (the expensive part of a render) is built once per run.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from syntaxlens.engine.driver import RenderDriver
from syntaxlens.frontend.parser import Parser


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """
    Session-scoped parser shared across ALL tests.

    - Grammar is loaded once with Lark native caching
    - Safe to share: each parse gets its own recovery session
    """
    return Parser()


@pytest.fixture(scope="session")
def strict_parser():
    """Parser that never recovers: the first syntax error raises ParseError."""
    return Parser(max_recoveries=0)


@pytest.fixture(scope="session")
def session_driver(session_parser):
    """Session-scoped render driver (stateless, safe to share)."""
    return RenderDriver(parser=session_parser)


# =============================================================================
# Class-scoped fixtures (shared within a test class)
# =============================================================================

@pytest.fixture(scope="class")
def parser(session_parser):
    """Class-scoped parser - returns the session parser."""
    return session_parser


@pytest.fixture(scope="class")
def driver(session_driver):
    """Class-scoped driver - returns the session driver."""
    return session_driver


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
