"""Test configuration and fixtures for the books API."""

from tests.fixtures import *  # noqa: F401,F403
