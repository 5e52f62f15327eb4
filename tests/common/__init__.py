"""
Common test utilities for the podcomplete test suite.

This module provides the fake query backend, record factories and shared
sample data used across test files.
"""

from .fakes import *
from .factories import *

__all__ = [
    # Fakes
    "FakeBackend",
    "sample_backend",

    # Factories
    "RecordFactory",
    "EngineOutputFactory",
    "AccountFileFactory",

    # Sample IDs
    "WEB_ID",
    "DB_ID",
    "CACHE_ID",
    "INFRA_POD_ID",
    "BUILD_POD_ID",
    "HTTPD_IMAGE_ID",
    "ALPINE_IMAGE_ID",
]
