"""Pytest configuration for phongtrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest

from phongtrace.backend import init_backend


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate the module-level fields of already imported modules.
    """
    init_backend()
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear primitives, materials and lights before and after each test."""
    # Import here so Taichi is initialized before fields are declared
    from phongtrace.materials.phong import clear_materials
    from phongtrace.scene.intersection import clear_scene
    from phongtrace.scene.lights import clear_lights

    def _clear_all():
        clear_scene()
        clear_materials()
        clear_lights()

    _clear_all()

    yield

    _clear_all()
