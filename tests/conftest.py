"""Shared pytest configuration and fixtures for the preview_fit test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from preview_fit.camera.descriptors import CameraDescriptor, LensFacing  # noqa: E402
from preview_fit.core.config_manager import ConfigManager  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    """ConfigManager whose user overrides live under tmp_path."""
    return ConfigManager(overrides_dir=tmp_path / "overrides")


@pytest.fixture
def back_camera() -> CameraDescriptor:
    """Typical phone main camera: sensor mounted at 90 degrees, 4:3 stills."""
    return CameraDescriptor(
        camera_id="0",
        lens_facing=LensFacing.BACK,
        sensor_orientation=90,
        preview_sizes=["1920x1080", "1440x1080", "1280x720", "960x720", "640x480"],
        still_sizes=["4032x3024", "1920x1080"],
    )


@pytest.fixture
def front_camera() -> CameraDescriptor:
    return CameraDescriptor(
        camera_id="1",
        lens_facing=LensFacing.FRONT,
        sensor_orientation=270,
        preview_sizes=["1280x720", "640x480"],
        still_sizes=["2560x1920"],
    )
