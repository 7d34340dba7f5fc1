"""Unit tests for camera selection and preview planning."""

import pytest

from preview_fit.camera.config import PreviewConfig
from preview_fit.camera.descriptors import CameraDescriptor, LensFacing
from preview_fit.camera.planner import plan_preview, select_camera
from preview_fit.errors import CameraSelectionError, InvalidRotationError, PreviewGeometryError
from preview_fit.geometry.size_selector import SelectionKind
from preview_fit.geometry.types import DisplayRotation, Resolution


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


def test_descriptor_from_dict_parses_sizes():
    camera = CameraDescriptor.from_dict(
        {
            "id": 2,
            "facing": "External",
            "sensor_orientation": 0,
            "preview_sizes": ["640x480", [320, 240]],
        }
    )

    assert camera.camera_id == "2"
    assert camera.lens_facing is LensFacing.EXTERNAL
    assert camera.preview_sizes == (Resolution(640, 480), Resolution(320, 240))
    assert camera.still_sizes == ()


def test_descriptor_from_dict_requires_preview_sizes():
    with pytest.raises(PreviewGeometryError, match="preview_sizes"):
        CameraDescriptor.from_dict({"id": "0"})


def test_descriptor_rejects_unknown_facing_and_sensor_angle():
    with pytest.raises(PreviewGeometryError):
        CameraDescriptor("0", "sideways", 90, ["640x480"])
    with pytest.raises(InvalidRotationError):
        CameraDescriptor("0", "back", 45, ["640x480"])


# ---------------------------------------------------------------------------
# Camera selection
# ---------------------------------------------------------------------------


def test_front_facing_cameras_are_skipped(front_camera, back_camera):
    assert select_camera([front_camera, back_camera]) is back_camera


def test_front_camera_allowed_when_configured(front_camera, back_camera):
    assert select_camera([front_camera, back_camera], skip_front_facing=False) is front_camera


def test_no_usable_camera_raises(front_camera):
    with pytest.raises(CameraSelectionError):
        select_camera([front_camera])
    with pytest.raises(CameraSelectionError):
        select_camera([])


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def test_portrait_phone_plan(front_camera, back_camera):
    plan = plan_preview([front_camera, back_camera], "1080x1440", "1080x2280", DisplayRotation.ROTATION_0)

    assert plan.camera_id == "0"
    assert plan.still_size == Resolution(4032, 3024)
    assert plan.request.swapped
    assert plan.request.target == Resolution(1440, 1080)
    assert plan.request.max_size == Resolution(1920, 1080)
    # Only 4:3 sizes qualify; 1440x1080 is the smallest covering the view.
    assert plan.preview_size == Resolution(1440, 1080)
    assert plan.selection is SelectionKind.COVERING
    assert plan.view_aspect == Resolution(1080, 1440)
    assert plan.transform.is_identity()


def test_landscape_plan_counter_rotates(back_camera):
    plan = plan_preview([back_camera], "1920x1080", "2280x1080", 90)

    assert not plan.request.swapped
    assert plan.preview_size == Resolution(1440, 1080)
    assert plan.selection is SelectionKind.BEST_EFFORT
    assert plan.view_aspect == Resolution(1440, 1080)
    assert plan.rotation is DisplayRotation.ROTATION_90
    assert plan.transform.rotation_degrees == pytest.approx(-90.0)


def test_configured_ceiling_limits_preview(back_camera):
    config = PreviewConfig(max_preview_width=1280, max_preview_height=720)

    plan = plan_preview([back_camera], "1080x1440", "1080x2280", 0, config=config)

    assert plan.request.max_size == Resolution(1280, 720)
    assert plan.preview_size == Resolution(960, 720)


def test_still_size_falls_back_to_preview_sizes():
    camera = CameraDescriptor("5", LensFacing.BACK, 0, ["1280x720", "640x360"])

    plan = plan_preview([camera], "640x360", "1280x720", 0, landscape=True)

    assert plan.still_size == Resolution(1280, 720)
    assert plan.preview_size == Resolution(640, 360)


def test_plan_to_dict(back_camera):
    data = plan_preview([back_camera], "1080x1440", "1080x2280", 0).to_dict()

    assert data["camera_id"] == "0"
    assert data["preview_size"] == "1440x1080"
    assert data["selection"] == "covering"
    assert data["rotation_degrees"] == 0
    assert data["transform"]["matrix"] == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]


@pytest.mark.parametrize("raw", [1, "0", None, ["640x480"]])
def test_descriptor_from_dict_rejects_non_objects(raw):
    with pytest.raises(PreviewGeometryError, match="must be an object"):
        CameraDescriptor.from_dict(raw)


def test_descriptor_sizes_must_be_a_list():
    with pytest.raises(PreviewGeometryError):
        CameraDescriptor.from_dict({"id": "0", "preview_sizes": 640})
    with pytest.raises(PreviewGeometryError):
        CameraDescriptor.from_dict({"id": "0", "preview_sizes": "640x480"})
