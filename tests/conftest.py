import pytest
from fakes import FakeCaptureDevice, FakeClock, FakeWindow, describe

from camera_viewer.entities.common import ControlId


@pytest.fixture
def control_descriptions():
    return {
        ControlId.GAMMA: describe(72, 500, 100, value=120),
        ControlId.BRIGHTNESS: describe(-64, 64, 0, value=10),
    }


@pytest.fixture
def device(control_descriptions):
    return FakeCaptureDevice(controls=control_descriptions)


@pytest.fixture
def window():
    return FakeWindow()


@pytest.fixture
def clock():
    return FakeClock(step=0.1)
