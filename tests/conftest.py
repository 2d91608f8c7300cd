# tests/conftest.py
import numpy as np
import pytest

from blurthing.app.event_bus import EventBus
from blurthing.app.orchestrator import Orchestrator
from blurthing.config import BlurThingConfig


@pytest.fixture
def small_config():
    # mały podgląd: dekoder blurhash jest czysto pythonowy
    return BlurThingConfig(preview_size=16, downsample_size=16, export_size=40)


@pytest.fixture
def black_hash():
    # hash czarnego obrazu dla siatki 4x3 (DC=0, wszystkie AC=0)
    return "L00000fQfQfQfQfQfQfQfQfQfQfQ"


@pytest.fixture
def red_hash():
    # red_source z domyślnymi parametrami (siatka 4x3)
    return "LKTKeL|vfQ|v{jn*fQn*e;f7fQf7"


@pytest.fixture
def black_source():
    img = np.zeros((16, 16, 4), dtype=np.uint8)
    img[..., 3] = 255
    return img


@pytest.fixture
def corner_source():
    """Czarne tło z białym kwadratem 4x4 w lewym górnym rogu."""
    img = np.zeros((16, 16, 4), dtype=np.uint8)
    img[..., 3] = 255
    img[:4, :4, :3] = 255
    return img


@pytest.fixture
def red_source():
    img = np.zeros((16, 16, 4), dtype=np.uint8)
    img[..., 0] = 255
    img[..., 3] = 255
    img[8:, :, 1] = 64
    return img


@pytest.fixture
def events():
    bus = EventBus()
    seen = []
    bus.subscribe("*", lambda topic, data: seen.append((topic, data)))
    return bus, seen


@pytest.fixture
def orch(small_config, events):
    bus, _ = events
    return Orchestrator(small_config, bus=bus)


@pytest.fixture
def session(orch):
    return orch.new_session()
