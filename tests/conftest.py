"""Shared test fixtures."""

import io
from types import SimpleNamespace

import numpy as np
import pytest
from PIL import Image

from picpersona.models import ImageFeatures

SKIN = (200, 150, 120)
WHITE = (255, 255, 255)


class FixedRandom:
    """Random source that never triggers the variety override."""

    def __init__(self, value: float = 0.99):
        self.value = value

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[0]


class FakeQuery:
    def __init__(self, store, table):
        self.store = store
        self.table = table
        self.action = None
        self.payload = None

    def insert(self, row):
        self.action, self.payload = "insert", row
        return self

    def select(self, columns):
        self.action, self.payload = "select", columns
        return self

    def execute(self):
        if self.store.error:
            return SimpleNamespace(data=None, error=SimpleNamespace(message=self.store.error))
        if self.action == "insert":
            self.store.rows.setdefault(self.table, []).append(self.payload)
            return SimpleNamespace(data=[self.payload], error=None)
        return SimpleNamespace(data=list(self.store.rows.get(self.table, [])), error=None)


class FakeSupabase:
    """Just enough of the supabase client for table().insert/select().execute()."""

    def __init__(self, error: str | None = None):
        self.rows: dict[str, list] = {}
        self.error = error

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_store():
    return FakeSupabase()


def make_features(**overrides) -> ImageFeatures:
    """A detected-face feature record; override any field by name."""
    values = dict(
        brightness=140,
        contrast=35,
        colorfulness=15,
        dominant_color="neutral",
        face_detected=True,
        image_quality="medium",
        aspect_ratio=1.0,
        face_confidence=0.6,
        edge_detection=8000,
    )
    values.update(overrides)
    return ImageFeatures(**values)


def make_canvas(color=WHITE, size: int = 224) -> np.ndarray:
    return np.full((size, size, 3), color, dtype=np.uint8)


def make_portrait_pixels() -> np.ndarray:
    """
    White canvas with a centered 95x95 skin-coloured square: about 18% skin,
    left-right symmetric and smooth down the middle, so it reads as a face.
    """
    pixels = make_canvas()
    pixels[64:159, 64:159] = SKIN
    return pixels


def encode_image(pixels: np.ndarray, format: str) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format=format)
    return buf.getvalue()


def encode_png(pixels: np.ndarray) -> bytes:
    return encode_image(pixels, "PNG")
