import pytest
from PIL import Image


@pytest.fixture
def make_image():
    """Write a solid-colour image to path and return the path as a string."""

    def _make(path, size=(40, 30), mode="RGB", color=(200, 50, 50)):
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path)
        return str(path)

    return _make


@pytest.fixture
def image_size():
    def _size(path):
        with Image.open(path) as img:
            return img.size

    return _size
