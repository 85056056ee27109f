from pathlib import Path

import pytest
from PIL import Image

from tests.helpers import gradient_image


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    # Keep a developer's own ~/.config/imgr/config.json out of the tests
    monkeypatch.delenv('IMGR_CONFIG', raising=False)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))


@pytest.fixture
def make_image(tmp_path):
    def _make(name, size=(64, 48), mode='RGB', color='red', fmt=None):
        path = tmp_path / name
        image = Image.new(mode, size, color=color)
        image.save(path, format=fmt)
        return path
    return _make


@pytest.fixture
def make_gradient(tmp_path):
    def _make(name, size=(64, 48), mode='RGB', fmt=None):
        path = tmp_path / name
        gradient_image(size[0], size[1], mode).save(path, format=fmt)
        return path
    return _make


@pytest.fixture
def out_dir(tmp_path) -> Path:
    path = tmp_path / 'out'
    path.mkdir()
    return path
