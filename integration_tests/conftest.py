"""Fixtures for tests that run the real kid3-cli."""

import shutil
import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: runs the real kid3-cli binary")


@pytest.fixture
def kid3_binary():
    """Path to kid3-cli, skipping the test when it is not installed."""
    binary = shutil.which('kid3-cli')
    if binary is None:
        pytest.skip("kid3-cli is not installed")
    return binary


@pytest.fixture
def music_dir(tmp_path):
    """Directory with a few (empty) audio files for listing."""
    directory = tmp_path / "music"
    directory.mkdir()
    for name in ("01 First.mp3", "02 Second.mp3", "03 Third.mp3"):
        (directory / name).write_bytes(b"")
    return directory
