"""Pytest configuration and fixtures for kid3 tests."""

import subprocess
import pytest
from kid3.builder import Kid3Builder
from kid3.dataclasses import Kid3Config


@pytest.fixture
def builder():
    """Create a builder for the default kid3-cli binary."""
    return Kid3Builder()


@pytest.fixture
def mock_kid3_config():
    """Create kid3 configuration pointing at a fake binary."""
    return Kid3Config(
        binary='/opt/kid3/bin/kid3-cli',
        encoding='utf-8',
    )


@pytest.fixture
def completed_process():
    """Factory for fake subprocess.run results."""
    def _make(stdout=b'', stderr=b'', returncode=0):
        return subprocess.CompletedProcess(
            args='', returncode=returncode, stdout=stdout, stderr=stderr
        )
    return _make


@pytest.fixture
def sample_tag_frame_output():
    """Sample kid3-cli output of `get 'all' 12` for a file with both tags."""
    return (
        "File: MPEG 1 Layer 3 192 kbps 44100 Hz Joint Stereo 3:25\n"
        "Tag 1: ID3v1.1\n"
        "  Title         Old Name\n"
        "  Artist        Someone Else\n"
        "  Track Number  3\n"
        "Tag 2: ID3v2.3.0\n"
        "  Title         Song Name\n"
        "  Artist        Someone\n"
        "  Album         An Album\n"
        "  Comment       two  spaces inside\n"
    )


@pytest.fixture
def sample_tag1_only_output():
    """Sample kid3-cli output for a file with only an ID3v1 tag."""
    return (
        "File: MPEG 1 Layer 3 128 kbps 44100 Hz Stereo 4:02\n"
        "Tag 1: ID3v1.1\n"
        "  Title         Lonely Tag\n"
        "  Artist        Nobody\n"
    )


@pytest.fixture
def sample_directory_listing():
    """Sample kid3-cli output of `ls`."""
    return (
        "  12 Song A.mp3\n"
        ">*-2 Song B.flac\n"
        "  -- untagged.ogg\n"
        "  1- only v1.mp3\n"
    )
