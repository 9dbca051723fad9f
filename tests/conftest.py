"""
Shared fixtures: landmark factories for faces and hands.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from reaction_mirror.core.types import FaceIndex, HandIndex, Landmark
from reaction_mirror.modules.utils.config import Config

FACE_MESH_SIZE = 478   # FaceMesh with refined landmarks
HAND_SIZE = 21


def create_mock_face(upper=(0.5, 0.6), lower=(0.5, 0.6),
                     left=(0.45, 0.6), right=(0.55, 0.6), size=FACE_MESH_SIZE):
    """Face landmark set with the mouth points placed as given.

    Any of the four mouth points may be None to leave that landmark absent.
    """
    face = [Landmark(0.5, 0.5)] * size
    points = {
        FaceIndex.UPPER_INNER_LIP: upper,
        FaceIndex.LOWER_INNER_LIP: lower,
        FaceIndex.MOUTH_LEFT: left,
        FaceIndex.MOUTH_RIGHT: right,
    }
    for index, point in points.items():
        if index < size:
            face[index] = Landmark(*point) if point is not None else None
    return face


def create_mock_hand(base=(0.3, 0.8), tip=(0.6, 0.8), size=HAND_SIZE):
    """Hand landmark set with index base and fingertip as given.

    The default finger points horizontally to the right (not raised).
    """
    hand = [Landmark(0.3, 0.9)] * size
    if HandIndex.INDEX_MCP < size:
        hand[HandIndex.INDEX_MCP] = Landmark(*base) if base is not None else None
    if HandIndex.INDEX_TIP < size:
        hand[HandIndex.INDEX_TIP] = Landmark(*tip) if tip is not None else None
    return hand


@pytest.fixture
def face_factory():
    return create_mock_face


@pytest.fixture
def hand_factory():
    return create_mock_hand


@pytest.fixture(autouse=True)
def reset_config():
    """Config is a process-wide singleton; isolate every test."""
    Config.reset()
    yield
    Config.reset()
