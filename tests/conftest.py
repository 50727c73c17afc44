"""
Shared fixtures for the Photool test suite.
"""

import asyncio
import logging
import sys
from pathlib import Path

import numpy as np
import pytest

# Make the project root (photool package and cli.py) importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from photool.editor import CollectingNotifier, PhotoEditor
from photool.processing import PixelBuffer
from photool.utils.logging import CONSOLE_HANDLER_NAME


def make_buffer(width: int, height: int, seed: int = 0) -> PixelBuffer:
    """Deterministic noisy RGBA test image."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    return PixelBuffer.from_array(pixels)


class SleepRecorder:
    """Sleep strategy that records requested delays and only yields once."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)
        await asyncio.sleep(0)


@pytest.fixture
def make_image():
    return make_buffer


@pytest.fixture
def image():
    return make_buffer(40, 30)


@pytest.fixture
def square_image():
    return make_buffer(400, 400, seed=1)


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def sleeper():
    return SleepRecorder()


@pytest.fixture
def editor(notifier, sleeper):
    """Editor with the processing delay routed through a recording sleep."""
    editor = PhotoEditor(notifier=notifier, sleep=sleeper, debounce_delay=0.01)
    yield editor
    editor.close()


@pytest.fixture
def loaded_editor(editor, image):
    editor.load(image)
    return editor


@pytest.fixture(autouse=True)
def _drop_console_handlers():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            root.removeHandler(handler)
