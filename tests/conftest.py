"""Shared fixtures for runedit tests"""

from io import BytesIO

import pytest
from PIL import Image

from runedit.models.run import PERSONAL_BEST, Run, Segment, Time


@pytest.fixture
def sample_run() -> Run:
    """Two segments with a PB, best segments and a small history.

    Attempt 1 has a segment time for "Start" that beats its best segment.
    Attempt 2 skipped the "Start" split, so its "End" time covers both
    segments and beats their sum of best.
    """
    return Run(
        game_name="Game",
        category_name="Any%",
        attempt_count=2,
        segments=[
            Segment(
                name="Start",
                comparisons={PERSONAL_BEST: Time(real_time=12.0)},
                best_segment_time=Time(real_time=10.0),
                segment_history={1: Time(real_time=8.0), 2: Time()},
            ),
            Segment(
                name="End",
                comparisons={PERSONAL_BEST: Time(real_time=25.0)},
                best_segment_time=Time(real_time=10.0),
                segment_history={1: Time(real_time=12.0), 2: Time(real_time=15.0)},
            ),
        ],
    )


def encode_image(fmt: str) -> bytes:
    """Encode a tiny solid image in the given Pillow format"""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    return encode_image


@pytest.fixture
def png_bytes() -> bytes:
    return encode_image("PNG")
