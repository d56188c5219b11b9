"""Pytest configuration and shared fixtures for trek tests."""

import logging
import math
import random

import pytest

from trek.logger import logger


# Canonical encoded polyline example
CANONICAL_PATH = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
CANONICAL_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


@pytest.fixture
def canonical_path():
    """Three-point path with a well-known polyline encoding."""
    return list(CANONICAL_PATH)


@pytest.fixture
def canonical_polyline():
    return CANONICAL_POLYLINE


@pytest.fixture
def loop_track():
    """A dense, slightly wobbly loop of 400 points, rounded to 5 decimals."""
    points = []
    for i in range(400):
        angle = 2 * math.pi * i / 399
        radius = 0.01 * (1 + 0.2 * math.sin(5 * angle))
        points.append(
            (round(37.77 + radius * math.sin(angle), 5), round(-122.45 + radius * math.cos(angle), 5))
        )
    return points


@pytest.fixture
def random_track():
    """A 300 point random walk, reproducible across runs."""
    rng = random.Random(1234)
    lat, lng = 51.5, -0.12
    points = []
    for _ in range(300):
        lat += rng.uniform(-0.0005, 0.0005)
        lng += rng.uniform(-0.0005, 0.0005)
        points.append((lat, lng))
    return points


@pytest.fixture
def rng():
    """Seeded random source for reproducible placements."""
    return random.Random(42)


@pytest.fixture(autouse=True)
def reset_log_level():
    """Restore the package logger level after each test.

    Tests that enable debug mode must not leak it into other tests.
    """
    yield
    logger.setLevel(logging.INFO)
    for handler in logger.handlers:
        handler.setLevel(logging.INFO)
