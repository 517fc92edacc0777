"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details
"""

import random

import pytest

from ecsig.util import helpers


class SeededSource:
    """
    A deterministic random source for repeatable tests.
    """

    def __init__(self, seed=0):
        self.rng = random.Random(seed)
        self.reads = 0

    def read(self, n):
        self.reads += 1
        return bytes(self.rng.getrandbits(8) for _ in range(n))


class ScriptedSource:
    """
    A random source that hands out the given chunks in order, then raises
    IndexError when they run out.
    """

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, n):
        self.reads += 1
        return self.chunks.pop(0)


@pytest.fixture
def seededSource():
    def _seededSource(seed=0):
        return SeededSource(seed)

    return _seededSource


@pytest.fixture
def scriptedSource():
    def _scriptedSource(*chunks):
        return ScriptedSource(chunks)

    return _scriptedSource


@pytest.fixture(scope="module")
def prepareLogger(request):
    helpers.prepareLogging()
