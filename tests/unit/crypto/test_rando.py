"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details
"""

import os

import pytest

from ecsig import RandomSourceError
from ecsig.crypto import rando


def test_readExactly(scriptedSource):
    assert rando.readExactly(scriptedSource(b"\x01\x02"), 2) == b"\x01\x02"
    # bytearrays are accepted and converted.
    b = rando.readExactly(scriptedSource(bytearray(4)), 4)
    assert b == bytes(4)
    assert isinstance(b, bytes)

    for chunk in (None, b"", b"\x01", b"\x01\x02\x03"):
        with pytest.raises(RandomSourceError):
            rando.readExactly(scriptedSource(chunk), 2)


def test_SystemRandom(monkeypatch):
    b = rando.systemRandom.read(32)
    assert len(b) == 32
    assert rando.systemRandom.read(32) != b

    def unsupportedUrandom(n):
        raise NotImplementedError

    def brokenUrandom(n):
        raise OSError("no entropy")

    monkeypatch.setattr(os, "urandom", brokenUrandom)
    with pytest.raises(RandomSourceError):
        rando.systemRandom.read(32)

    # Only OS errors are converted.
    monkeypatch.setattr(os, "urandom", unsupportedUrandom)
    with pytest.raises(NotImplementedError):
        rando.SystemRandom().read(32)
