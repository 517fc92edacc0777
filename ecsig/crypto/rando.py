"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Random byte sources for scalar and nonce generation. Any object with a
`read(n) -> bytes` method can be passed where a random source is expected.
"""

import os

from ecsig import RandomSourceError


def readExactly(source, n):
    """
    Read n bytes from the random source.

    Args:
        source (object): Anything with a `read(n)` method.
        n (int): The number of bytes wanted.

    Returns:
        bytes: Exactly n bytes.

    Raises:
        RandomSourceError if the source returns the wrong number of bytes.
            Errors raised by the source itself are not wrapped.
    """
    b = source.read(n)
    if b is None or len(b) != n:
        got = 0 if b is None else len(b)
        raise RandomSourceError(f"random source returned {got} of {n} bytes")
    return bytes(b)


class SystemRandom:
    """
    The operating system CSPRNG.
    """

    def read(self, n):
        """
        Args:
            n (int): The number of bytes to read.

        Returns:
            bytes: n bytes from os.urandom.
        """
        try:
            return os.urandom(n)
        except OSError as e:
            raise RandomSourceError(f"os.urandom failed: {e}")


systemRandom = SystemRandom()
