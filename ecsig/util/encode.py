"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Byte and hex conversions shared by the curve and key codecs, and a small
bytearray wrapper with fixed-width integer encoding.
"""

from ecsig import DecodingError, EncodingError


def intToBytes(i, length=None):
    """
    Encodes a non-negative integer big-endian.

    Args:
        i (int): The integer.
        length (int): optional. Zero-pad the result to exactly this many
            bytes. Without a length, the minimal encoding is used, which is a
            single zero byte for zero.

    Returns:
        bytearray: The encoded integer.

    Raises:
        EncodingError if i is negative or does not fit in length bytes.
    """
    if i < 0:
        raise EncodingError(f"cannot encode negative integer {i}")
    minLen = max((i.bit_length() + 7) // 8, 1)
    if length is None:
        length = minLen
    elif minLen > length and i != 0:
        raise EncodingError(f"integer needs {minLen} bytes, only {length} allowed")
    return bytearray(i.to_bytes(length, byteorder="big"))


def intFromBytes(b):
    """
    Decodes an unsigned big-endian integer.

    Args:
        b (bytes-like): The encoded integer. Empty input decodes to zero.

    Returns:
        int: The decoded integer.
    """
    return int.from_bytes(bytes(b), "big")


def hexToBytes(s):
    """
    Decode a hexadecimal string. Mixed case is accepted, as is surrounding
    whitespace.

    Args:
        s (str): The hex string.

    Returns:
        bytearray: The decoded bytes.

    Raises:
        DecodingError if s is not valid hexadecimal.
    """
    if not isinstance(s, str):
        raise DecodingError(f"expected a hex string, got {type(s).__name__}")
    try:
        return bytearray.fromhex(s.strip())
    except ValueError as e:
        raise DecodingError(f"invalid hex: {e}")


def decodeBA(b, copy=False):
    """
    Decode into a bytearray.

    Args:
        b (str, bytes-like, ByteArray, int, list(int)): The value to decode to
            a bytearray. Strings are interpreted as hexadecimal. Integers are
            minimally encoded to an unsigned integer.

    Returns:
        bytearray: The decoded bytes.
    """
    if isinstance(b, ByteArray):
        return bytearray(b.b) if copy else b.b
    if isinstance(b, bytearray):
        return bytearray(b) if copy else b
    if isinstance(b, bytes):
        return bytearray(b)
    if isinstance(b, int):
        return intToBytes(b)
    if isinstance(b, str):
        return hexToBytes(b)
    if hasattr(b, "__iter__"):
        return bytearray(b)
    raise TypeError("decodeBA: unknown type %s" % type(b))


class ByteArray:
    """
    ByteArray wraps a bytearray and decodes its comparison and concatenation
    arguments on the fly, so hex strings, ints and bytes all work as operands.
    An integer argument to the constructor is encoded big-endian in its
    shortest form. Pass `length` to zero-pad it to a fixed width instead.
    """

    def __init__(self, b=b"", copy=True, length=None):
        """
        Set copy to False to share memory with the passed bytearray or
        ByteArray. If the type of b is neither, copy has no effect.
        """
        if length is not None:
            if isinstance(b, int):
                self.b = intToBytes(b, length=length)
                return
            raw = decodeBA(b)
            if len(raw) > length:
                raise EncodingError(f"{len(raw)} bytes do not fit in {length}")
            self.b = bytearray(length - len(raw)) + raw
        else:
            self.b = decodeBA(b, copy=copy)

    def __eq__(self, a):
        try:
            return self.b == decodeBA(a)
        except Exception:
            return False

    def __ne__(self, a):
        return not self.__eq__(a)

    def __repr__(self):
        return "ByteArray(" + self.hex() + ")"

    def __len__(self):
        return len(self.b)

    def __bytes__(self):
        return bytes(self.b)

    def __add__(self, a):
        return ByteArray(self.b + decodeBA(a))

    def __iadd__(self, a):
        return self.__add__(a)

    def __getitem__(self, k):
        if isinstance(k, slice):
            return ByteArray(self.b[k.start : k.stop : k.step], copy=False)
        return self.b[k]

    def __hash__(self):
        """Enables ByteArray to be a dict key."""
        return hash(bytes(self.b))

    def hex(self):
        """
        A lowercase hexadecimal string representation of the bytes.

        Returns:
            str: The hex bytes.
        """
        return self.b.hex()

    def int(self):
        """The bytes as a big-endian unsigned integer."""
        return intFromBytes(self.b)

    def bytes(self):
        """The bytes as Python `bytes`."""
        return bytes(self.b)

    def iszero(self):
        """
        True if all bytes are zero.
        """
        return all(v == 0 for v in self.b)

    def zero(self):
        """
        Overwrite the bytes with zeros, e.g. to destroy private key material
        without waiting on the garbage collector.
        """
        for i in range(len(self.b)):
            self.b[i] = 0

    def copy(self):
        """A copy of the ByteArray."""
        return ByteArray(self.b)
