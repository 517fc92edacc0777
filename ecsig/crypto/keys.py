"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Key and signature value types and their fixed-width byte and hex codecs.

Private keys and both signature halves are always zero-padded to the curve's
coordinate width, so every encoding of a given curve has a single length.
"""

from ecsig import DecodingError
from ecsig.util.encode import ByteArray, decodeBA, hexToBytes, intFromBytes


PUBKEY_COMPRESSED = 0x02  # 0x02 | y_bit + x coord
PUBKEY_UNCOMPRESSED = 0x04  # 0x04 + x coord + y coord


class PrivateKey:
    """
    PrivateKey wraps the secret scalar d. Validity against the curve order is
    checked by the ECDSA engine, not here.
    """

    __slots__ = ("curve", "d")

    def __init__(self, curve, d):
        """
        Args:
            curve (CurveParams): The curve the key belongs to.
            d (int): The secret scalar.
        """
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "d", d)

    def __setattr__(self, k, v):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @staticmethod
    def fromBytes(curve, b):
        """
        Decode a big-endian private key. Inputs shorter than the coordinate
        width are accepted, so unpadded encodings still parse.

        Args:
            curve (CurveParams): The curve the key belongs to.
            b (bytes-like): At most coordinateWidth bytes.

        Returns:
            PrivateKey: The key.

        Raises:
            DecodingError if b is longer than the coordinate width.
        """
        b = decodeBA(b)
        if len(b) > curve.coordinateWidth:
            raise DecodingError(
                f"private key is {len(b)} bytes, max {curve.coordinateWidth}"
            )
        return PrivateKey(curve, intFromBytes(b))

    @staticmethod
    def fromHex(curve, hx):
        return PrivateKey.fromBytes(curve, hexToBytes(hx))

    def serialize(self):
        """
        serialize encodes the scalar big-endian, zero-padded to the coordinate
        width.

        Returns:
            ByteArray: coordinateWidth bytes.
        """
        return ByteArray(self.d, length=self.curve.coordinateWidth)

    def hex(self):
        return self.serialize().hex()

    def __eq__(self, other):
        if not isinstance(other, PrivateKey):
            return False
        return self.curve == other.curve and self.d == other.d

    def __hash__(self):
        return hash((self.curve, self.d))

    def __repr__(self):
        # Keep the secret out of logs and tracebacks.
        return f"PrivateKey({self.curve.name})"


class PublicKey:
    """
    PublicKey wraps a curve point. Since this accepts an arbitrary point, it
    allows creation of public keys that are not on the curve. Use
    ECDSA.publicKeyIsValid before trusting one.
    """

    __slots__ = ("curve", "point")

    def __init__(self, curve, point):
        """
        Args:
            curve (CurveParams): The curve the key belongs to.
            point (Point): The public point.
        """
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "point", point)

    def __setattr__(self, k, v):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def x(self):
        return self.point.x

    @property
    def y(self):
        return self.point.y

    @staticmethod
    def fromBytes(curve, b):
        """
        Decode the raw uncompressed X || Y encoding. The point is not
        validated.

        Args:
            curve (CurveParams): The curve the key belongs to.
            b (bytes-like): 2 * coordinateWidth bytes.

        Returns:
            PublicKey: The key.
        """
        return PublicKey(curve, curve.decodePoint(b))

    @staticmethod
    def fromHex(curve, hx):
        return PublicKey.fromBytes(curve, hexToBytes(hx))

    def serialize(self):
        """
        serialize returns the raw uncompressed X || Y encoding.

        Returns:
            ByteArray: 2 * coordinateWidth bytes.
        """
        return self.curve.encodePoint(self.point)

    def serializeUncompressed(self):
        """
        serializeUncompressed returns the SEC1 uncompressed form, the raw
        encoding behind a 0x04 format byte.

        Returns:
            ByteArray: 2 * coordinateWidth + 1 bytes.
        """
        return ByteArray(PUBKEY_UNCOMPRESSED) + self.serialize()

    def hex(self):
        return self.serialize().hex()

    def __eq__(self, other):
        """
        __eq__ compares this PublicKey instance to the one passed, returning
        true if both are for the same curve and have the same point.
        """
        if not isinstance(other, PublicKey):
            return False
        return self.curve == other.curve and self.point == other.point

    def __hash__(self):
        return hash((self.curve, self.point))

    def __repr__(self):
        return f"PublicKey({self.curve.name}, {self.point!r})"


class Signature:
    """
    The Signature class represents an ECDSA-algorithm signature. The encoding
    is r || s, each zero-padded to the curve's coordinate width.
    """

    __slots__ = ("r", "s")

    def __init__(self, r, s):
        object.__setattr__(self, "r", r)
        object.__setattr__(self, "s", s)

    def __setattr__(self, k, v):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def serialize(self, curve):
        """
        Args:
            curve (CurveParams): Supplies the coordinate width.

        Returns:
            ByteArray: 2 * coordinateWidth bytes.
        """
        w = curve.coordinateWidth
        return ByteArray(self.r, length=w) + ByteArray(self.s, length=w)

    @staticmethod
    def fromBytes(curve, b):
        """
        Parse the r || s encoding. Range checks on r and s happen during
        verification.

        Args:
            curve (CurveParams): Supplies the coordinate width.
            b (bytes-like): 2 * coordinateWidth bytes.

        Returns:
            Signature: The signature.

        Raises:
            DecodingError if the length is wrong.
        """
        b = decodeBA(b)
        w = curve.coordinateWidth
        if len(b) != 2 * w:
            raise DecodingError(f"expected {2 * w} signature bytes, got {len(b)}")
        return Signature(intFromBytes(b[:w]), intFromBytes(b[w:]))

    def hex(self, curve):
        return self.serialize(curve).hex()

    @staticmethod
    def fromHex(curve, hx):
        return Signature.fromBytes(curve, hexToBytes(hx))

    def __eq__(self, other):
        if not isinstance(other, Signature):
            return False
        return self.r == other.r and self.s == other.s

    def __hash__(self):
        return hash((self.r, self.s))

    def __repr__(self):
        return f"Signature({self.r:#x}, {self.s:#x})"