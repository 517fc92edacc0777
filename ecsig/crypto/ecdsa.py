"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

The ECDSA signature protocol over a short-Weierstrass curve.

References:
  [SEC1] Elliptic Curve Cryptography, section 4.1
    https://www.secg.org/sec1-v2.pdf

  [NSA]: Suite B Implementer's Guide to FIPS 186-3
"""

from ecsig import CurveArithmeticError, DecodingError, InvalidKeyError
from ecsig.util import helpers
from ecsig.util.encode import ByteArray, decodeBA, intFromBytes

from .curve import Curve, Point, modInv
from .keys import (
    PUBKEY_COMPRESSED,
    PUBKEY_UNCOMPRESSED,
    PrivateKey,
    PublicKey,
    Signature,
)


log = helpers.getLogger("ECDSA")


def hashToInt(inHash):
    """
    hashToInt interprets the digest as a big-endian integer. The digest is
    used as-is: it is neither hashed again nor truncated to the bit length
    of the curve order.

    Args:
        inHash (bytes-like): The message digest.

    Returns:
        int: The digest value.
    """
    return intFromBytes(decodeBA(inHash))


class ECDSA:
    """
    ECDSA signs and verifies with a single curve. Every method is a pure
    function of its arguments and the curve, so one instance can be shared.
    """

    def __init__(self, params):
        """
        Args:
            params (CurveParams): The curve.
        """
        self.params = params
        self.curve = Curve(params)

    def generatePrivateKey(self, randomSource=None):
        """
        generatePrivateKey draws a random scalar in [1, N-1].

        Args:
            randomSource (object): optional. Anything with a `read(n)` method.
                Default is the system CSPRNG.

        Returns:
            PrivateKey: The new key.
        """
        return PrivateKey(self.params, self.curve.generateValidScalar(randomSource))

    def privateKeyIsValid(self, privKey):
        """
        privateKeyIsValid is True if the key belongs to this curve and its
        scalar is in [1, N-1]. Never raises.
        """
        try:
            if privKey.curve != self.params:
                return False
            return self.curve.isValidScalar(privKey.d)
        except AttributeError:
            return False

    def publicKeyIsValid(self, pubKey):
        """
        publicKeyIsValid is True if the key belongs to this curve, is not the
        point at infinity, has both coordinates in [0, P) and satisfies the
        curve equation. Never raises.
        """
        try:
            if pubKey.curve != self.params:
                return False
            pt = pubKey.point
            if pt.isAtInfinity():
                return False
            P = self.curve.P
            if not (0 <= pt.x < P and 0 <= pt.y < P):
                return False
            return self.curve.containsPoint(pt)
        except (AttributeError, TypeError):
            return False

    def publicKey(self, privKey):
        """
        publicKey derives the public key d*G.

        Args:
            privKey (PrivateKey): The private key.

        Returns:
            PublicKey: The corresponding public key.

        Raises:
            InvalidKeyError if the private key is invalid.
        """
        if not self.privateKeyIsValid(privKey):
            raise InvalidKeyError("invalid private key")
        return PublicKey(self.params, self.curve.scalarBaseMult(privKey.d))

    def sign(self, inHash, privKey, randomSource=None):
        """
        sign produces an ECDSA signature of the digest with a fresh random
        nonce for every attempt. See [SEC1] 4.1.3.

        Args:
            inHash (bytes-like): The message digest.
            privKey (PrivateKey): The signing key.
            randomSource (object): optional. Anything with a `read(n)` method.
                Default is the system CSPRNG.

        Returns:
            Signature: The signature.

        Raises:
            InvalidKeyError if the private key is invalid. Errors from the
                random source propagate unchanged.
        """
        if not self.privateKeyIsValid(privKey):
            raise InvalidKeyError("invalid private key")
        N = self.curve.N
        e = hashToInt(inHash)
        d = privKey.d
        while True:
            k = self.curve.generateValidScalar(randomSource)
            r = self.curve.scalarBaseMult(k).x % N
            if r == 0:
                log.debug("nonce produced r = 0, retrying")
                continue
            s = modInv(k, N) * (e + r * d) % N
            if s == 0:
                log.debug("nonce produced s = 0, retrying")
                continue
            return Signature(r, s)

    def verify(self, inHash, sig, pubKey):
        """
        verify checks the signature of the digest against the public key.
        See [NSA] 3.4.2.

        Args:
            inHash (bytes-like): The message digest.
            sig (Signature): The signature.
            pubKey (PublicKey): The public key.

        Returns:
            bool: True if the signature is valid.
        """
        N = self.curve.N
        r, s = sig.r, sig.s
        if not self.curve.isValidScalar(r) or not self.curve.isValidScalar(s):
            return False
        if not self.publicKeyIsValid(pubKey):
            log.debug("verification against an invalid public key")
            return False

        e = hashToInt(inHash)
        w = modInv(s, N)
        u1 = e * w % N
        u2 = r * w % N

        pt = self.curve.add(
            self.curve.scalarBaseMult(u1), self.curve.scalarMult(pubKey.point, u2)
        )
        # u1*G and u2*Q cancelling out is a failure, not an x coordinate of 0.
        if pt.isAtInfinity():
            return False
        return pt.x % N == r

    def compressPublicKey(self, pubKey):
        """
        compressPublicKey serializes a public key in the compressed format, a
        0x02 (even y) or 0x03 (odd y) byte followed by the x coordinate.

        Args:
            pubKey (PublicKey): The public key.

        Returns:
            ByteArray: coordinateWidth + 1 bytes.

        Raises:
            InvalidKeyError if the public key is invalid.
        """
        if not self.publicKeyIsValid(pubKey):
            raise InvalidKeyError("invalid public key")
        fmt = PUBKEY_COMPRESSED | (pubKey.y & 1)
        return ByteArray(fmt) + ByteArray(pubKey.x, length=self.params.coordinateWidth)

    def decompressPublicKey(self, b):
        """
        decompressPublicKey recovers the full public key from the compressed
        format by solving the curve equation for y.

        Args:
            b (bytes-like): coordinateWidth + 1 bytes.

        Returns:
            PublicKey: The public key.

        Raises:
            DecodingError if the length or format byte is wrong, or if no
                point on the curve has the encoded x.
        """
        b = decodeBA(b)
        w = self.params.coordinateWidth
        if len(b) != w + 1:
            raise DecodingError(f"expected {w + 1} compressed key bytes, got {len(b)}")
        fmt = b[0]
        if fmt & ~0x01 != PUBKEY_COMPRESSED:
            raise DecodingError(f"invalid magic in compressed pubkey: {fmt:#04x}")
        x = intFromBytes(b[1:])
        if x >= self.curve.P:
            raise DecodingError("pubkey X parameter is >= to P")
        try:
            even, odd = self.curve.computeY(x)
        except CurveArithmeticError:
            raise DecodingError("pubkey X parameter is not on the curve")
        y = odd if fmt & 0x01 else even
        if y & 1 != fmt & 0x01:
            raise DecodingError("ybit doesn't match oddness")
        return PublicKey(self.params, Point(x, y))

    def parsePublicKey(self, b):
        """
        parsePublicKey accepts the compressed format, the raw X || Y
        encoding, and the SEC1 uncompressed format with its 0x04 byte. The
        hybrid format is not supported. The decoded key must be valid.

        Args:
            b (bytes-like): The encoded key.

        Returns:
            PublicKey: The public key.

        Raises:
            DecodingError for an unknown length or format, or an invalid key.
        """
        b = decodeBA(b)
        w = self.params.coordinateWidth
        pkLen = len(b)
        if pkLen == w + 1:
            return self.decompressPublicKey(b)
        if pkLen == 2 * w:
            pubKey = PublicKey.fromBytes(self.params, b)
        elif pkLen == 2 * w + 1:
            if b[0] != PUBKEY_UNCOMPRESSED:
                raise DecodingError(f"invalid magic in pubkey: {b[0]:#04x}")
            pubKey = PublicKey.fromBytes(self.params, b[1:])
        else:
            raise DecodingError(f"invalid pub key length {pkLen}")
        if not self.publicKeyIsValid(pubKey):
            raise DecodingError(f"pubkey isn't on the {self.params.name} curve")
        return pubKey
