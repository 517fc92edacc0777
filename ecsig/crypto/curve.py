"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Pure Python short-Weierstrass curve arithmetic over prime fields,
y² = x³ + a·x + b (mod p).

References:
  [SEC1] Elliptic Curve Cryptography
    https://www.secg.org/sec1-v2.pdf

  [SEC2] Recommended Elliptic Curve Domain Parameters
    https://www.secg.org/sec2-v2.pdf

  [GECC]: Guide to Elliptic Curve Cryptography (Hankerson, Menezes, Vanstone)

All group operations are performed in affine coordinates on Python integers,
so every addition and doubling costs one modular inversion. None of this is
constant time.
"""

from ecsig import CurveArithmeticError, DecodingError, ECSigError, EncodingError
from ecsig.util.encode import ByteArray, decodeBA, intFromBytes

from . import rando


def fromHex(hx):
    return int(hx, 16)


def egcd(a, b):
    """
    Calculate the extended Euclidean algorithm. ax + by = gcd(a,b)

    Args:
        a (int): An integer.
        b (int): Another integer.

    Returns:
        int: Greatest common denominator.
        int: x coefficient of Bezout's identity.
        int: y coefficient of Bezout's identity.
    """
    x0, x1, y0, y1 = 1, 0, 0, 1
    while b != 0:
        q, a, b = a // b, b, a % b
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def modInv(a, m):
    """
    Modular inverse of a.

    Args:
        a (int): An integer. Negative values are reduced first.
        m (int): The modulus.

    Returns:
        int: The inverse, in the range [0, m).

    Raises:
        CurveArithmeticError if a and m are not coprime.
    """
    g, x, _ = egcd(a % m, m)
    if g != 1:
        raise CurveArithmeticError(f"{a} has no inverse modulo {m}")
    return x % m


class Point:
    """
    An affine curve point. Points are immutable values, and every group
    operation returns a new one.
    """

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, k, v):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def isAtInfinity(self):
        return False

    def __eq__(self, other):
        if not isinstance(other, Point) or other.isAtInfinity():
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Point({self.x:#x}, {self.y:#x})"


class PointAtInfinity(Point):
    """
    The group identity. It has no affine coordinates, so reading x or y raises
    AttributeError. Use the INFINITY singleton rather than creating more.
    """

    __slots__ = ()

    def __init__(self):
        pass

    def isAtInfinity(self):
        return True

    def __eq__(self, other):
        return isinstance(other, Point) and other.isAtInfinity()

    def __hash__(self):
        return hash(PointAtInfinity)

    def __repr__(self):
        return "INFINITY"


INFINITY = PointAtInfinity()


class CurveParams:
    """
    CurveParams describes a short-Weierstrass curve: the field prime p, the
    coefficients a and b, the generator and its order n, and the byte width of
    an encoded coordinate. The parameters are not checked for consistency.
    """

    __slots__ = ("name", "coordinateWidth", "p", "a", "b", "n", "generator")

    def __init__(self, name, coordinateWidth, p, a, b, n, gx, gy):
        for k, v in (
            ("name", name),
            ("coordinateWidth", coordinateWidth),
            ("p", p),
            ("a", a % p),
            ("b", b % p),
            ("n", n),
            ("generator", Point(gx, gy)),
        ):
            object.__setattr__(self, k, v)

    def __setattr__(self, k, v):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _key(self):
        g = self.generator
        return (self.coordinateWidth, self.p, self.a, self.b, self.n, g.x, g.y)

    def __eq__(self, other):
        return isinstance(other, CurveParams) and self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"CurveParams({self.name})"

    def encodePoint(self, pt):
        """
        encodePoint serializes an affine point as X || Y, each coordinate
        big-endian and zero-padded to coordinateWidth bytes.

        Args:
            pt (Point): The point.

        Returns:
            ByteArray: 2 * coordinateWidth bytes.

        Raises:
            EncodingError for the point at infinity, or for a coordinate that
                does not fit in coordinateWidth bytes.
        """
        if pt.isAtInfinity():
            raise EncodingError("the point at infinity has no encoding")
        w = self.coordinateWidth
        return ByteArray(pt.x, length=w) + ByteArray(pt.y, length=w)

    def decodePoint(self, b):
        """
        decodePoint parses the X || Y encoding produced by encodePoint. The
        result is not checked against the curve equation. Use
        Curve.containsPoint for that.

        Args:
            b (bytes-like): 2 * coordinateWidth bytes.

        Returns:
            Point: The decoded point.

        Raises:
            DecodingError if the length is wrong.
        """
        b = decodeBA(b)
        w = self.coordinateWidth
        if len(b) != 2 * w:
            raise DecodingError(f"expected {2 * w} point bytes, got {len(b)}")
        return Point(intFromBytes(b[:w]), intFromBytes(b[w:]))


class Curve:
    """
    Curve implements the group law and scalar sanitation for one set of
    CurveParams. It holds no state besides the parameters.
    """

    def __init__(self, params):
        self.params = params
        self.P = params.p
        self.N = params.n
        self.A = params.a
        self.B = params.b
        self.G = params.generator

    def isValidScalar(self, s):
        """
        isValidScalar is True if s can serve as a private key or nonce, i.e.
        0 < s < N.
        """
        if not isinstance(s, int) or isinstance(s, bool):
            return False
        return 0 < s < self.N

    def containsPoint(self, pt):
        """
        containsPoint returns True if pt satisfies the curve equation. The
        point at infinity, and anything that is not a point, returns False.
        """
        try:
            if pt.isAtInfinity():
                return False
            x, y = pt.x, pt.y
            # y² = x³ + ax + b
            return (y * y - (x * x * x + self.A * x + self.B)) % self.P == 0
        except (AttributeError, TypeError):
            return False

    def generateValidScalar(self, randomSource=None):
        """
        generateValidScalar draws coordinateWidth random bytes at a time until
        their big-endian value is a valid scalar. Errors from the source are
        not caught, so a failing source aborts the loop.

        Args:
            randomSource (object): optional. Anything with a `read(n)` method.
                Default is the system CSPRNG.

        Returns:
            int: A scalar k with 0 < k < N.
        """
        source = randomSource if randomSource is not None else rando.systemRandom
        width = self.params.coordinateWidth
        while True:
            k = intFromBytes(rando.readExactly(source, width))
            if self.isValidScalar(k):
                return k

    def add(self, p1, p2):
        """
        add returns the sum p1 + p2.
        """
        # A point at infinity is the identity according to the group law for
        # elliptic curve cryptography.  Thus, ∞ + P = P and P + ∞ = P.
        if p1.isAtInfinity():
            return p2
        if p2.isAtInfinity():
            return p1

        P = self.P
        x1, y1, x2, y2 = p1.x, p1.y, p2.x, p2.y

        # When the x coordinates are the same for two points on the curve, the
        # y coordinates either must be the same, in which case it is point
        # doubling, or they are opposite and the result is the point at
        # infinity per the group law for elliptic curve cryptography.
        if (x1 - x2) % P == 0:
            if (y1 + y2) % P == 0:
                return INFINITY
            return self.double(p1)

        # λ = (y2 - y1) / (x2 - x1)
        lam = (y2 - y1) * modInv(x2 - x1, P) % P
        x3 = (lam * lam - x1 - x2) % P
        y3 = (lam * (x1 - x3) - y1) % P
        return Point(x3, y3)

    def double(self, pt):
        """
        double returns 2 * pt using the tangent line.
        """
        # Doubling a point at infinity is still infinity, and a point with
        # y = 0 has order 2.
        if pt.isAtInfinity() or pt.y % self.P == 0:
            return INFINITY

        P = self.P
        x, y = pt.x, pt.y
        # λ = (3x² + a) / 2y
        lam = (3 * x * x + self.A) * modInv(2 * y, P) % P
        x3 = (lam * lam - 2 * x) % P
        y3 = (lam * (x - x3) - y) % P
        return Point(x3, y3)

    def negate(self, pt):
        """
        negate returns -pt, the reflection over the x axis.
        """
        if pt.isAtInfinity():
            return INFINITY
        return Point(pt.x % self.P, -pt.y % self.P)

    def scalarMult(self, pt, k):
        """
        scalarMult returns k * pt by left-to-right double-and-add. k is not
        reduced modulo N and can be any non-negative integer.

        Raises:
            CurveArithmeticError if k is negative.
        """
        if k < 0:
            raise CurveArithmeticError(f"negative scalar {k}")
        q = INFINITY
        for i in range(k.bit_length() - 1, -1, -1):
            q = self.double(q)
            if (k >> i) & 1:
                q = self.add(q, pt)
        return q

    def scalarBaseMult(self, k):
        """
        scalarBaseMult returns k*G where G is the base point of the group.
        """
        return self.scalarMult(self.G, k)

    def sqrtMod(self, v):
        """
        sqrtMod returns a square root of v modulo P. Which of the two roots is
        returned is unspecified.

        For P = 3 mod 4, which holds for all of the named curves, the root is
        v^((P+1)/4). Other primes fall back to Tonelli-Shanks ([GECC] 3.2).

        Raises:
            CurveArithmeticError if v is not a quadratic residue.
        """
        P = self.P
        v %= P
        if v == 0:
            return 0
        # Euler's criterion.
        if pow(v, (P - 1) // 2, P) != 1:
            raise CurveArithmeticError("value is not a square modulo P")
        if P % 4 == 3:
            return pow(v, (P + 1) // 4, P)

        # P - 1 = q * 2^s with q odd.
        q, s = P - 1, 0
        while q % 2 == 0:
            q //= 2
            s += 1
        z = 2
        while pow(z, (P - 1) // 2, P) != P - 1:
            z += 1
        m, c, t, r = s, pow(z, q, P), pow(v, q, P), pow(v, (q + 1) // 2, P)
        while t != 1:
            i, t2 = 0, t
            while t2 != 1:
                t2 = t2 * t2 % P
                i += 1
            b = pow(c, 1 << (m - i - 1), P)
            m, c = i, b * b % P
            t = t * c % P
            r = r * b % P
        return r

    def computeY(self, x):
        """
        computeY solves the curve equation for y.

        Args:
            x (int): The x coordinate.

        Returns:
            int: The even root.
            int: The odd root. Equal to the even root when y = 0.

        Raises:
            CurveArithmeticError if no point on the curve has this x.
        """
        P = self.P
        y = self.sqrtMod(x * x * x + self.A * x + self.B)
        if y % 2 == 0:
            return y, (P - y) % P
        return (P - y) % P, y


# Named curve parameters from [SEC2].

secp256r1 = CurveParams(
    name="secp256r1",
    coordinateWidth=32,
    p=fromHex("FFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF"),
    a=fromHex("FFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC"),
    b=fromHex("5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B"),
    n=fromHex("FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551"),
    gx=fromHex("6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296"),
    gy=fromHex("4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5"),
)

secp256k1 = CurveParams(
    name="secp256k1",
    coordinateWidth=32,
    p=fromHex("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F"),
    a=0,
    b=7,
    n=fromHex("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141"),
    gx=fromHex("79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798"),
    gy=fromHex("483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8"),
)

secp384r1 = CurveParams(
    name="secp384r1",
    coordinateWidth=48,
    p=fromHex(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFE"
        "FFFFFFFF0000000000000000FFFFFFFF"
    ),
    a=fromHex(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFE"
        "FFFFFFFF0000000000000000FFFFFFFC"
    ),
    b=fromHex(
        "B3312FA7E23EE7E4988E056BE3F82D19181D9C6EFE8141120314088F5013875A"
        "C656398D8A2ED19D2A85C8EDD3EC2AEF"
    ),
    n=fromHex(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF"
        "581A0DB248B0A77AECEC196ACCC52973"
    ),
    gx=fromHex(
        "AA87CA22BE8B05378EB1C71EF320AD746E1D3B628BA79B9859F741E082542A38"
        "5502F25DBF55296C3A545E3872760AB7"
    ),
    gy=fromHex(
        "3617DE4A96262C6F5D9E98BF9292DC29F8F41DBD289A147CE9DA3113B5F0B8C0"
        "0A60B1CE1D7E819D7A431D7C90EA0E5F"
    ),
)

_namedCurves = {
    "secp256r1": secp256r1,
    "p256": secp256r1,
    "prime256v1": secp256r1,
    "secp256k1": secp256k1,
    "secp384r1": secp384r1,
    "p384": secp384r1,
}


def curveNames():
    """
    The canonical names of the supported curves.

    Returns:
        list(str): Curve names.
    """
    return sorted({params.name for params in _namedCurves.values()})


def getCurve(name):
    """
    Look up named curve parameters. Case, dashes and underscores are ignored,
    so "P-256" finds secp256r1.

    Args:
        name (str): The curve name or an alias.

    Returns:
        CurveParams: The curve parameters.

    Raises:
        ECSigError if the curve is unknown.
    """
    key = name.lower().replace("-", "").replace("_", "")
    if key not in _namedCurves:
        raise ECSigError(f"unknown curve {name!r}")
    return _namedCurves[key]
