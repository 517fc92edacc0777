"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details
"""


class ECSigError(Exception):
    pass


class InvalidKeyError(ECSigError):
    """
    A private or public key failed validation where the operation requires a
    valid key.
    """

    pass


class CurveArithmeticError(ECSigError, ArithmeticError):
    """
    A modular inverse or square root that the group law guarantees could not
    be computed. This indicates bad curve parameters or a point that was never
    validated, and the operation should be abandoned rather than retried.
    """

    pass


class EncodingError(ECSigError):
    """
    A value cannot be represented in the requested encoding.
    """

    pass


class DecodingError(ECSigError, ValueError):
    """
    Malformed input bytes or hex: bad length, unknown prefix byte, or an X
    coordinate with no matching Y on the curve.
    """

    pass


class RandomSourceError(ECSigError):
    """
    The entropy provider failed or returned fewer bytes than requested.
    """

    pass
