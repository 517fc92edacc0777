"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

A demonstration of the full signing flow. A fresh key pair is generated on the
configured curve, the public key is compressed and decompressed again, and the
SHA-256 digest of the configured message is signed and verified.
"""

import hashlib
import sys

from ecsig import ECSigError
from ecsig.crypto.ecdsa import ECDSA
from ecsig.util import helpers

from . import config


log = helpers.getLogger("CLI")


def run(cfg, out=None):
    """
    Run the demonstration, printing each step.

    Args:
        cfg (EcsigConfig): The settings.
        out (file): optional. Where to print. Default is sys.stdout.

    Returns:
        bool: True if the signature verified.

    Raises:
        ECSigError if the decompressed public key doesn't match the original.
    """
    out = out if out is not None else sys.stdout

    def show(k, v):
        print(f"{k}: {v}", file=out)

    params = cfg.params
    ecdsa = ECDSA(params)
    show("curve", params.name)

    privKey = ecdsa.generatePrivateKey()
    pubKey = ecdsa.publicKey(privKey)
    show("private key", privKey.hex())
    show("public key", pubKey.hex())

    compressed = ecdsa.compressPublicKey(pubKey)
    show("compressed public key", compressed.hex())
    decompressed = ecdsa.decompressPublicKey(compressed)
    show("decompressed public key", decompressed.hex())
    if decompressed != pubKey:
        raise ECSigError("decompressed public key doesn't match")

    digest = hashlib.sha256(cfg.message.encode()).digest()
    log.debug(f"signing {len(digest)}-byte digest of {cfg.message!r}")
    sig = ecdsa.sign(digest, privKey)
    show("signature", sig.hex(params))

    ok = ecdsa.verify(digest, sig, pubKey)
    show("signature verified", ok)
    return ok


def main(argv=None):
    """
    The ecsig entry point.

    Args:
        argv (list(str)): optional. Command-line arguments. Default is
            sys.argv[1:].

    Returns:
        int: The exit code. 0 for a verified signature, 1 for a failed flow
            and 2 for bad settings.
    """
    try:
        cfg = config.load(argv)
    except ECSigError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 2
    helpers.prepareLogging(cfg.logFile, logLvl=cfg.logLevel, lvlMap=cfg.moduleLevels)
    try:
        ok = run(cfg)
    except ECSigError as e:
        log.debug(helpers.formatTraceback(e))
        log.error(f"signing flow failed: {e}")
        return 1
    if not ok:
        log.error("signature failed to verify")
        return 1
    return 0
