"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Sign the SHA-256 digest of a message with a fixed private key, print the
compressed public key and signature, then verify the signature.
"""

import hashlib

from ecsig.crypto.curve import secp256k1
from ecsig.crypto.ecdsa import ECDSA
from ecsig.crypto.keys import PrivateKey


# Never use a fixed key outside of an example.
PRIVATE_KEY_HEX = "18e14a7b6a307f426a94f8114701e7c8e774e7f9a47e2c2035db29a206321725"


def main():
    ecdsa = ECDSA(secp256k1)
    privKey = PrivateKey.fromHex(secp256k1, PRIVATE_KEY_HEX)
    pubKey = ecdsa.publicKey(privKey)
    print("compressed public key:", ecdsa.compressPublicKey(pubKey).hex())

    digest = hashlib.sha256(b"foo").digest()
    sig = ecdsa.sign(digest, privKey)
    print("signature:", sig.hex(secp256k1))
    print("verified:", ecdsa.verify(digest, sig, pubKey))


if __name__ == "__main__":
    main()
