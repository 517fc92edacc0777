"""
Copyright (c) 2020, the ecsig developers
See LICENSE for details

Describe a curve that isn't built in and use it with the ECDSA engine. The
parameters here are brainpoolP256r1 from RFC 5639.
"""

import hashlib

from ecsig.crypto.curve import CurveParams, fromHex
from ecsig.crypto.ecdsa import ECDSA


brainpoolP256r1 = CurveParams(
    name="brainpoolP256r1",
    coordinateWidth=32,
    p=fromHex("A9FB57DBA1EEA9BC3E660A909D838D726E3BF623D52620282013481D1F6E5377"),
    a=fromHex("7D5A0975FC2C3057EEF67530417AFFE7FB8055C126DC5C6CE94A4B44F330B5D9"),
    b=fromHex("26DC5C6CE94A4B44F330B5D9BBD77CBF958416295CF7E1CE6BCCDC18FF8C07B6"),
    n=fromHex("A9FB57DBA1EEA9BC3E660A909D838D718C397AA3B561A6F7901E0E82974856A7"),
    gx=fromHex("8BD2AEB9CB7E57CB2C4B482FFC81B7AFB9DE27E1E3BD23C23A4453BD9ACE3262"),
    gy=fromHex("547EF835C3DAC4FD97F8461A14611DC9C27745132DED8E545C1D54C72F046997"),
)


def main():
    ecdsa = ECDSA(brainpoolP256r1)
    assert ecdsa.curve.containsPoint(brainpoolP256r1.generator)
    privKey = ecdsa.generatePrivateKey()
    pubKey = ecdsa.publicKey(privKey)
    digest = hashlib.sha256(b"foo").digest()
    sig = ecdsa.sign(digest, privKey)
    print("public key:", pubKey.hex())
    print("signature:", sig.hex(brainpoolP256r1))
    print("verified:", ecdsa.verify(digest, sig, pubKey))


if __name__ == "__main__":
    main()
