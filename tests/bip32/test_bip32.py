#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdchain.bip32.bip32` module."

import json
from os import path

import pytest

from hdchain import base58
from hdchain.bip32 import bip32
from hdchain.bip32.bip32 import (
    BIP32KeyData,
    crack_prv_key,
    derive,
    derive_child,
    derive_child_skipping_invalid,
    derive_from_account,
    master_key_from_seed,
    neuter,
    rootxprv_from_seed,
    xpub_from_xprv,
)
from hdchain.bip32.der_path import HARDENED
from hdchain.exceptions import (
    AlreadyPublic,
    DepthExceeded,
    InvalidChildKey,
    InvalidEncoding,
    InvalidMasterKey,
    InvalidParameter,
    PrivateKeyRequired,
)
from hdchain.hashes import hash160
from hdchain.network import NETWORKS

ROOT_XPRV = "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
ROOT_XPUB = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"

data_folder = path.join(path.dirname(__file__), "_data")


def test_bip32_vectors() -> None:
    """BIP32 test vector #1 and bips PR #905 vector

    https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki
    https://github.com/bitcoin/bips/pull/905
    """
    filename = path.join(data_folder, "bip32_test_vectors.json")
    with open(filename, "r", encoding="ascii") as file_:
        test_vectors = json.load(file_)

    for seed in test_vectors:
        mxprv = rootxprv_from_seed(seed)
        for der_path, xpub, xprv in test_vectors[seed]:
            assert xprv == derive(mxprv, der_path).b58encode()
            assert xpub == xpub_from_xprv(xprv)


def test_public_derivation() -> None:
    "CKDpub of the neutered parent is the neutered CKDpriv child."

    xprv = derive(ROOT_XPRV, "m/0'")
    xpub = neuter(xprv)
    for index in (0, 1, 2, 1000000000, HARDENED - 1):
        child_xpub = derive_child(xpub, index)
        assert child_xpub == neuter(derive_child(xprv, index))
        assert not child_xpub.is_private
        assert child_xpub.parent_fingerprint == xprv.fingerprint

    exp = "xpub6ASuArnXKPbfEwhqN6e3mwBcDTgzisQN1wXN9BJcM47sSikHjJf3UFHKkNAWbWMiGj7Wf5uMash7SyYq527Hqck2AxYysAA7xmALppuCkwQ"
    assert derive(xpub, "m/1").b58encode() == exp
    assert derive(xpub.b58encode(), [1]).b58encode() == exp

    err_msg = "invalid hardened derivation from public key"
    with pytest.raises(PrivateKeyRequired, match=err_msg):
        derive_child(xpub, 0, hardened=True)
    with pytest.raises(PrivateKeyRequired, match=err_msg):
        derive(xpub, "m/1/2'")


def test_derive_child() -> None:
    xprv = BIP32KeyData.b58decode(ROOT_XPRV)

    child = derive_child(xprv, 0, hardened=True)
    assert child == derive_child(xprv, HARDENED)
    assert child == derive_child(xprv, HARDENED, hardened=True)
    assert child == derive(xprv, "m/0h")
    assert child.depth == 1
    assert child.index == HARDENED
    assert child.is_hardened
    assert not child.is_root
    assert child.parent_fingerprint == hash160(xprv.pub_key)[:4]
    assert child.parent_fingerprint == bytes.fromhex("3442193e")

    # extended keys are immutable
    with pytest.raises(AttributeError):
        child.depth = 2  # type: ignore[misc]

    for index in (-1, 0xFFFFFFFF + 1):
        with pytest.raises(InvalidParameter, match="invalid index: "):
            derive_child(xprv, index)


def test_derive() -> None:
    xprv = BIP32KeyData.b58decode(ROOT_XPRV)
    assert derive(xprv, "m") == xprv
    assert derive(ROOT_XPRV, "m").b58encode() == ROOT_XPRV
    assert derive(ROOT_XPRV, []) == xprv

    # path as string, list of indexes, or single index
    key = derive(xprv, "m/0'/1")
    assert key == derive(xprv, [HARDENED, 1])
    assert key == derive(derive(xprv, HARDENED), 1)

    with pytest.raises(DepthExceeded, match="final depth greater than 255: "):
        derive(derive(xprv, 1), "m" + 255 * "/0")

    deepest = BIP32KeyData(
        version=xprv.version,
        depth=255,
        parent_fingerprint=b"\x01\x02\x03\x04",
        index=1,
        chain_code=xprv.chain_code,
        key=xprv.key,
    )
    with pytest.raises(DepthExceeded, match="parent depth already at 255"):
        derive_child(deepest, 0)
    with pytest.raises(DepthExceeded):
        derive(deepest, 0)

    err_msg = "invalid private key prefix: "
    temp = base58.b58decode(ROOT_XPRV)
    bad_xprv = base58.b58encode(temp[:45] + b"\x02" + temp[46:], 78)
    with pytest.raises(InvalidEncoding, match=err_msg):
        derive(bad_xprv, HARDENED)

    err_msg = r"invalid public key prefix not in \(0x02, 0x03\): "
    temp = base58.b58decode(ROOT_XPUB)
    bad_xpub = base58.b58encode(temp[:45] + b"\x00" + temp[46:], 78)
    with pytest.raises(InvalidEncoding, match=err_msg):
        derive(bad_xpub, 0)


def test_invalid_child(monkeypatch) -> None:
    xprv = BIP32KeyData.b58decode(ROOT_XPRV)
    valid_hmac = bip32.hmac_sha512

    # IL >= n
    monkeypatch.setattr(bip32, "hmac_sha512", lambda key, msg: b"\xff" * 64)
    with pytest.raises(InvalidChildKey, match="invalid child at index 0: IL >= n"):
        derive_child(xprv, 0)
    with pytest.raises(InvalidChildKey, match="invalid child at index 0: IL >= n"):
        derive_child(neuter(xprv), 0)
    # any child error aborts the whole derivation
    with pytest.raises(InvalidChildKey):
        derive(xprv, "m/0/1")

    # only index 5 is invalid
    def hmac_sha512(key: bytes, msg: bytes) -> bytes:
        if msg[-4:] == b"\x00\x00\x00\x05":
            return b"\xff" * 64
        return valid_hmac(key, msg)

    monkeypatch.setattr(bip32, "hmac_sha512", hmac_sha512)
    with pytest.raises(InvalidChildKey, match="invalid child at index 5: "):
        derive_child(xprv, 5)
    child = derive_child_skipping_invalid(xprv, 5)
    assert child.index == 6
    assert child == derive_child(xprv, 6)
    assert derive_child_skipping_invalid(xprv, 4).index == 4
    assert derive_child_skipping_invalid(xprv, 5, hardened=True).index == HARDENED + 5


def test_master_key() -> None:
    seed = "000102030405060708090a0b0c0d0e0f"
    xprv = master_key_from_seed(seed)
    assert xprv.b58encode() == ROOT_XPRV
    assert xprv.is_root
    assert xprv.is_private
    assert xprv.network == "mainnet"
    assert neuter(xprv).b58encode() == ROOT_XPUB

    tprv = master_key_from_seed(seed, NETWORKS["testnet"].bip32_prv)
    assert tprv.b58encode().startswith("tprv")
    assert tprv.network == "testnet"
    assert tprv.key == xprv.key
    assert tprv.chain_code == xprv.chain_code
    assert xpub_from_xprv(tprv).startswith("tpub")

    err_msg = "invalid number of bits for seed: "
    for size in (15, 65):
        with pytest.raises(InvalidParameter, match=err_msg):
            master_key_from_seed(b"\x00" * size)
    master_key_from_seed(b"\x00" * 16)
    master_key_from_seed(b"\x00" * 64)

    err_msg = "not a private key version: "
    with pytest.raises(InvalidParameter, match=err_msg):
        master_key_from_seed(seed, NETWORKS["mainnet"].bip32_pub)


def test_invalid_master_key(monkeypatch) -> None:
    monkeypatch.setattr(bip32, "hmac_sha512", lambda key, msg: b"\x00" * 64)
    with pytest.raises(InvalidMasterKey, match="invalid master key not in 1..n-1: "):
        master_key_from_seed(b"\x00" * 32)


def test_neuter() -> None:
    xpub = neuter(ROOT_XPRV)
    assert xpub.b58encode() == ROOT_XPUB
    assert xpub_from_xprv(BIP32KeyData.b58decode(ROOT_XPRV)) == ROOT_XPUB
    assert xpub.fingerprint == BIP32KeyData.b58decode(ROOT_XPRV).fingerprint

    with pytest.raises(AlreadyPublic, match="not a private key: "):
        neuter(ROOT_XPUB)
    with pytest.raises(PrivateKeyRequired):
        xpub.prv_key_int


def test_serialization() -> None:
    xkey_data = BIP32KeyData.b58decode(ROOT_XPRV)

    decoded_key = base58.b58decode(ROOT_XPRV, 78)
    assert xkey_data.version == decoded_key[:4]
    assert xkey_data.depth == decoded_key[4]
    assert xkey_data.parent_fingerprint == decoded_key[5:9]
    assert xkey_data.index == int.from_bytes(decoded_key[9:13], "big", signed=False)
    assert xkey_data.chain_code == decoded_key[13:45]
    assert xkey_data.key == decoded_key[45:]

    assert xkey_data.serialize() == decoded_key
    assert BIP32KeyData.parse(decoded_key) == xkey_data
    assert BIP32KeyData.b58decode("  " + ROOT_XPRV + "\n") == xkey_data
    assert BIP32KeyData.b58decode(ROOT_XPRV.encode("ascii")) == xkey_data

    # trailing data after the 78 bytes is ignored by parse
    assert BIP32KeyData.parse(decoded_key + b"\x00") == xkey_data
    with pytest.raises(InvalidEncoding, match="invalid decoded length: "):
        BIP32KeyData.parse(decoded_key[:-1])

    # corrupted checksum
    last = "j" if ROOT_XPRV[-1] != "j" else "k"
    with pytest.raises(InvalidEncoding, match="invalid checksum: "):
        BIP32KeyData.b58decode(ROOT_XPRV[:-1] + last)

    # not a 78-byte payload
    with pytest.raises(InvalidEncoding):
        BIP32KeyData.b58decode(base58.b58encode(decoded_key[:-1]))


def test_assert_valid() -> None:
    xkey = BIP32KeyData.b58decode(ROOT_XPRV)
    fields = {
        "version": xkey.version,
        "depth": xkey.depth,
        "parent_fingerprint": xkey.parent_fingerprint,
        "index": xkey.index,
        "chain_code": xkey.chain_code,
        "key": xkey.key,
    }
    assert BIP32KeyData(**fields) == xkey

    test_vectors = [
        ("version", xkey.version[:-1], "invalid version length: "),
        ("version", "deadbeef", "unknown extended key version: "),
        ("depth", -1, "invalid depth: "),
        ("depth", 256, "invalid depth: "),
        ("parent_fingerprint", "deadbeef", "zero depth with non-zero parent"),
        ("parent_fingerprint", b"\x00" * 3, "invalid parent_fingerprint length: "),
        ("index", 1, "zero depth with non-zero index: "),
        ("index", -1, "invalid index: "),
        ("index", 0xFFFFFFFF + 1, "invalid index: "),
        ("chain_code", xkey.chain_code[:-1], "invalid chain_code length: "),
        ("key", xkey.key[:-1], "invalid key length: "),
        ("key", b"\x01" + xkey.key[1:], "invalid private key prefix: "),
        ("key", b"\x00" * 33, "invalid private key not in 1..n-1: "),
    ]
    for key, value, err_msg in test_vectors:
        with pytest.raises(InvalidEncoding, match=err_msg):
            BIP32KeyData(**{**fields, key: value})
        # validity check can be postponed
        xkey_data = BIP32KeyData(**{**fields, key: value}, check_validity=False)
        with pytest.raises(InvalidEncoding, match=err_msg):
            xkey_data.b58encode()

    xpub = BIP32KeyData.b58decode(ROOT_XPUB)
    err_msg = "invalid public key: "
    with pytest.raises(InvalidEncoding, match=err_msg):
        # x-coordinate not in 0..p-1
        BIP32KeyData(xpub.version, 0, b"\x00" * 4, 0, xpub.chain_code, "02" + "ff" * 32)


def test_derive_from_account() -> None:

    seed = "bfc4cbaad0ff131aa97fa30a48d09ae7df914bcc083af1e07793cd0a7c61a03f65d622848209ad3366a419f4718a80ec9037df107d8d12c19b83202de00a40ad"
    rmxprv = rootxprv_from_seed(seed)

    der_path = "m/44h/0h"
    mxpub = xpub_from_xprv(derive(rmxprv, der_path))

    test_vectors = [
        [0, 0],
        [0, 1],
        [0, 2],
        [1, 0],
        [1, 1],
        [1, 2],
    ]

    for branch, index in test_vectors:
        full_path = der_path + f"/{branch}/{index}"
        pub_key = derive(rmxprv, full_path).pub_key
        assert pub_key == derive_from_account(mxpub, branch, index).key

    assert derive_from_account(mxpub, 2, 0, branches_0_1_only=False).depth == 4

    err_msg = "invalid private derivation at branch level"
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 0x80000000, 0, True)

    err_msg = "too high branch: "
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 0xFFFF + 1, 0)

    err_msg = "invalid branch: "
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 2, 0)

    err_msg = "invalid private derivation at address index level"
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 0, 0x80000000)

    err_msg = "too high address index: "
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 0, 0xFFFF + 1)

    der_path = "m/44h/0"
    mxpub = xpub_from_xprv(derive(rmxprv, der_path))
    err_msg = "unhardened account/master key"
    with pytest.raises(InvalidParameter, match=err_msg):
        derive_from_account(mxpub, 0, 0)


def test_crack() -> None:
    parent_xpub = "xpub6BabMgRo8rKHfpAb8waRM5vj2AneD4kDMsJhm7jpBDHSJvrFAjHJHU5hM43YgsuJVUVHWacAcTsgnyRptfMdMP8b28LYfqGocGdKCFjhQMV"
    child_xprv = "xprv9xkG88dGyiurKbVbPH1kjdYrA8poBBBXa53RKuRGJXyruuoJUDd8e4m6poiz7rV8Z4NoM5AJNcPHN6aj8wRFt5CWvF8VPfQCrDUcLU5tcTm"
    parent_xprv = crack_prv_key(parent_xpub, child_xprv)
    assert xpub_from_xprv(parent_xprv) == parent_xpub
    # same check with BIP32KeyData
    parent_xprv = crack_prv_key(
        BIP32KeyData.b58decode(parent_xpub), BIP32KeyData.b58decode(child_xprv)
    )
    assert xpub_from_xprv(parent_xprv) == parent_xpub

    err_msg = "extended parent key is not a public key: "
    with pytest.raises(InvalidParameter, match=err_msg):
        crack_prv_key(parent_xprv, child_xprv)

    err_msg = "extended child key is not a private key: "
    with pytest.raises(PrivateKeyRequired, match=err_msg):
        crack_prv_key(parent_xpub, parent_xpub)

    child_xpub = xpub_from_xprv(child_xprv)
    with pytest.raises(InvalidParameter, match="not a parent's child: wrong depths"):
        crack_prv_key(child_xpub, child_xprv)

    child0_xprv = derive(parent_xprv, 0)
    grandchild_xprv = derive(child0_xprv, 0)
    err_msg = "not a parent's child: wrong parent fingerprint"
    with pytest.raises(InvalidParameter, match=err_msg):
        crack_prv_key(child_xpub, grandchild_xprv)

    hardened_child_xprv = derive(parent_xprv, 0x80000000)
    with pytest.raises(InvalidParameter, match="hardened child derivation"):
        crack_prv_key(parent_xpub, hardened_child_xprv)
