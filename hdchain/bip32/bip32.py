#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 Hierarchical Deterministic Wallet functions.

A deterministic wallet is a hash-chain of private/public key pairs that
derives from a single root, which is the only element requiring backup.
Moreover, there are schemes where public keys can be calculated without
accessing private keys.

A hierarchical deterministic wallet is a tree of multiple hash-chains,
derived from a single root, allowing for selective sharing of keypair
chains.

Here, the HD wallet is implemented according to BIP32
https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki.

A BIP32 extended key is 78 bytes:

- [  : 4] version
- [ 4: 5] depth in the derivation path
- [ 5: 9] parent fingerprint
- [ 9:13] index
- [13:45] chain code
- [45:78] compressed pub_key or [0x00][prv_key]

Extended keys are immutable: every derivation returns a new BIP32KeyData.
"""

from dataclasses import dataclass
from typing import List, Tuple, Type, Union

from hdchain import base58
from hdchain.alias import BinaryData, Octets, Point, String
from hdchain.bip32.der_path import HARDENED, MAX_DEPTH, DerPath, indexes_from_der_path
from hdchain.ecc.curve import secp256k1
from hdchain.ecc.sec_point import bytes_from_point, point_from_octets
from hdchain.exceptions import (
    AlreadyPublic,
    DepthExceeded,
    HDChainValueError,
    InvalidChildKey,
    InvalidEncoding,
    InvalidMasterKey,
    InvalidParameter,
    PrivateKeyRequired,
)
from hdchain.hashes import hash160, hmac_sha512
from hdchain.network import (
    NETWORKS,
    XPRV_VERSIONS_ALL,
    XPUB_VERSIONS_ALL,
    network_from_xkeyversion,
)
from hdchain.utils import bytes_from_octets, bytesio_from_binarydata, hex_string

ec = secp256k1


_KEY_SIZE: List[Tuple[str, int]] = [
    ("version", 4),
    ("parent_fingerprint", 4),
    ("chain_code", 32),
    ("key", 33),
]
_REQUIRED_LENGTH = 78


@dataclass(frozen=True)
class BIP32KeyData:
    version: bytes
    depth: int
    parent_fingerprint: bytes
    # index is an int, not bytes, to avoid any byteorder ambiguity
    index: int
    chain_code: bytes
    key: bytes

    @property
    def is_private(self) -> bool:
        return self.key[0] == 0

    @property
    def is_hardened(self) -> bool:
        return self.index >= HARDENED

    @property
    def is_root(self) -> bool:
        return (
            self.depth == 0
            and self.index == 0
            and self.parent_fingerprint == b"\x00" * 4
        )

    @property
    def network(self) -> str:
        return network_from_xkeyversion(self.version)

    @property
    def prv_key_int(self) -> int:
        if not self.is_private:
            raise PrivateKeyRequired("not a private key")
        return int.from_bytes(self.key[1:], byteorder="big", signed=False)

    @property
    def pub_key_point(self) -> Point:
        if self.is_private:
            return ec.mult(self.prv_key_int)
        return point_from_octets(self.key, ec)

    @property
    def pub_key(self) -> bytes:
        "Return the compressed public key."
        if self.is_private:
            return bytes_from_point(self.pub_key_point, ec)
        return self.key

    @property
    def fingerprint(self) -> bytes:
        "Return the fingerprint used as parent fingerprint by the children."
        return hash160(self.pub_key)[:4]

    def __init__(
        self,
        version: Octets,
        depth: int,
        parent_fingerprint: Octets,
        index: int,
        chain_code: Octets,
        key: Octets,
        check_validity: bool = True,
    ) -> None:

        object.__setattr__(self, "version", bytes_from_octets(version))
        object.__setattr__(self, "depth", depth)
        object.__setattr__(
            self, "parent_fingerprint", bytes_from_octets(parent_fingerprint)
        )
        object.__setattr__(self, "index", index)
        object.__setattr__(self, "chain_code", bytes_from_octets(chain_code))
        object.__setattr__(self, "key", bytes_from_octets(key))

        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:

        for key, size in _KEY_SIZE:
            value = getattr(self, key)
            if len(value) != size:
                err_msg = f"invalid {key} length: "
                err_msg += f"{len(value)} bytes"
                err_msg += f" instead of {size}"
                raise InvalidEncoding(err_msg)

        if not 0 <= self.index <= 0xFFFFFFFF:
            raise InvalidEncoding(f"invalid index: {self.index}")

        if not 0 <= self.depth <= MAX_DEPTH:
            raise InvalidEncoding(f"invalid depth: {self.depth}")

        if self.depth == 0:
            if self.parent_fingerprint != b"\x00" * 4:
                err_msg = "zero depth with non-zero parent fingerprint: "
                err_msg += f"0x{self.parent_fingerprint.hex()}"
                raise InvalidEncoding(err_msg)
            if self.index != 0:
                raise InvalidEncoding(f"zero depth with non-zero index: {self.index}")

        if self.version in XPRV_VERSIONS_ALL:
            if self.key[0] != 0:
                err_msg = f"invalid private key prefix: 0x{self.key[:1].hex()}"
                raise InvalidEncoding(err_msg)
            q = int.from_bytes(self.key[1:], byteorder="big", signed=False)
            if not 0 < q < ec.n:
                raise InvalidEncoding(f"invalid private key not in 1..n-1: {hex(q)}")
        elif self.version in XPUB_VERSIONS_ALL:
            if self.key[0] not in (2, 3):
                err_msg = "invalid public key prefix not in (0x02, 0x03): "
                err_msg += f"0x{self.key[:1].hex()}"
                raise InvalidEncoding(err_msg)
            try:
                ec.y(int.from_bytes(self.key[1:], byteorder="big", signed=False))
            except HDChainValueError as e:
                raise InvalidEncoding(f"invalid public key: 0x{self.key.hex()}") from e
        else:
            err_msg = f"unknown extended key version: 0x{self.version.hex()}"
            raise InvalidEncoding(err_msg)

    def serialize(self, check_validity: bool = True) -> bytes:

        if check_validity:
            self.assert_valid()

        return b"".join(
            [
                self.version,
                self.depth.to_bytes(1, byteorder="big", signed=False),
                self.parent_fingerprint,
                self.index.to_bytes(4, byteorder="big", signed=False),
                self.chain_code,
                self.key,
            ]
        )

    def b58encode(self, check_validity: bool = True) -> str:
        data_binary = self.serialize(check_validity)
        return base58.b58encode(data_binary).decode("ascii")

    @classmethod
    def parse(
        cls: Type["BIP32KeyData"], xkey_bin: BinaryData, check_validity: bool = True
    ) -> "BIP32KeyData":
        "Return a BIP32KeyData by parsing 78 bytes from binary data."

        stream = bytesio_from_binarydata(xkey_bin)
        xkey_bin = stream.read(_REQUIRED_LENGTH)

        if len(xkey_bin) != _REQUIRED_LENGTH:
            err_msg = f"invalid decoded length: {len(xkey_bin)}"
            err_msg += f" instead of {_REQUIRED_LENGTH}"
            raise InvalidEncoding(err_msg)

        return cls(
            version=xkey_bin[0:4],
            depth=xkey_bin[4],
            parent_fingerprint=xkey_bin[5:9],
            index=int.from_bytes(xkey_bin[9:13], byteorder="big", signed=False),
            chain_code=xkey_bin[13:45],
            key=xkey_bin[45:78],
            check_validity=check_validity,
        )

    @classmethod
    def b58decode(
        cls: Type["BIP32KeyData"], xkey: String, check_validity: bool = True
    ) -> "BIP32KeyData":

        if isinstance(xkey, str):
            xkey = xkey.strip()

        xkey_bin = base58.b58decode(xkey, _REQUIRED_LENGTH)
        return cls.parse(xkey_bin, check_validity)


BIP32Key = Union[BIP32KeyData, String]


def _xkey_data(xkey: BIP32Key) -> BIP32KeyData:
    if isinstance(xkey, BIP32KeyData):
        return xkey
    return BIP32KeyData.b58decode(xkey)


def master_key_from_seed(
    seed: Octets, version: Octets = NETWORKS["mainnet"].bip32_prv
) -> BIP32KeyData:
    """Return BIP32 root master extended private key from seed.

    The seed must be 128 to 512 bits.
    """

    seed = bytes_from_octets(seed)
    bitlength = len(seed) * 8
    if not 128 <= bitlength <= 512:
        err_msg = f"invalid number of bits for seed: {bitlength} not in 128..512"
        raise InvalidParameter(err_msg)

    version = bytes_from_octets(version)
    if version not in XPRV_VERSIONS_ALL:
        raise InvalidParameter(f"not a private key version: 0x{version.hex()}")

    hmac_ = hmac_sha512(b"Bitcoin seed", seed)
    q = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    if not 0 < q < ec.n:
        raise InvalidMasterKey(f"invalid master key not in 1..n-1: '{hex_string(q)}'")

    return BIP32KeyData(
        version=version,
        depth=0,
        parent_fingerprint=b"\x00" * 4,
        index=0,
        chain_code=hmac_[32:],
        key=b"\x00" + hmac_[:32],
    )


def rootxprv_from_seed(
    seed: Octets, version: Octets = NETWORKS["mainnet"].bip32_prv
) -> str:
    """Return BIP32 root master extended private key from seed."""
    return master_key_from_seed(seed, version).b58encode()


def neuter(xkey: BIP32Key) -> BIP32KeyData:
    """Neutered Derivation (ND).

    Derivation of the extended public key corresponding to an extended
    private key ("neutered" as it removes the ability to sign).
    Neutering an extended public key raises AlreadyPublic.
    """

    xkey = _xkey_data(xkey)
    if not xkey.is_private:
        raise AlreadyPublic(f"not a private key: {xkey.b58encode()}")

    return BIP32KeyData(
        version=NETWORKS[xkey.network].bip32_pub,
        depth=xkey.depth,
        parent_fingerprint=xkey.parent_fingerprint,
        index=xkey.index,
        chain_code=xkey.chain_code,
        key=xkey.pub_key,
    )


def xpub_from_xprv(xprv: BIP32Key) -> str:
    """Neutered Derivation (ND), returning the base58 extended public key."""
    return neuter(xprv).b58encode()


def derive_child(
    parent: BIP32Key, index: int, hardened: bool = False
) -> BIP32KeyData:
    """Child Key Derivation (CKD).

    Private parent keys give private child keys (CKDpriv),
    public parent keys give public child keys (CKDpub).
    The index may already have bit 31 set for hardened derivation;
    otherwise hardened=True sets it.

    Raise InvalidChildKey if the derived key is invalid for this index:
    the BIP32 remedy is to proceed with the next index.
    """

    parent = _xkey_data(parent)

    if not 0 <= index <= 0xFFFFFFFF:
        raise InvalidParameter(f"invalid index: {index}")
    if hardened:
        index |= HARDENED
    if parent.depth >= MAX_DEPTH:
        raise DepthExceeded(f"parent depth already at {MAX_DEPTH}")

    index_bytes = index.to_bytes(4, byteorder="big", signed=False)
    parent_pub_key = parent.pub_key
    if parent.is_private:
        if index >= HARDENED:
            hmac_ = hmac_sha512(parent.chain_code, parent.key + index_bytes)
        else:
            hmac_ = hmac_sha512(parent.chain_code, parent_pub_key + index_bytes)
        offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
        if offset >= ec.n:
            raise InvalidChildKey(f"invalid child at index {index}: IL >= n")
        q = (parent.prv_key_int + offset) % ec.n
        if q == 0:
            raise InvalidChildKey(f"invalid child at index {index}: zero key")
        key = b"\x00" + q.to_bytes(32, byteorder="big", signed=False)
    else:
        if index >= HARDENED:
            err_msg = "invalid hardened derivation from public key"
            raise PrivateKeyRequired(err_msg)
        hmac_ = hmac_sha512(parent.chain_code, parent_pub_key + index_bytes)
        offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
        if offset >= ec.n:
            raise InvalidChildKey(f"invalid child at index {index}: IL >= n")
        Q = ec.add(parent.pub_key_point, ec.mult(offset))
        if Q[1] == 0:
            raise InvalidChildKey(f"invalid child at index {index}: infinity point")
        key = bytes_from_point(Q, ec)

    return BIP32KeyData(
        version=parent.version,
        depth=parent.depth + 1,
        parent_fingerprint=hash160(parent_pub_key)[:4],
        index=index,
        chain_code=hmac_[32:],
        key=key,
    )


def derive_child_skipping_invalid(
    parent: BIP32Key, index: int, hardened: bool = False
) -> BIP32KeyData:
    """Child Key Derivation, proceeding with the next index if invalid.

    The index field of the returned key tells the index actually used.
    """

    if hardened:
        index |= HARDENED
    upper = 0xFFFFFFFF if index >= HARDENED else HARDENED - 1
    while True:
        try:
            return derive_child(parent, index)
        except InvalidChildKey:
            if index == upper:
                raise
            index += 1


def derive(xkey: BIP32Key, der_path: DerPath) -> BIP32KeyData:
    """Derive a BIP32 key across a path spanning multiple depth levels.

    Valid DerPath examples:

    - string like "m/44'/60'/0'/0/0"
    - iterable integer indexes
    - one single integer index

    Any child derivation error aborts the whole derivation.
    """

    xkey = _xkey_data(xkey)
    indexes = indexes_from_der_path(der_path)

    final_depth = xkey.depth + len(indexes)
    if final_depth > MAX_DEPTH:
        raise DepthExceeded(f"final depth greater than {MAX_DEPTH}: {final_depth}")

    for index in indexes:
        xkey = derive_child(xkey, index)
    return xkey


def derive_from_account(
    account_xkey: BIP32Key,
    branch: int,
    address_index: int,
    branches_0_1_only: bool = True,
    max_index: int = 0xFFFF,
) -> BIP32KeyData:
    """Derive a key with normal derivation at the given branch and index.

    It also ensures that the account key is hardened,
    that the branch is a standard receive (0) or change (1),
    and that the index is not arbitrarily high.
    """

    account_xkey = _xkey_data(account_xkey)

    if not account_xkey.is_hardened:
        raise InvalidParameter("unhardened account/master key")

    if branch >= HARDENED:
        raise InvalidParameter("invalid private derivation at branch level")
    if branch > max_index:
        raise InvalidParameter(f"too high branch: {branch}")
    if branches_0_1_only and branch not in (0, 1):
        raise InvalidParameter(f"invalid branch: {branch} not in (0, 1)")

    if address_index >= HARDENED:
        raise InvalidParameter("invalid private derivation at address index level")
    if address_index > max_index:
        raise InvalidParameter(f"too high address index: {address_index}")

    return derive(account_xkey, [branch, address_index])


def crack_prv_key(parent_xpub: BIP32Key, child_xprv: BIP32Key) -> str:
    """Return the parent xprv from the parent xpub and a child xprv.

    This works for normal (non-hardened) child derivation only:
    it is the reason why account levels are hardened.
    """

    p = _xkey_data(parent_xpub)
    if p.is_private:
        err_msg = "extended parent key is not a public key: "
        err_msg += f"{p.b58encode()}"
        raise InvalidParameter(err_msg)

    c = _xkey_data(child_xprv)
    if not c.is_private:
        err_msg = "extended child key is not a private key: "
        err_msg += f"{c.b58encode()}"
        raise PrivateKeyRequired(err_msg)

    if c.depth != p.depth + 1:
        raise InvalidParameter("not a parent's child: wrong depths")

    if c.parent_fingerprint != p.fingerprint:
        raise InvalidParameter("not a parent's child: wrong parent fingerprint")

    if c.is_hardened:
        raise InvalidParameter("hardened child derivation")

    hmac_ = hmac_sha512(
        p.chain_code, p.key + c.index.to_bytes(4, byteorder="big", signed=False)
    )
    offset = int.from_bytes(hmac_[:32], byteorder="big", signed=False)
    parent_q = (c.prv_key_int - offset) % ec.n

    return BIP32KeyData(
        version=c.version,
        depth=p.depth,
        parent_fingerprint=p.parent_fingerprint,
        index=p.index,
        chain_code=p.chain_code,
        key=b"\x00" + parent_q.to_bytes(32, byteorder="big", signed=False),
    ).b58encode()
