#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Public keys and Keccak-based (Ethereum-style) addresses.

The address is the last 20 bytes of the Keccak-256 hash
of the 64-byte x||y public key coordinates (uncompressed SEC encoding
without the 0x04 prefix).

Its display form is the EIP-55 mixed-case checksum encoding
https://eips.ethereum.org/EIPS/eip-55:
the lowercase hex address is hashed with Keccak-256 and each letter
is uppercased if the corresponding hex digit of the hash is >= 8.
"""

import re
from typing import NamedTuple, Union

from hdchain.alias import Octets, Point
from hdchain.bip32.bip32 import BIP32KeyData
from hdchain.ecc.curve import secp256k1
from hdchain.ecc.sec_point import bytes_from_point, point_from_octets
from hdchain.exceptions import InvalidEncoding, InvalidParameter, PrivateKeyRequired
from hdchain.hashes import keccak_256
from hdchain.utils import bytes_from_octets, strip_0x

ec = secp256k1

ADDRESS_SIZE = 20

PrvKey = Union[int, bytes, str, BIP32KeyData]
PubKey = Union[bytes, str, BIP32KeyData]

_HEX_ADDRESS = re.compile(r"[0-9a-fA-F]{40}", re.ASCII)


class PubKeyPair(NamedTuple):
    compressed: bytes
    uncompressed: bytes


def int_from_prv_key(prv_key: PrvKey) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer
    - 32 bytes or hex-string
    - private BIP32KeyData
    """

    if isinstance(prv_key, int):
        q = prv_key
    elif isinstance(prv_key, BIP32KeyData):
        if not prv_key.is_private:
            raise PrivateKeyRequired("not a private key: BIP32 public key")
        q = prv_key.prv_key_int
    else:
        try:
            q = int.from_bytes(bytes_from_octets(prv_key, ec.n_size), "big")
        except ValueError as e:
            raise InvalidParameter(f"not a private key: {prv_key!r}") from e

    if not 0 < q < ec.n:
        raise InvalidParameter(f"private key not in 1..n-1: {hex(q).upper()}")
    return q


def pub_keys_from_prv_key(prv_key: PrvKey) -> PubKeyPair:
    "Return the compressed and uncompressed SEC public keys."

    Q = ec.mult(int_from_prv_key(prv_key))
    return PubKeyPair(
        bytes_from_point(Q, ec, compressed=True),
        bytes_from_point(Q, ec, compressed=False),
    )


def _point_from_pub_key(pub_key: PubKey) -> Point:
    if isinstance(pub_key, BIP32KeyData):
        return pub_key.pub_key_point
    return point_from_octets(pub_key, ec)


def address_from_pub_key(pub_key: PubKey) -> bytes:
    """Return the 20-byte address of a public key.

    Compressed SEC keys are decompressed first;
    a BIP32KeyData (private or public) can be used too.
    """

    Q = _point_from_pub_key(pub_key)
    xy = bytes_from_point(Q, ec, compressed=False)[1:]
    return keccak_256(xy)[-ADDRESS_SIZE:]


def address_from_prv_key(prv_key: PrvKey) -> bytes:
    "Return the 20-byte address of a private key."
    Q = ec.mult(int_from_prv_key(prv_key))
    return address_from_pub_key(bytes_from_point(Q, ec))


def checksummed_hex(address: Octets) -> str:
    """Return the EIP-55 checksum-cased hex address, without '0x'.

    The input is the 20-byte address as bytes or hex-string
    (in any case, so that re-checksumming is idempotent).
    """

    lower = bytes_from_octets(address, ADDRESS_SIZE).hex()
    digest = keccak_256(lower.encode("ascii")).hex()
    return "".join(
        c.upper() if int(h, 16) >= 8 else c for c, h in zip(lower, digest)
    )


def eth_address(pub_key: PubKey) -> str:
    "Return the '0x' prefixed EIP-55 display address of a public key."
    return "0x" + checksummed_hex(address_from_pub_key(pub_key))


def address_from_checksummed_hex(text: str) -> bytes:
    """Return the 20-byte address from its hex representation.

    The '0x' prefix is optional.
    All-lowercase and all-uppercase addresses carry no checksum
    and are accepted as they are;
    mixed-case addresses must have the exact EIP-55 casing.
    """

    hex_str = strip_0x(text)
    if not _HEX_ADDRESS.fullmatch(hex_str):
        raise InvalidEncoding(f"not a 20-byte hex address: {text!r}")

    if hex_str not in (hex_str.lower(), hex_str.upper()):
        expected = checksummed_hex(hex_str)
        if hex_str != expected:
            err_msg = f"invalid checksum casing: {hex_str}; expected: {expected}"
            raise InvalidEncoding(err_msg)

    return bytes.fromhex(hex_str)


def is_checksummed(text: str) -> bool:
    "Return True if the input hex address has the exact EIP-55 casing."

    hex_str = strip_0x(text)
    if not _HEX_ADDRESS.fullmatch(hex_str):
        return False
    return hex_str == checksummed_hex(hex_str)
