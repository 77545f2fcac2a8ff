#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Entropy generation and conversion functions.

Entropy is handled as bytes; its binary 0/1 string representation
is used for the bit-level packing of BIP39 checksummed entropy.

Leading zeros in binary 0/1 string or bytes entropy
are never considered redundant padding.
"""

import secrets

from hdchain.alias import Octets
from hdchain.exceptions import EntropyUnavailable, InvalidParameter
from hdchain.utils import bytes_from_octets

ALLOWED_BITS = 128, 160, 192, 224, 256

# binary 0/1 string, most significant bit first
BinStr = str


def _check_bits(n_bits: int) -> None:
    if n_bits not in ALLOWED_BITS:
        err_msg = f"invalid number of bits: {n_bits} instead of {ALLOWED_BITS}"
        raise InvalidParameter(err_msg)


def generate(bits: int = 128) -> bytes:
    """Return fresh entropy from the system CSPRNG.

    bits must be 128, 160, 192, 224, or 256.
    A failure of the operating system random source
    is reported as EntropyUnavailable.
    """

    _check_bits(bits)
    try:
        return secrets.token_bytes(bits // 8)
    except OSError as e:
        raise EntropyUnavailable(f"system random source failure: {e}") from e


def bytes_entropy_from_octets(entropy: Octets) -> bytes:
    "Return bytes entropy from bytes or hex-string, checking its size."

    entropy = bytes_from_octets(entropy)
    _check_bits(len(entropy) * 8)
    return entropy


def bin_str_from_bytes(entropy: Octets) -> BinStr:
    """Return the binary 0/1 string of the input bytes entropy.

    Input entropy can be expressed as hex-string or bytes;
    it is never padded: its bit size must be an allowed one.
    """

    entropy = bytes_entropy_from_octets(entropy)
    int_entropy = int.from_bytes(entropy, byteorder="big", signed=False)
    return bin(int_entropy)[2:].zfill(len(entropy) * 8)


def bytes_entropy_from_bin_str(bin_str_entropy: BinStr) -> bytes:
    "Return bytes entropy from its binary 0/1 string representation."

    if bin_str_entropy.strip("01"):
        raise InvalidParameter(f"not a binary 0/1 string: {bin_str_entropy!r}")
    n_bits = len(bin_str_entropy)
    _check_bits(n_bits)
    int_entropy = int(bin_str_entropy, 2)
    return int_entropy.to_bytes(n_bits // 8, byteorder="big", signed=False)
