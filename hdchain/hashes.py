#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Hash based helper functions.

RIPEMD160 and Keccak-256 come from pycryptodome:
with OpenSSL 3.x hashlib ripemd160 is usable only if the legacy
provider is loaded, while hashlib.sha3_256 is the NIST FIPS-202 variant,
whose padding differs from the original Keccak used by Ethereum.
"""

import hashlib
import hmac

from Crypto.Hash import RIPEMD160, keccak

from hdchain.alias import Octets
from hdchain.utils import bytes_from_octets


def ripemd160(octets: Octets) -> bytes:
    """Return the RIPEMD160(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return RIPEMD160.new(octets).digest()


def sha256(octets: Octets) -> bytes:
    """Return the SHA256(*) of the input octet sequence."""
    octets = bytes_from_octets(octets)
    return hashlib.sha256(octets).digest()


def hash160(octets: Octets) -> bytes:
    """Return the HASH160=RIPEMD160(SHA256) of the input octet sequence."""
    return ripemd160(sha256(octets))


def hash256(octets: Octets) -> bytes:
    """Return the SHA256(SHA256(*)) of the input octet sequence."""
    return sha256(sha256(octets))


def keccak_256(octets: Octets) -> bytes:
    """Return the Keccak-256(*) of the input octet sequence.

    This is the original Keccak submission (Ethereum flavor),
    not the standardized SHA3-256.
    """
    octets = bytes_from_octets(octets)
    return keccak.new(data=octets, digest_bits=256).digest()


def hmac_sha512(key: bytes, msg: bytes) -> bytes:
    "Return the 64 bytes HMAC-SHA512 of msg keyed with key."
    return hmac.new(key, msg, "sha512").digest()
