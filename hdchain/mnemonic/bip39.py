#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP39 entropy / mnemonic / seed functions.

https://github.com/bitcoin/bips/blob/master/bip-0039.mediawiki.

Checksummed entropy is converted from/to mnemonic sentence
(see hdchain.mnemonic.checksum for the bit layout);
the seed is derived from the mnemonic sentence
and an optional passphrase using PBKDF2-HMAC-SHA512.
"""

import unicodedata
from hashlib import pbkdf2_hmac
from typing import Optional

from hdchain.alias import Octets
from hdchain.bip32.bip32 import rootxprv_from_seed
from hdchain.exceptions import ChecksumMismatch, InvalidMnemonic, InvalidWordCount
from hdchain.mnemonic.checksum import (
    BITS_FROM_WORD_COUNT,
    compute_checksum,
    pack_indices,
    unpack_indices,
)
from hdchain.mnemonic.entropy import bytes_entropy_from_octets, generate
from hdchain.mnemonic.wordlist import (
    Mnemonic,
    indices_to_words,
    normalize_mnemonic,
    words_to_indices,
)
from hdchain.network import network_from_name

PBKDF2_ROUNDS = 2048
SEED_SIZE = 64


def mnemonic_from_entropy(entropy: Optional[Octets] = None) -> Mnemonic:
    """Convert input entropy to BIP39 checksummed mnemonic sentence.

    Input entropy can be expressed as bytes or hex-string;
    it must be 128, 160, 192, 224, or 256 bits.
    If not provided, 128 bits of fresh entropy are used.
    """

    if entropy is None or entropy == "":
        entropy = generate(128)
    entropy = bytes_entropy_from_octets(entropy)
    indexes = pack_indices(entropy, compute_checksum(entropy))
    return indices_to_words(indexes)


def validate(mnemonic: Mnemonic) -> bytes:
    """Return the entropy of a valid BIP39 mnemonic sentence.

    The mnemonic is normalized first; then the number of words,
    the words themselves, and the checksum are verified,
    in this order.
    """

    words = normalize_mnemonic(mnemonic).split()
    if len(words) not in BITS_FROM_WORD_COUNT:
        err_msg = f"invalid number of words: {len(words)} instead of "
        err_msg += f"{tuple(BITS_FROM_WORD_COUNT)}"
        raise InvalidWordCount(err_msg)

    indexes = words_to_indices(" ".join(words))
    entropy, checksum = unpack_indices(indexes)
    expected = compute_checksum(entropy)
    if checksum != expected:
        err_msg = f"invalid checksum: {checksum}; expected: {expected}"
        raise ChecksumMismatch(err_msg)
    return entropy


def is_valid(mnemonic: Mnemonic) -> bool:
    "Return True if the input is a valid BIP39 mnemonic sentence."

    try:
        validate(mnemonic)
    except InvalidMnemonic:
        return False
    return True


def entropy_from_mnemonic(mnemonic: Mnemonic) -> bytes:
    "Return the entropy from the BIP39 checksummed mnemonic sentence."
    return validate(mnemonic)


def seed_from_mnemonic(
    mnemonic: Mnemonic, passphrase: str = "", verify_checksum: bool = True
) -> bytes:
    """Return the 64-byte seed from the BIP39 mnemonic sentence.

    Mnemonic and passphrase are NFKD normalized;
    the mnemonic checksum verification can be skipped if needed.
    """

    mnemonic = normalize_mnemonic(mnemonic)
    if verify_checksum:
        validate(mnemonic)

    password = mnemonic.encode("utf-8")
    salt = ("mnemonic" + unicodedata.normalize("NFKD", passphrase)).encode("utf-8")
    return pbkdf2_hmac("sha512", password, salt, PBKDF2_ROUNDS, SEED_SIZE)


def mxprv_from_mnemonic(
    mnemonic: Mnemonic,
    passphrase: str = "",
    network: str = "mainnet",
    verify_checksum: bool = True,
) -> str:
    "Return BIP32 root master extended private key from BIP39 mnemonic."

    seed = seed_from_mnemonic(mnemonic, passphrase, verify_checksum)
    version = network_from_name(network).bip32_prv
    return rootxprv_from_seed(seed, version)
