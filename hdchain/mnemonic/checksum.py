#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP39 checksummed entropy from/to 11-bit word-list indexes.

* bits per word = bpw = 11
* **ENT** = raw entropy
* **CS** = checksum = **ENT** / 32, leftmost bits of SHA256(**ENT**)
* **MS** = words in the mnemonic sentence = (**ENT+CS**) / bpw

+-----+----+--------+----+
| ENT | CS | ENT+CS | MS |
+=====+====+========+====+
| 128 |  4 |    132 | 12 |
+-----+----+--------+----+
| 160 |  5 |    165 | 15 |
+-----+----+--------+----+
| 192 |  6 |    198 | 18 |
+-----+----+--------+----+
| 224 |  7 |    231 | 21 |
+-----+----+--------+----+
| 256 |  8 |    264 | 24 |
+-----+----+--------+----+
"""

from typing import List, Sequence, Tuple

from hdchain.alias import Octets
from hdchain.exceptions import InvalidParameter, InvalidWordCount
from hdchain.hashes import sha256
from hdchain.mnemonic.entropy import (
    BinStr,
    bin_str_from_bytes,
    bytes_entropy_from_bin_str,
    bytes_entropy_from_octets,
)

BITS_PER_WORD = 11
WORDLIST_SIZE = 1 << BITS_PER_WORD

# number of words -> (entropy bits, checksum bits)
BITS_FROM_WORD_COUNT = {
    12: (128, 4),
    15: (160, 5),
    18: (192, 6),
    21: (224, 7),
    24: (256, 8),
}


def compute_checksum(entropy: Octets) -> BinStr:
    """Return the BIP39 checksum of the input entropy.

    It is the leftmost len(entropy)*8/32 bits of SHA256(entropy),
    as binary 0/1 string.
    """

    entropy = bytes_entropy_from_octets(entropy)
    int_checksum = int.from_bytes(sha256(entropy), byteorder="big", signed=False)
    # pad with leading lost zeros
    checksum = bin(int_checksum)[2:].zfill(256)
    return checksum[: len(entropy) // 4]


def verify_checksum(entropy: Octets, checksum: BinStr) -> bool:
    "Return True if checksum is the BIP39 checksum of entropy."
    return compute_checksum(entropy) == checksum


def pack_indices(entropy: Octets, checksum: BinStr) -> List[int]:
    """Return the 11-bit word-list indexes of checksummed entropy.

    Entropy bits are followed by checksum bits,
    then split into groups of 11 bits, most significant first.
    """

    bin_str = bin_str_from_bytes(entropy)
    if len(checksum) != len(bin_str) // 32 or checksum.strip("01"):
        err_msg = f"invalid checksum bits: {checksum!r} "
        err_msg += f"for {len(bin_str)}-bit entropy"
        raise InvalidParameter(err_msg)

    cs_entropy = bin_str + checksum
    return [
        int(cs_entropy[i : i + BITS_PER_WORD], 2)
        for i in range(0, len(cs_entropy), BITS_PER_WORD)
    ]


def unpack_indices(indexes: Sequence[int]) -> Tuple[bytes, BinStr]:
    """Return (entropy, checksum) from the 11-bit word-list indexes.

    The checksum is not verified, see verify_checksum.
    """

    n_words = len(indexes)
    if n_words not in BITS_FROM_WORD_COUNT:
        err_msg = f"invalid number of words: {n_words} instead of "
        err_msg += f"{tuple(BITS_FROM_WORD_COUNT)}"
        raise InvalidWordCount(err_msg)

    for index in indexes:
        if not 0 <= index < WORDLIST_SIZE:
            raise InvalidParameter(f"index not in 0..{WORDLIST_SIZE - 1}: {index}")

    cs_entropy = "".join(bin(i)[2:].zfill(BITS_PER_WORD) for i in indexes)
    bits, _ = BITS_FROM_WORD_COUNT[n_words]
    return bytes_entropy_from_bin_str(cs_entropy[:bits]), cs_entropy[bits:]
