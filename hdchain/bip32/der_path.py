#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""BIP32 derivation path.

A BIP32 derivation path can be represented as:

- "m/44'/60'/0'/0/0" string ("h" and "H" are accepted
  as hardening symbols too, e.g. "m/44h/60H/0'/0/0")
- sequence of integer indexes, hardened ones having bit 31 set
- a single integer index

The string grammar is strict: "m", optionally followed by
"/"-separated segments, each one a decimal number in 0..2^31-1
with an optional hardening symbol.
No blanks, signs, empty segments, or other separators are allowed.
"""

import re
from typing import List, Sequence, Tuple, Union

from hdchain.exceptions import InvalidPathSyntax

HARDENED = 0x80000000
MAX_DEPTH = 255

# default hardening symbol among the possible ones: "'", "h", "H"
_HARDENING = "'"

# at most 10 digits: enough for any uint31 value
_INDEX_STR = re.compile(r"([0-9]{1,10})(['hH]?)", re.ASCII)

DerPath = Union[str, Sequence[int], int]


def int_from_index_str(s: str) -> int:
    "Return the integer index of a path segment like \"44'\" or \"0\"."

    match = _INDEX_STR.fullmatch(s)
    if match is None:
        raise InvalidPathSyntax(f"invalid path segment: {s!r}")

    index = int(match.group(1))
    if index >= HARDENED:
        raise InvalidPathSyntax(f"index not in 0..2^31-1: {index}")
    return index + (HARDENED if match.group(2) else 0)


def str_from_index_int(i: int, hardening: str = _HARDENING) -> str:
    "Return the path segment string of an integer index."

    if hardening not in ("'", "h", "H"):
        raise InvalidPathSyntax(f"invalid hardening symbol: {hardening}")
    if not 0 <= i <= 0xFFFFFFFF:
        raise InvalidPathSyntax(f"invalid index: {i}")
    if i < HARDENED:
        return str(i)
    return str(i - HARDENED) + hardening


def _indexes_from_der_path_str(der_path: str) -> List[int]:

    steps = der_path.split("/")
    if steps[0] != "m":
        raise InvalidPathSyntax(f"path must start with 'm': {der_path!r}")
    if der_path == "m":
        return []
    return [int_from_index_str(s) for s in steps[1:]]


def indexes_from_der_path(der_path: DerPath) -> List[int]:
    "Return the list of integer indexes of the derivation path."

    if isinstance(der_path, str):
        indexes = _indexes_from_der_path_str(der_path)
    elif isinstance(der_path, int):
        indexes = [der_path]
    else:
        indexes = list(der_path)

    for i in indexes:
        if not isinstance(i, int) or not 0 <= i <= 0xFFFFFFFF:
            raise InvalidPathSyntax(f"invalid index: {i!r}")

    if len(indexes) > MAX_DEPTH:
        raise InvalidPathSyntax(f"depth greater than {MAX_DEPTH}: {len(indexes)}")
    return indexes


def segments_from_der_path(der_path: DerPath) -> List[Tuple[int, bool]]:
    "Return the (index, hardened) segments, index being without bit 31."

    return [(i & ~HARDENED, i >= HARDENED) for i in indexes_from_der_path(der_path)]


def str_from_der_path(der_path: DerPath, hardening: str = _HARDENING) -> str:
    "Return the canonical 'm/...' string of the derivation path."

    indexes = indexes_from_der_path(der_path)
    return "/".join(["m"] + [str_from_index_int(i, hardening) for i in indexes])
