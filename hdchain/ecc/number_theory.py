#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Modular arithmetic over prime fields.

Only what is needed by curve point arithmetic:
modular inverse (Extended Euclidean Algorithm)
and square root modulo a prime p = 3 (mod 4).
"""

from typing import Tuple

from hdchain.exceptions import HDChainValueError
from hdchain.utils import hex_string


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > 0xFFFFFFFF else f"{i}"


def xgcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return (g, x, y) such that a*x + b*y = g = gcd(a, b).

    Iterative Extended Euclidean Algorithm.
    """

    x0, x1, y0, y1 = 0, 1, 1, 0
    while a != 0:
        q, b, a = b // a, a, b % a
        y0, y1 = y1, y0 - q * y1
        x0, x1 = x1, x0 - q * x1
    return b, x0, y0


def mod_inv(a: int, m: int) -> int:
    "Return the inverse of a (mod m); m does not have to be a prime."

    a %= m
    g, x, _ = xgcd(a, m)
    if g == 1:
        return x % m
    raise HDChainValueError(f"no inverse for {_fmt(a)} mod {_fmt(m)}")


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root of a (mod p).

    p must be a prime equal to 3 (mod 4), as for secp256k1:
    the root candidate is a^((p+1)/4).
    Note that p - r is also a root.
    """

    if p % 4 != 3:
        raise HDChainValueError(f"prime not equal to 3 mod 4: {_fmt(p)}")

    a %= p
    r = pow(a, (p >> 2) + 1, p)
    if r * r % p != a:
        raise HDChainValueError(f"no root for {_fmt(a)} mod {_fmt(p)}")
    return r
