#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdchain.ecc.number_theory` module."

import pytest

from hdchain.ecc.number_theory import mod_inv, mod_sqrt, xgcd
from hdchain.exceptions import HDChainValueError

primes = [
    2,
    3,
    5,
    7,
    11,
    13,
    17,
    19,
    23,
    29,
    31,
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
]


def test_xgcd() -> None:
    for a, b in ((240, 46), (17, 5), (0, 7)):
        g, x, y = xgcd(a, b)
        assert a * x + b * y == g


def test_mod_inv_prime() -> None:
    for p in primes:
        for a in range(1, min(p, 500)):
            inv = mod_inv(a, p)
            assert a * inv % p == 1

    err_msg = "no inverse for "
    with pytest.raises(HDChainValueError, match=err_msg):
        mod_inv(0, 7)
    with pytest.raises(HDChainValueError, match=err_msg):
        mod_inv(6, 9)


def test_mod_sqrt() -> None:
    for p in primes:
        if p % 4 != 3:
            continue
        for a in range(min(p, 500)):
            try:
                root = mod_sqrt(a, p)
            except HDChainValueError:
                continue
            assert root * root % p == a % p
            assert (p - root) * (p - root) % p == a % p

    with pytest.raises(HDChainValueError, match="no root for "):
        # 3 is not a quadratic residue mod 7
        mod_sqrt(3, 7)

    with pytest.raises(HDChainValueError, match="prime not equal to 3 mod 4: "):
        mod_sqrt(4, 13)
