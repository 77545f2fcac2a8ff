#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve classes and scalar multiplication.

CurveGroup is the finite group of the points of an elliptic curve
over Fp, while Curve is its cyclic subgroup of prime order n
generated by G. The only instance used by hdchain is secp256k1.

Internally points are handled in Jacobian coordinates,
avoiding a modular inversion for each group operation;
the public interface uses affine coordinates only.
"""

import functools
from math import ceil
from typing import List, Optional

from hdchain.alias import INF, INFJ, Integer, JacPoint, Point
from hdchain.ecc.number_theory import mod_inv, mod_sqrt
from hdchain.exceptions import HDChainValueError
from hdchain.utils import hex_string, int_from_integer

HEX_THRESHOLD = 0xFFFFFFFF


def _fmt(i: int) -> str:
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"


def jac_from_aff(Q: Point) -> JacPoint:
    """Return the Jacobian representation of the affine point.

    The input point is assumed to be on curve.
    """
    return Q[0], Q[1], 1 if Q[1] else 0


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to the Weierstrass equation y^2 = x^3 + a*x + b,
    together with a point at infinity INF.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:
        # parameters are checked according to SEC 1 v.2 3.1.1.2.1

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # Fermat test will do as probabilistic primality test
        if p < 3 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise HDChainValueError(f"p is not prime: {_fmt(p)}")
        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        if not 0 <= a < p:
            raise HDChainValueError(f"a not in 0..p-1: {_fmt(a)}")
        if not 0 <= b < p:
            raise HDChainValueError(f"b not in 0..p-1: {_fmt(b)}")
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise HDChainValueError("zero discriminant")
        self._a = a
        self._b = b

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}({_fmt(self.p)}, {_fmt(self._a)}, {_fmt(self._b)})"

    def negate(self, Q: Point) -> Point:
        "Return the opposite point; negate(INF) is INF."
        return Q[0], (self.p - Q[1]) % self.p

    def aff_from_jac(self, Q: JacPoint) -> Point:
        # point is assumed to be on curve
        if Q[2] == 0:
            return INF

        Z2 = Q[2] * Q[2]
        x = Q[0] * mod_inv(Z2, self.p)
        y = Q[1] * mod_inv(Z2 * Q[2], self.p)
        return x % self.p, y % self.p

    def double_jac(self, Q: JacPoint) -> JacPoint:
        # point is assumed to be on curve

        QZ2 = Q[2] * Q[2]
        QY2 = Q[1] * Q[1]
        W = 3 * Q[0] * Q[0] + self._a * QZ2 * QZ2
        V = 4 * Q[0] * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * Q[1] * Q[2]
        return X % self.p, Y % self.p, Z % self.p

    def add_jac(self, Q: JacPoint, R: JacPoint) -> JacPoint:
        # points are assumed to be on curve

        if Q[2] == 0:
            return R
        if R[2] == 0:
            return Q

        RZ2 = R[2] * R[2]
        QZ2 = Q[2] * Q[2]
        M = Q[0] * RZ2 % self.p
        N = R[0] * QZ2 % self.p
        T = Q[1] * RZ2 * R[2] % self.p
        U = R[1] * QZ2 * Q[2] % self.p

        if M == N:  # same affine x
            # doubling or opposite points
            return self.double_jac(Q) if T == U else INFJ

        W = U - T
        V = N - M
        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2

        X = (W * W - V3 - 2 * MV2) % self.p
        Y = (W * (MV2 - X) - T * V3) % self.p
        Z = (V * Q[2] * R[2]) % self.p
        return X, Y, Z

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """

        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        QJ = self.add_jac(jac_from_aff(Q1), jac_from_aff(Q2))
        return self.aff_from_jac(QJ)

    def _y2(self, x: int) -> int:
        # no check that a square root of y^2 exists:
        # if it does not, then x is not a valid coordinate
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        "Return one of the two y-coordinates associated to x."

        if not 0 <= x < self.p:
            raise HDChainValueError(f"x-coordinate not in 0..p-1: {_fmt(x)}")
        try:
            return mod_sqrt(self._y2(x), self.p)
        except HDChainValueError as e:
            raise HDChainValueError(f"invalid x-coordinate: {_fmt(x)}") from e

    def y_even(self, x: int) -> int:
        "Return the even affine y-coordinate associated to x."
        root = self.y(x)
        return self.p - root if root % 2 else root

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."

        if len(Q) != 2:
            raise HDChainValueError("point must be a tuple[int, int]")
        if Q[1] == 0:  # infinity point in affine coordinates
            return True
        if not 0 < Q[1] < self.p:
            raise HDChainValueError(f"y-coordinate not in 1..p-1: {_fmt(Q[1])}")
        return self._y2(Q[0]) == Q[1] * Q[1] % self.p

    def require_on_curve(self, Q: Point) -> None:
        "Require the input Point to be on the curve."
        if not self.is_on_curve(Q):
            raise HDChainValueError("point not on curve")


def mult_jac(m: int, Q: JacPoint, ec: CurveGroup) -> JacPoint:
    """Scalar multiplication of a curve point in Jacobian coordinates.

    'double & add' algorithm with 'right-to-left' binary decomposition
    of the m coefficient.
    The input point is assumed to be on curve.
    """

    if m < 0:
        raise HDChainValueError(f"negative m: {hex(m)}")

    R = INFJ
    while m > 0:
        if m & 1:
            R = ec.add_jac(R, Q)
        Q = ec.double_jac(Q)
        m >>= 1
    return R


def multiples(Q: JacPoint, size: int, ec: CurveGroup) -> List[JacPoint]:
    "Return [k * Q for k in range(size)]."

    if size < 2:
        raise HDChainValueError(f"size too low: {size}")

    T = [INFJ, Q]
    for k in range(2, size):
        T.append(ec.double_jac(T[k // 2]) if k % 2 == 0 else ec.add_jac(T[-1], Q))
    return T


@functools.lru_cache()
def _cached_multiples(Q: JacPoint, ec: CurveGroup, w: int) -> List[JacPoint]:
    return multiples(Q, 1 << w, ec)


def _digits(i: int, base: int) -> List[int]:
    "Return the digits of i in the given base, most significant first."

    digits: List[int] = []
    while i or not digits:
        i, d = divmod(i, base)
        digits.append(d)
    return digits[::-1]


def mult_fixed_window(
    m: int, Q: JacPoint, ec: CurveGroup, w: int = 4, cached: bool = False
) -> JacPoint:
    """Scalar multiplication using a fixed window.

    'multiple-double & add' algorithm with 'left-to-right'
    window decomposition of the m coefficient.
    For 256-bit scalars w=4 or w=5 are suggested.
    The input point is assumed to be on curve.
    """

    if m < 0:
        raise HDChainValueError(f"negative m: {hex(m)}")
    if w <= 0:
        raise HDChainValueError(f"non positive w: {w}")

    T = _cached_multiples(Q, ec, w) if cached else multiples(Q, 1 << w, ec)

    digits = _digits(m, 1 << w)
    R = T[digits[0]]
    for i in digits[1:]:
        for _ in range(w):
            R = ec.double_jac(R)
        R = ec.add_jac(R, T[i])
    return R


class Curve(CurveGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self, p: Integer, a: Integer, b: Integer, G: Point, n: Integer, h: int
    ) -> None:

        super().__init__(p, a, b)

        if len(G) != 2:
            raise HDChainValueError("generator must a be a sequence[int, int]")
        self.G = int_from_integer(G[0]), int_from_integer(G[1])
        if self.G[1] == 0:
            raise HDChainValueError("INF point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise HDChainValueError("generator is not on the curve")
        self.GJ = self.G[0], self.G[1], 1

        n = int_from_integer(n)
        if n < 3 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            raise HDChainValueError(f"n is not prime: {_fmt(n)}")
        if n == self.p:
            raise HDChainValueError(f"n=p weak curve: {_fmt(n)}")
        if mult_jac(n, self.GJ, self)[2] != 0:
            raise HDChainValueError(f"n is not the group order: {_fmt(n)}")
        self.n = n
        self.n_size = (n.bit_length() + 7) // 8
        self.h = h

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        result += f", ({_fmt(self.G[0])}, {_fmt(self.G[1])}), {_fmt(self.n)}, {self.h})"
        return result

    def mult(self, m: Integer, Q: Optional[Point] = None) -> Point:
        """Return the point m*Q in affine coordinates.

        Q defaults to the generator G; m is reduced mod n.
        """

        m = int_from_integer(m) % self.n
        if Q is None or Q == self.G:
            RJ = mult_fixed_window(m, self.GJ, self, cached=True)
        else:
            self.require_on_curve(Q)
            RJ = mult_fixed_window(m, jac_from_aff(Q), self)
        return self.aff_from_jac(RJ)


secp256k1 = Curve(
    p="0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F",
    a=0,
    b=7,
    G=(
        "0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798",
        "0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8",
    ),
    n="0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141",
    h=1,
)
