#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""SEC compressed/uncompressed point representation."""

from hdchain.alias import Octets, Point
from hdchain.ecc.curve import Curve, secp256k1
from hdchain.exceptions import HDChainValueError, InvalidEncoding
from hdchain.utils import bytes_from_octets, hex_string


def bytes_from_point(Q: Point, ec: Curve = secp256k1, compressed: bool = True) -> bytes:
    """Return a point as compressed/uncompressed octet sequence.

    Compressed is 0x02 or 0x03 (even or odd y) followed by x,
    uncompressed is 0x04 followed by x and y,
    according to SEC 1 v.2, section 2.3.3.
    """

    ec.require_on_curve(Q)
    if Q[1] == 0:
        raise HDChainValueError("no bytes representation for infinity point")

    x = Q[0].to_bytes(ec.p_size, byteorder="big", signed=False)
    if compressed:
        return (b"\x03" if Q[1] & 1 else b"\x02") + x
    return b"\x04" + x + Q[1].to_bytes(ec.p_size, byteorder="big", signed=False)


def point_from_octets(pub_key: Octets, ec: Curve = secp256k1) -> Point:
    "Return the curve point (x_Q, y_Q) encoded as SEC 1 octets."

    pub_key = bytes_from_octets(pub_key)

    bsize = len(pub_key)
    sizes = (ec.p_size + 1, 2 * ec.p_size + 1)
    if bsize not in sizes:
        raise InvalidEncoding(f"invalid size: {bsize} bytes instead of {sizes}")
    if pub_key[0] in (0x02, 0x03):
        if bsize != ec.p_size + 1:
            err_msg = "invalid size for compressed point: "
            err_msg += f"{bsize} instead of {ec.p_size + 1}"
            raise InvalidEncoding(err_msg)
        x_Q = int.from_bytes(pub_key[1:], byteorder="big", signed=False)
        try:
            y_Q = ec.y_even(x_Q)
        except HDChainValueError as e:
            raise InvalidEncoding(f"invalid x-coordinate: '{hex_string(x_Q)}'") from e
        return x_Q, y_Q if pub_key[0] == 0x02 else ec.p - y_Q

    if pub_key[0] == 0x04:
        if bsize != 2 * ec.p_size + 1:
            err_msg = "invalid size for uncompressed point: "
            err_msg += f"{bsize} instead of {2 * ec.p_size + 1}"
            raise InvalidEncoding(err_msg)
        x_Q = int.from_bytes(pub_key[1 : ec.p_size + 1], byteorder="big", signed=False)
        y_Q = int.from_bytes(pub_key[ec.p_size + 1 :], byteorder="big", signed=False)
        if y_Q == 0:
            raise InvalidEncoding("no bytes representation for infinity point")
        if x_Q >= ec.p or y_Q >= ec.p or not ec.is_on_curve((x_Q, y_Q)):
            raise InvalidEncoding(f"point not on curve: {(x_Q, y_Q)}")
        return x_Q, y_Q

    raise InvalidEncoding(f"not a point: {pub_key!r}")
