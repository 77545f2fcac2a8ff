#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `hdchain.mnemonic.entropy` module."

import secrets

import pytest

from hdchain.exceptions import EntropyUnavailable, InvalidParameter
from hdchain.mnemonic import entropy
from hdchain.mnemonic.entropy import (
    ALLOWED_BITS,
    bin_str_from_bytes,
    bytes_entropy_from_bin_str,
    bytes_entropy_from_octets,
    generate,
)


def test_generate() -> None:
    for bits in ALLOWED_BITS:
        entr = generate(bits)
        assert len(entr) * 8 == bits
    assert len(generate()) == 16
    assert generate() != generate()

    for bits in (0, 64, 127, 129, 512):
        with pytest.raises(InvalidParameter, match="invalid number of bits: "):
            generate(bits)


def test_generate_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_source(nbytes: int) -> bytes:
        raise OSError("no randomness")

    monkeypatch.setattr(entropy.secrets, "token_bytes", failing_source)
    with pytest.raises(EntropyUnavailable, match="system random source failure: "):
        generate(128)


def test_bin_str() -> None:
    assert bin_str_from_bytes(b"\x00" * 16) == "0" * 128
    assert bin_str_from_bytes("ff" * 32) == "1" * 256

    # leading zeros are genuine entropy
    bin_str = "0" * 8 + "1" * 152
    entr = bytes_entropy_from_bin_str(bin_str)
    assert entr == b"\x00" + b"\xff" * 19
    assert bin_str_from_bytes(entr) == bin_str

    for bits in ALLOWED_BITS:
        entr = secrets.token_bytes(bits // 8)
        assert bytes_entropy_from_bin_str(bin_str_from_bytes(entr)) == entr


def test_invalid_entropy() -> None:
    with pytest.raises(InvalidParameter, match="invalid number of bits: "):
        bin_str_from_bytes(b"\x00" * 15)
    with pytest.raises(InvalidParameter, match="invalid number of bits: "):
        bytes_entropy_from_octets(b"\x00" * 64)
    with pytest.raises(InvalidParameter, match="invalid number of bits: "):
        bytes_entropy_from_bin_str("01" * 63)
    with pytest.raises(InvalidParameter, match="not a binary 0/1 string: "):
        bytes_entropy_from_bin_str("012" * 43)
