#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Network constants and associated functions.

BIP32 version bytes select the network an extended key belongs to;
the SLIP-44 coin type is the second level of BIP44 derivation paths
(60 for Ethereum mainnet, 1 for all testnets).
"""

import json
from dataclasses import dataclass
from os import path
from typing import Any, Dict, List, Mapping, Tuple, Type, TypeVar

from hdchain.alias import Octets
from hdchain.exceptions import HDChainValueError, InvalidParameter
from hdchain.utils import bytes_from_octets

_KEY_SIZE: List[Tuple[str, int]] = [
    ("bip32_prv", 4),
    ("bip32_pub", 4),
]

_Network = TypeVar("_Network", bound="Network")


@dataclass(frozen=True)
class Network:
    # base58 xkey starts with 'xprv' on mainnet, 'tprv' on testnet
    bip32_prv: bytes
    # base58 xkey starts with 'xpub' on mainnet, 'tpub' on testnet
    bip32_pub: bytes

    # SLIP-44 registered coin type
    coin_type: int

    def __init__(
        self,
        bip32_prv: Octets,
        bip32_pub: Octets,
        coin_type: int,
        check_validity: bool = True,
    ) -> None:

        object.__setattr__(self, "bip32_prv", bytes_from_octets(bip32_prv))
        object.__setattr__(self, "bip32_pub", bytes_from_octets(bip32_pub))
        object.__setattr__(self, "coin_type", coin_type)

        if check_validity:
            self.assert_valid()

    def to_dict(self, check_validity: bool = True) -> Dict[str, Any]:

        if check_validity:
            self.assert_valid()

        return {
            "bip32_prv": self.bip32_prv.hex(),
            "bip32_pub": self.bip32_pub.hex(),
            "coin_type": self.coin_type,
        }

    @classmethod
    def from_dict(
        cls: Type[_Network], dict_: Mapping[str, Any], check_validity: bool = True
    ) -> _Network:

        return cls(
            dict_["bip32_prv"],
            dict_["bip32_pub"],
            dict_["coin_type"],
            check_validity,
        )

    def assert_valid(self) -> None:

        for key, size in _KEY_SIZE:
            value = bytes(getattr(self, key))
            if len(value) != size:
                err_msg = f"invalid {key} length: "
                err_msg += f"{len(value)} bytes"
                err_msg += f" instead of {size}"
                raise HDChainValueError(err_msg)

        if self.bip32_prv == self.bip32_pub:
            raise HDChainValueError("identical bip32_prv and bip32_pub versions")

        if not 0 <= self.coin_type < 0x80000000:
            raise HDChainValueError(f"invalid coin_type: {self.coin_type}")


NETWORKS: Dict[str, Network] = {}
datadir = path.join(path.dirname(__file__), "_data")
for net in ("mainnet", "testnet"):
    filename = path.join(datadir, net + ".json")
    with open(filename, "r", encoding="ascii") as f:
        NETWORKS[net] = Network.from_dict(json.load(f))


def network_from_name(network: str = "mainnet") -> Network:
    "Return the Network for a case-insensitive name, e.g. 'Mainnet'."

    name = network.strip().lower()
    if name not in NETWORKS:
        err_msg = f"unknown network: {network!r}; "
        err_msg += f"available: {', '.join(NETWORKS)}"
        raise InvalidParameter(err_msg)
    return NETWORKS[name]


XPRV_VERSIONS_ALL = [n.bip32_prv for n in NETWORKS.values()]
XPUB_VERSIONS_ALL = [n.bip32_pub for n in NETWORKS.values()]


def network_from_xkeyversion(xkeyversion: bytes) -> str:
    "Return network string from the xkey version prefix."

    for name, network in NETWORKS.items():
        if xkeyversion in (network.bip32_prv, network.bip32_pub):
            return name
    raise HDChainValueError(f"unknown extended key version: {xkeyversion.hex()}")
