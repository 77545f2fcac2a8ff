#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Key chain: the whole entropy-to-address derivation in one call.

    entropy -> mnemonic -> seed -> master extended key -> derived key
            -> public key -> address

Each KeyChain field is one stage of the chain;
the KeyChain is JSON-serializable, bytes fields being lowercase hex.

>>> from hdchain.keychain import keychain_from_mnemonic
>>> mnemonic = "abandon " * 11 + "about"
>>> keychain_from_mnemonic(mnemonic).address
'0x9858EfFD232B4033E47d90003D41EC34EcaEda94'
"""

import logging
from dataclasses import InitVar, dataclass, field
from typing import Any, Optional

from dataclasses_json import DataClassJsonMixin, config

from hdchain.address import checksummed_hex, eth_address, pub_keys_from_prv_key
from hdchain.alias import Octets
from hdchain.bip32.bip32 import derive, master_key_from_seed, neuter
from hdchain.bip32.der_path import DerPath, str_from_der_path
from hdchain.exceptions import HDChainValueError
from hdchain.mnemonic.bip39 import mnemonic_from_entropy, seed_from_mnemonic, validate
from hdchain.mnemonic.checksum import compute_checksum
from hdchain.mnemonic.entropy import generate
from hdchain.mnemonic.wordlist import Mnemonic, normalize_mnemonic
from hdchain.network import network_from_name
from hdchain.utils import bytes_from_octets

log = logging.getLogger(__name__)


def bip44_der_path(
    network: str = "mainnet", account: int = 0, change: int = 0, address_index: int = 0
) -> str:
    """Return the BIP44 derivation path for the network's coin type.

    m / purpose' / coin_type' / account' / change / address_index
    """

    coin_type = network_from_name(network).coin_type
    der_path = f"m/44'/{coin_type}'/{account}'/{change}/{address_index}"
    return str_from_der_path(der_path)


# first address of the first mainnet account: "m/44'/60'/0'/0/0"
DEFAULT_DER_PATH = bip44_der_path()


def _hex_field(**kwargs: Any) -> Any:
    return field(
        metadata=config(encoder=lambda v: v.hex(), decoder=bytes.fromhex), **kwargs
    )


@dataclass(frozen=True)
class KeyChain(DataClassJsonMixin):
    # empty if the chain starts from the seed
    entropy: bytes = _hex_field()
    checksum_bits: str
    mnemonic: str
    passphrase: str

    seed: bytes = _hex_field()
    network: str
    der_path: str
    master_xprv: str
    master_xpub: str

    # private key of the derived extended key
    prv_key: bytes = _hex_field()
    pub_key_compressed: bytes = _hex_field()
    pub_key_uncompressed: bytes = _hex_field()
    # 0x prefixed EIP-55 checksummed hex
    address: str

    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:

        for name, sizes in (
            ("entropy", (0, 16, 20, 24, 28, 32)),
            ("prv_key", (32,)),
            ("pub_key_compressed", (33,)),
            ("pub_key_uncompressed", (65,)),
        ):
            value = getattr(self, name)
            if len(value) not in sizes:
                err_msg = f"invalid {name} length: {len(value)} bytes"
                err_msg += f" instead of {sizes}"
                raise HDChainValueError(err_msg)

        if not 16 <= len(self.seed) <= 64:
            raise HDChainValueError(f"invalid seed length: {len(self.seed)} bytes")

        if self.entropy and self.checksum_bits != compute_checksum(self.entropy):
            raise HDChainValueError(f"invalid checksum bits: {self.checksum_bits}")

        if self.address != "0x" + checksummed_hex(self.address[2:]):
            raise HDChainValueError(f"invalid address: {self.address}")


def generate_mnemonic(bits: int = 128) -> Mnemonic:
    "Return a random BIP39 mnemonic from fresh system entropy."

    mnemonic = mnemonic_from_entropy(generate(bits))
    log.debug("generated %d-word mnemonic", len(mnemonic.split()))
    return mnemonic


def _keychain(
    seed: bytes,
    der_path: Optional[DerPath],
    network: str,
    entropy: bytes = b"",
    mnemonic: str = "",
    passphrase: str = "",
) -> KeyChain:

    version = network_from_name(network).bip32_prv
    if der_path is None:
        der_path = bip44_der_path(network)
    der_path = str_from_der_path(der_path)

    master = master_key_from_seed(seed, version)
    log.debug("master key derived on %s", network)

    xkey = derive(master, der_path)
    log.debug("key derived at %s (depth %d)", der_path, xkey.depth)

    pub_keys = pub_keys_from_prv_key(xkey)
    address = eth_address(pub_keys.uncompressed)
    log.debug("address computed: %s", address)

    return KeyChain(
        entropy=entropy,
        checksum_bits=compute_checksum(entropy) if entropy else "",
        mnemonic=mnemonic,
        passphrase=passphrase,
        seed=seed,
        network=master.network,
        der_path=der_path,
        master_xprv=master.b58encode(),
        master_xpub=neuter(master).b58encode(),
        prv_key=xkey.key[1:],
        pub_key_compressed=pub_keys.compressed,
        pub_key_uncompressed=pub_keys.uncompressed,
        address=address,
    )


def keychain_from_mnemonic(
    mnemonic: Mnemonic,
    passphrase: str = "",
    der_path: Optional[DerPath] = None,
    network: str = "mainnet",
) -> KeyChain:
    """Return the KeyChain of a BIP39 mnemonic sentence.

    The mnemonic is normalized (whitespace collapsed, lowercase)
    and validated before deriving the seed.
    Without der_path, the first BIP44 address path
    of the network coin type is used.
    """

    mnemonic = normalize_mnemonic(mnemonic)
    log.debug("validating %d-word mnemonic", len(mnemonic.split()))
    entropy = validate(mnemonic)

    seed = seed_from_mnemonic(mnemonic, passphrase, verify_checksum=False)
    log.debug("seed derived (passphrase: %s)", "yes" if passphrase else "no")

    return _keychain(seed, der_path, network, entropy, mnemonic, passphrase)


def keychain_from_seed(
    seed: Octets,
    der_path: Optional[DerPath] = None,
    network: str = "mainnet",
) -> KeyChain:
    """Return the KeyChain of a seed.

    Entropy, mnemonic, and passphrase fields are left empty.
    """

    seed = bytes_from_octets(seed)
    log.debug("starting from %d-byte seed", len(seed))
    return _keychain(seed, der_path, network)


def random_keychain(
    bits: int = 128,
    passphrase: str = "",
    der_path: Optional[DerPath] = None,
    network: str = "mainnet",
) -> KeyChain:
    "Return the KeyChain of a freshly generated mnemonic."

    mnemonic = generate_mnemonic(bits)
    return keychain_from_mnemonic(mnemonic, passphrase, der_path, network)
