#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

They discriminate between exceptions raised by hdchain
and those raised by other codebase.

Users who do not care about the specific failure are usually better off
just dealing with the regular ValueError and RuntimeError
from which the hdchain versions are derived.
"""


class HDChainValueError(ValueError):
    pass


class HDChainRuntimeError(RuntimeError):
    pass


class InvalidParameter(HDChainValueError):
    "Invalid argument, e.g. unsupported entropy size."


class InvalidPathSyntax(InvalidParameter):
    "Malformed derivation path."


class EntropyUnavailable(HDChainRuntimeError):
    "The system cryptographically secure random source failed."


class InvalidMnemonic(HDChainValueError):
    pass


class InvalidWordCount(InvalidMnemonic):
    pass


class UnknownWord(InvalidMnemonic):
    pass


class ChecksumMismatch(InvalidMnemonic):
    pass


class InvalidMasterKey(HDChainValueError):
    pass


class InvalidChildKey(HDChainValueError):
    """Degenerate child derivation at a given index.

    BIP32 prescribes to proceed with the next index.
    """


class DepthExceeded(HDChainValueError):
    pass


class InvalidEncoding(HDChainValueError):
    "Malformed base58, extended key, or checksummed address."


class AlreadyPublic(HDChainValueError):
    pass


class PrivateKeyRequired(HDChainValueError):
    pass
