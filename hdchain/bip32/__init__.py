#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module hdchain.bip32: hierarchical deterministic key tree."""
