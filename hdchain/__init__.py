#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the hdchain package."

import logging

name = "hdchain"
__version__ = "2026.10.19"
__author__ = "The hdchain developers"
__author_email__ = "devs@hdchain.dev"
__copyright__ = "Copyright (C) 2024-2026 The hdchain developers"
__license__ = "MIT License"

# a library must not configure logging: applications do
logging.getLogger(__name__).addHandler(logging.NullHandler())
