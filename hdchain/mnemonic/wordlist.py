#!/usr/bin/env python3

# Copyright (C) 2024-2026 The hdchain developers
#
# This file is part of hdchain. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of hdchain including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Mnemonic sentence conversion from/to sequence of word-list indexes."

import unicodedata
from os import path
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from hdchain.exceptions import InvalidParameter, UnknownWord
from hdchain.mnemonic.checksum import WORDLIST_SIZE

Mnemonic = str


class WordList:
    """English BIP39 word-list.

    https://github.com/bitcoin/bips/blob/master/bip-0039/english.txt

    The word-list is loaded only if needed and read only once from disk;
    afterwards it is exposed as a tuple and a read-only word -> index map.
    """

    def __init__(self, filename: Optional[str] = None) -> None:

        if filename is None:
            filename = path.join(path.dirname(__file__), "_data", "english.txt")
        self.filename = filename
        self._words: Tuple[str, ...] = ()
        self._indexes: Mapping[str, int] = MappingProxyType({})

    def _load(self) -> None:

        if self._words:
            return

        with open(self.filename, "r", encoding="utf-8") as file_:
            words = tuple(line.strip() for line in file_ if line.strip())

        if len(words) != WORDLIST_SIZE:
            err_msg = f"invalid wordlist length: {len(words)} "
            err_msg += f"instead of {WORDLIST_SIZE}"
            raise InvalidParameter(err_msg)
        indexes = {word: i for i, word in enumerate(words)}
        if len(indexes) != WORDLIST_SIZE:
            raise InvalidParameter("invalid wordlist: duplicated words")

        self._indexes = MappingProxyType(indexes)
        self._words = words

    @property
    def words(self) -> Tuple[str, ...]:
        self._load()
        return self._words

    @property
    def indexes(self) -> Mapping[str, int]:
        self._load()
        return self._indexes

    def __len__(self) -> int:
        return len(self.words)


# singleton
WORDLIST = WordList()


def normalize_mnemonic(mnemonic: Mnemonic) -> Mnemonic:
    """Return the NFKD normalized, lowercase, single-spaced mnemonic.

    Leading/trailing blanks are stripped and any run of whitespace
    between words is collapsed into a single space.
    """

    mnemonic = unicodedata.normalize("NFKD", mnemonic)
    return " ".join(mnemonic.lower().split())


def indices_to_words(indexes: Sequence[int]) -> Mnemonic:
    "Return the mnemonic from a sequence of word-list indexes."

    words = WORDLIST.words
    for index in indexes:
        if not 0 <= index < WORDLIST_SIZE:
            raise InvalidParameter(f"index not in 0..{WORDLIST_SIZE - 1}: {index}")
    return " ".join(words[i] for i in indexes)


def words_to_indices(mnemonic: Mnemonic) -> List[int]:
    "Return the word-list indexes of the (normalized) mnemonic words."

    word_indexes = WORDLIST.indexes
    result = []
    for position, word in enumerate(normalize_mnemonic(mnemonic).split()):
        if word not in word_indexes:
            raise UnknownWord(f"unknown word #{position + 1}: {word!r}")
        result.append(word_indexes[word])
    return result
