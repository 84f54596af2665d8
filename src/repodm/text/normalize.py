"""Lexical normalization of source code into a comparable canonical string."""

import re
from typing import NamedTuple

import mmh3

# Bump whenever the normalization rules change; normalized texts of different versions are not comparable.
NORMALIZATION_VERSION = 1

_BLOCK_COMMENT = re.compile(r'/\*.*?\*/', re.DOTALL)
_LINE_COMMENT = re.compile(r'//.*$', re.MULTILINE)
_HASH_COMMENT = re.compile(r'#.*$', re.MULTILINE)
_WHITESPACE = re.compile(r'\s+')
_PUNCTUATION = re.compile(r'[{}();,]')


def normalize(content: str) -> str:
    """Reduce source code to a comment-, whitespace- and case-insensitive form.

    The steps run in a fixed order: block comments, ``//`` comments, ``#`` comments,
    whitespace collapsing, removal of ``{}();,``, lowercasing and trimming. Block
    comments go first so that a ``//`` inside ``/* ... */`` cannot cut the block short.

    Comment delimiters inside string literals are not recognized and are stripped as
    comments too. The similarity thresholds are calibrated against this behavior.
    """
    content = _BLOCK_COMMENT.sub('', content)
    content = _LINE_COMMENT.sub('', content)
    content = _HASH_COMMENT.sub('', content)
    content = _WHITESPACE.sub(' ', content)
    content = _PUNCTUATION.sub('', content)
    return content.lower().strip()


def fingerprint(text: str) -> int:
    """128-bit MurmurHash3 of a normalized text."""
    return mmh3.hash128(text.encode('utf-8'), signed=False)


class NormalizedText(NamedTuple):
    """Normalized form of one file's content."""
    text: str
    fingerprint: int
    version: int = NORMALIZATION_VERSION

    @classmethod
    def from_content(cls, content: str) -> 'NormalizedText':
        text = normalize(content)
        return cls(text, fingerprint(text))
