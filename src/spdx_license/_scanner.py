#
# Copyright (c) nexB Inc. and others. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
# See http://www.apache.org/licenses/LICENSE-2.0 for the license text.
# See https://aboutcode.org for more information about nexB OSS projects.
#

"""
Single pass tokenizer for SPDX license tag notation.

The scan goes left to right with no backtracking: at each offset the token
patterns are tried in a fixed priority order and the first pattern matching
exactly at that offset wins. The last pattern matches any single character so a
scan always makes progress.
"""

from collections import OrderedDict
import logging
import re

from boolean.boolean import TOKEN_AND
from boolean.boolean import TOKEN_LPAR
from boolean.boolean import TOKEN_OR
from boolean.boolean import TOKEN_RPAR
from boolean.boolean import TOKEN_SYMBOL

TRACE = False

logger = logging.getLogger(__name__)


def logger_debug(*args):
    pass


if TRACE:

    def logger_debug(*args):
        return logger.debug(' '.join(isinstance(a, str) and a or repr(a) for a in args))

    import sys
    logging.basicConfig(stream=sys.stdout)
    logger.setLevel(logging.DEBUG)


class ScannerError(Exception):
    pass


# ids for the tokens that are not known from the boolean parser
TOKEN_SENTINEL = 20
TOKEN_LICENSE_REF = 21
TOKEN_SPACE = 22
TOKEN_UNKNOWN = 23

# mapping of lowercase operator strings to a token type id
OPERATORS = {'and': TOKEN_AND, 'or': TOKEN_OR}


def is_operator(kind):
    return kind in (TOKEN_AND, TOKEN_OR)


# characters allowed in a license identifier
license_chars = r'[-+_.a-zA-Z0-9]'

# (token type, pattern) in priority order. A None type for operators means that
# the type is resolved from the matched string.
TOKEN_PATTERNS = (
    (TOKEN_LPAR, r'\('),
    (TOKEN_RPAR, r'\)'),
    (None, r'(?i:or|and)(?!%(license_chars)s)' % locals()),
    (TOKEN_SENTINEL, r'(?:NONE|NOASSERTION)(?!%(license_chars)s)' % locals()),
    (TOKEN_LICENSE_REF, r'LicenseRef-[0-9]+'),
    (TOKEN_SYMBOL, r'%(license_chars)s{3,}' % locals()),
    (TOKEN_SPACE, r'\s+'),  # ASCII whitespace only
    (TOKEN_UNKNOWN, r'.'),
)


def compile_patterns(patterns=TOKEN_PATTERNS):
    """
    Return a tuple of (token type, compiled regex) given a sequence of `patterns`
    (token type, regex string). Raise a ScannerError if a pattern is invalid.
    """
    compiled = []
    for kind, pattern in patterns:
        try:
            compiled.append((kind, re.compile(pattern, re.DOTALL | re.ASCII)))
        except re.error as e:
            raise ScannerError(
                'Pattern for token %(kind)r failed (regex error): %(e)s' % locals())
    return tuple(compiled)


_default_patterns = compile_patterns()


class Token(object):
    """
    A Token is a classified substring of a scanned license string:

    - `start` and `end` are zero-based index in the original string S such that
      S[start:end+1] will yield `string`.
    - `string` is the matched sub-string.
    - `kind` is one of the TOKEN_* token type ids.
    """

    __slots__ = 'start', 'end', 'string', 'kind'

    def __init__(self, start, end, string='', kind=None):
        self.start = start
        self.end = end
        self.string = string
        self.kind = kind

    def __repr__(self):
        return self.__class__.__name__ + '(%(start)r, %(end)r, %(string)r, %(kind)r)' % self.as_dict()

    def as_dict(self):
        return OrderedDict([(s, getattr(self, s)) for s in self.__slots__])

    def __len__(self):
        return self.end + 1 - self.start

    def __eq__(self, other):
        return isinstance(other, Token) and (
            self.start == other.start and
            self.end == other.end and
            self.string == other.string and
            self.kind == other.kind
        )

    def __hash__(self):
        tup = self.start, self.end, self.string, self.kind
        return hash(tup)


class Lexer(object):
    """
    Scan a `source` license string and return Token one at a time.

    The scan is not restartable: create a new Lexer to scan again.

    For example:
    >>> lexer = Lexer('(MIT or LicenseRef-3)')
    >>> lexer.next_token()
    Token(0, 0, '(', 4)
    >>> lexer.next_token()
    Token(1, 3, 'MIT', 8)
    >>> lexer.offset
    4
    """

    def __init__(self, source, patterns=None):
        self.source = source
        self.offset = 0
        self.patterns = patterns if patterns is not None else _default_patterns

    def next_token(self):
        """
        Return the next Token or None once the end of the source is reached.
        """
        source = self.source
        offset = self.offset
        if offset >= len(source):
            return

        for kind, pattern in self.patterns:
            match = pattern.match(source, offset)
            if not match:
                continue

            string = match.group()
            if not string:
                raise ScannerError(
                    'Pattern %(pattern)r matched an empty string at position: %(offset)d' % locals())

            if kind is None:
                kind = OPERATORS[string.lower()]

            end = offset + len(string) - 1
            self.offset = end + 1
            token = Token(offset, end, string, kind)
            if TRACE:
                logger_debug('next_token:', token)
            return token

        raise ScannerError(
            'At least the last pattern needs to match, but none did '
            'at position: %(offset)d' % locals())

    def __iter__(self):
        token = self.next_token()
        while token is not None:
            yield token
            token = self.next_token()


def tokenize(source):
    """
    Return a list of all the Token of a `source` string, including spaces.

    For example:
    >>> [t.string for t in tokenize('MIT ')]
    ['MIT', ' ']
    """
    return list(Lexer(source))
