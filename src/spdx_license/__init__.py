#
# Copyright (c) nexB Inc. and others. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
# See http://www.apache.org/licenses/LICENSE-2.0 for the license text.
# See https://aboutcode.org for more information about nexB OSS projects.
#

"""
This module validates license declarations written in SPDX tag notation such
as "MIT", "(MIT or Apache-2.0)", "GPL-2.0+", "NONE" or "LicenseRef-3" and
provides lookups of SPDX license metadata.

It supports a plain license string or a list of alternative license strings
that are combined as a disjunction.

The grammar is a restricted form of SPDX expressions: a single license
identifier, or a single parenthesized group of identifiers combined with one
and only one kind of operator. A closed group can be further combined with the
same operator. Nested groups, empty groups and mixed "and" and "or" operators
are rejected rather than guessing a precedence.

The main entry point is the SpdxLicense object.
"""

from collections.abc import Sequence
import logging

from boolean.boolean import TOKEN_LPAR
from boolean.boolean import TOKEN_RPAR
from boolean.boolean import TOKEN_SYMBOL

from spdx_license._scanner import Lexer
from spdx_license._scanner import ScannerError
from spdx_license._scanner import Token
from spdx_license._scanner import TOKEN_LICENSE_REF
from spdx_license._scanner import TOKEN_SENTINEL
from spdx_license._scanner import TOKEN_SPACE
from spdx_license._scanner import TOKEN_UNKNOWN
from spdx_license._scanner import is_operator
from spdx_license._scanner import tokenize
from spdx_license.catalog import CatalogError
from spdx_license.catalog import ExpressionError
from spdx_license.catalog import LicenseCatalog
from spdx_license.catalog import LicenseRecord
from spdx_license.catalog import build_catalog
from spdx_license.catalog import get_license_index

logger = logging.getLogger(__name__)


def logger_debug(*args):
    return logger.debug(' '.join(isinstance(a, str) and a or repr(a) for a in args))


class InvalidInputError(ExpressionError):
    """
    Raised when a license is neither a string nor a sequence of strings.
    """


def normalize_license(license):
    """
    Return a license expression string given a `license` string or sequence of
    alternative license strings. Raise an InvalidInputError otherwise.

    Several alternatives are combined in a single "or" group in their original
    order:
    >>> normalize_license(['MIT', 'Apache-2.0'])
    '(MIT or Apache-2.0)'
    >>> normalize_license(['MIT'])
    'MIT'
    >>> normalize_license([])
    ''
    """
    if isinstance(license, str):
        return license

    if isinstance(license, Sequence) and not isinstance(license, (bytes, bytearray)):
        if not all(isinstance(lic, str) for lic in license):
            raise InvalidInputError('Array of strings expected.')
        if len(license) > 1:
            return '(' + ' or '.join(license) + ')'
        if license:
            return license[0]
        return ''

    ltype = type(license).__name__
    raise InvalidInputError('Array or String expected, %(ltype)s given.' % locals())


class ExpressionChecker(object):
    """
    Check a stream of Token against the license expression grammar, one token
    at a time. A new checker must be used for each expression.

    - `paren_depth` is 0 before a group, 1 in an open group and 2 after the group
      is closed. Only one group is supported.
    - `expecting_operand` is True when the next token must be a license, a
      "LicenseRef-" reference or a sentinel.
    - `bound_operator` is the type of the first operator seen. All the other
      operators must be of the same type. Operators are compared by type so
      "or" and "OR" are the same operator.
    """

    def __init__(self, catalog):
        self.catalog = catalog
        self.paren_depth = 0
        self.expecting_operand = True
        self.bound_operator = None

    def feed(self, token):
        """
        Return True if `token` is acceptable in the current state and update
        this state. Return False otherwise.
        """
        kind = token.kind

        if kind == TOKEN_SPACE:
            return True

        if kind == TOKEN_LPAR:
            if self.paren_depth or not self.expecting_operand:
                return False
            self.paren_depth = 1
            return True

        if kind == TOKEN_RPAR:
            if (self.paren_depth != 1
                or self.expecting_operand
                or self.bound_operator is None):
                return False
            self.paren_depth = 2
            return True

        if is_operator(kind):
            if self.expecting_operand or not self.paren_depth:
                return False
            if self.bound_operator is None:
                self.bound_operator = kind
            elif self.bound_operator != kind:
                return False
            self.expecting_operand = True
            return True

        if kind == TOKEN_SENTINEL:
            if self.paren_depth:
                return False
            return self.satisfy_operand()

        if kind == TOKEN_LICENSE_REF:
            return self.satisfy_operand()

        if kind == TOKEN_SYMBOL:
            if not self.catalog.contains(token.string):
                return False
            return self.satisfy_operand()

        if kind == TOKEN_UNKNOWN:
            return False

        raise ScannerError('Unparsed token: %(token)r.' % locals())

    def satisfy_operand(self):
        if not self.expecting_operand:
            return False
        self.expecting_operand = False
        return True

    def is_complete(self):
        """
        Return True if the tokens fed so far form a complete expression.
        """
        return not (self.paren_depth % 2 or self.expecting_operand)


def validate_license_string(license, catalog):
    """
    Return True if the `license` string is a valid license expression where
    each license identifier is known in the `catalog` LicenseCatalog.
    """
    checker = ExpressionChecker(catalog)
    for token in Lexer(license):
        if not checker.feed(token):
            logger_debug('validate: rejected token:', token.string, 'at position:', token.start)
            return False

    complete = checker.is_complete()
    if not complete:
        logger_debug('validate: incomplete expression:', license)
    return complete


class SpdxLicense(object):
    """
    Validate SPDX license declarations and look up SPDX license metadata.

    For example:
    >>> spdx = SpdxLicense()
    >>> spdx.validate('MIT')
    True
    >>> spdx.validate('(MIT or GPL-2.0+)')
    True
    >>> spdx.validate(['MIT', 'Apache-2.0'])
    True
    >>> spdx.validate('MIT or Apache-2.0')
    False
    >>> spdx.validate('(MIT or Apache-2.0 and BSD-3-Clause)')
    False
    >>> spdx.get_identifier_by_name('MIT License')
    'MIT'
    """

    def __init__(self, catalog=None, license_index_location=None):
        """
        Initialize with a `catalog` LicenseCatalog or else with a catalog loaded
        from the license index JSON file at `license_index_location`. The
        vendored SPDX license index is used if neither is provided.
        """
        if catalog is None:
            catalog = build_catalog(license_index_location)
        self.catalog = catalog

    def get_license_by_identifier(self, identifier):
        """
        Return a LicenseRecord for a license `identifier` or None.
        """
        return self.catalog.get(identifier)

    def get_identifier_by_name(self, name):
        """
        Return the short identifier of a license given its full `name` or None.
        """
        return self.catalog.find_identifier_by_name(name)

    def is_osi_approved_by_identifier(self, identifier):
        return self.catalog.is_osi_approved(identifier)

    def validate(self, license):
        """
        Return True if `license` is a valid license declaration. `license` is
        either a license expression string or a sequence of alternative license
        strings. Raise an InvalidInputError for any other type.
        """
        return validate_license_string(normalize_license(license), self.catalog)


__all__ = [
    'CatalogError',
    'ExpressionChecker',
    'ExpressionError',
    'InvalidInputError',
    'Lexer',
    'LicenseCatalog',
    'LicenseRecord',
    'ScannerError',
    'SpdxLicense',
    'Token',
    'build_catalog',
    'get_license_index',
    'normalize_license',
    'tokenize',
    'validate_license_string',
]
