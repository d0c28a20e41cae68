#
# Copyright (c) nexB Inc. and others. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
# See http://www.apache.org/licenses/LICENSE-2.0 for the license text.
# See https://aboutcode.org for more information about nexB OSS projects.
#

"""
An immutable catalog of SPDX license identifiers with their full name and OSI
approval status, loaded once from a JSON license index.
"""

from collections import namedtuple
import json
import logging
from os.path import abspath
from os.path import dirname
from os.path import join

logger = logging.getLogger(__name__)

curr_dir = dirname(abspath(__file__))
vendored_license_index_location = join(curr_dir, 'data', 'spdx-licenses.json')

# the license text URL is not part of the index data
LICENSE_TEXT_URL = 'https://spdx.org/licenses/%(identifier)s#licenseText'


class ExpressionError(Exception):
    pass


class CatalogError(ExpressionError):
    """
    Raised when a license index has invalid identifiers or records.
    """


LicenseRecord = namedtuple('LicenseRecord', 'full_name osi_approved text_url')


def get_license_index(license_index_location=vendored_license_index_location):
    """
    Return a mapping of {license identifier: [full name, osi approved]} loaded
    from the JSON file at `license_index_location`, the vendored SPDX license
    index by default.
    """
    license_index_location = license_index_location or vendored_license_index_location
    logger.debug('Loading license index from: %s', license_index_location)
    with open(license_index_location, encoding='utf-8') as f:
        return json.load(f)


def validate_index(index):
    """
    Return a list of error messages given a license `index` mapping, possibly
    empty if the index is valid.
    """
    if not isinstance(index, dict):
        ixt = type(index)
        return ['Invalid license index: must be a mapping and not: %(ixt)r.' % locals()]

    invalid_keys = []
    invalid_records = []
    for identifier, record in index.items():
        if not isinstance(identifier, str) or not identifier.strip():
            invalid_keys.append(identifier)
            continue

        if not (isinstance(record, (list, tuple))
            and len(record) == 2
            and isinstance(record[0], str)
            and isinstance(record[1], bool)):
            invalid_records.append((identifier, record))

    errors = []
    for ikey in invalid_keys:
        errors.append('Invalid license identifier: %(ikey)r.' % locals())

    for identifier, record in invalid_records:
        errors.append(
            'Invalid license record: expected [full name, osi approved] for: '
            '%(identifier)s: %(record)r.' % locals())
    return errors


class LicenseCatalog(object):
    """
    A read-only mapping of SPDX license identifier to a (full name, osi approved)
    record. Identifiers are matched exactly and are case-sensitive.

    For example:
    >>> catalog = LicenseCatalog({'MIT': ['MIT License', True]})
    >>> 'MIT' in catalog
    True
    >>> 'mit' in catalog
    False
    >>> catalog.get('MIT').text_url
    'https://spdx.org/licenses/MIT#licenseText'
    """

    def __init__(self, index):
        errors = validate_index(index)
        if errors:
            raise CatalogError('\n'.join(errors))
        # mapping of identifier -> (full name, osi approved)
        self._licenses = {identifier: (record[0], record[1])
                          for identifier, record in index.items()}

    def __contains__(self, identifier):
        return identifier in self._licenses

    def __len__(self):
        return len(self._licenses)

    def __iter__(self):
        return iter(self._licenses)

    def __repr__(self):
        return '%s(<%d licenses>)' % (self.__class__.__name__, len(self))

    def contains(self, identifier):
        """
        Return True if `identifier` is a known SPDX license identifier.
        """
        return identifier in self._licenses

    def identifiers(self):
        """
        Return a list of all the known license identifiers in index order.
        """
        return list(self._licenses)

    def get(self, identifier):
        """
        Return a LicenseRecord for `identifier` or None if it is not known.
        """
        license = self._licenses.get(identifier)
        if license is None:
            return

        full_name, osi_approved = license
        text_url = LICENSE_TEXT_URL % locals()
        return LicenseRecord(full_name, osi_approved, text_url)

    def find_identifier_by_name(self, full_name):
        """
        Return the first license identifier whose full name is `full_name` or
        None.
        """
        for identifier, (name, _osi) in self._licenses.items():
            if name == full_name:
                return identifier

    def is_osi_approved(self, identifier):
        """
        Return True if the license `identifier` is OSI-approved. Raise a KeyError
        if this identifier is not known.
        """
        return self._licenses[identifier][1]


def build_catalog(license_index_location=None):
    """
    Return a LicenseCatalog loaded from the license index JSON file at
    `license_index_location` or from the vendored SPDX license index.
    """
    return LicenseCatalog(get_license_index(license_index_location))
