#
# Copyright (c) nexB Inc. and others. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
# See http://www.apache.org/licenses/LICENSE-2.0 for the license text.
# See https://aboutcode.org for more information about nexB OSS projects.
#
import json
import pathlib
from os.path import abspath
from os.path import dirname
from os.path import join
from unittest import TestCase

from spdx_license.catalog import CatalogError
from spdx_license.catalog import ExpressionError
from spdx_license.catalog import LicenseCatalog
from spdx_license.catalog import LicenseRecord
from spdx_license.catalog import build_catalog
from spdx_license.catalog import get_license_index
from spdx_license.catalog import validate_index


test_data_dir = join(dirname(__file__), 'data')
test_license_index_location = join(test_data_dir, 'test_spdx_licenses.json')


class LicenseIndexTest(TestCase):

    def test_get_license_index(self):
        with open(test_license_index_location) as f:
            expected = json.load(f)
        result = get_license_index(test_license_index_location)
        assert result == expected

    def test_get_license_index_vendored(self):
        curr_dir = dirname(abspath(__file__))
        parent_dir = pathlib.Path(curr_dir).parent
        vendored_location = parent_dir.joinpath(
            'src', 'spdx_license', 'data', 'spdx-licenses.json')
        with open(vendored_location) as f:
            expected = json.load(f)
        assert get_license_index() == expected
        assert get_license_index(None) == expected

    def test_get_license_index_missing_file_raise_exception(self):
        with self.assertRaises(OSError):
            get_license_index(join(test_data_dir, 'does-not-exist.json'))

    def test_vendored_index_is_valid(self):
        assert [] == validate_index(get_license_index())


class LicenseCatalogTest(TestCase):
    catalog = build_catalog(test_license_index_location)

    def test_contains(self):
        assert self.catalog.contains('MIT')
        assert 'Apache-2.0' in self.catalog
        assert 'GPL-2.0+' in self.catalog
        assert not self.catalog.contains('GPL-3.0')

    def test_contains_is_case_sensitive(self):
        assert not self.catalog.contains('mit')
        assert not self.catalog.contains('APACHE-2.0')
        assert not self.catalog.contains(' MIT')

    def test_get(self):
        expected = LicenseRecord(
            'MIT License', True, 'https://spdx.org/licenses/MIT#licenseText')
        assert expected == self.catalog.get('MIT')

        result = self.catalog.get('WTFPL')
        assert 'Do What The F*ck You Want To Public License' == result.full_name
        assert not result.osi_approved
        assert 'https://spdx.org/licenses/WTFPL#licenseText' == result.text_url

    def test_get_unknown_returns_none(self):
        assert self.catalog.get('GPL-3.0') is None
        assert self.catalog.get('') is None

    def test_find_identifier_by_name(self):
        assert 'Apache-2.0' == self.catalog.find_identifier_by_name('Apache License 2.0')
        assert 'GPL-2.0+' == self.catalog.find_identifier_by_name(
            'GNU General Public License v2.0 or later')

    def test_find_identifier_by_name_returns_first_match(self):
        assert 'MIT' == self.catalog.find_identifier_by_name('MIT License')

    def test_find_identifier_by_name_is_exact(self):
        assert self.catalog.find_identifier_by_name('mit license') is None
        assert self.catalog.find_identifier_by_name('MIT') is None
        assert self.catalog.find_identifier_by_name('') is None

    def test_is_osi_approved(self):
        assert self.catalog.is_osi_approved('MIT') is True
        assert self.catalog.is_osi_approved('WTFPL') is False

    def test_is_osi_approved_unknown_raise_KeyError(self):
        with self.assertRaises(KeyError):
            self.catalog.is_osi_approved('GPL-3.0')

    def test_identifiers_are_in_index_order(self):
        expected = ['MIT', 'Apache-2.0', 'BSD-3-Clause', 'GPL-2.0+', 'WTFPL', 'Expat-Copy']
        assert expected == self.catalog.identifiers()
        assert expected == list(self.catalog)
        assert 6 == len(self.catalog)

    def test_repr(self):
        assert 'LicenseCatalog(<6 licenses>)' == repr(self.catalog)

    def test_catalog_is_not_changed_by_changes_to_its_index(self):
        index = {'MIT': ['MIT License', True]}
        catalog = LicenseCatalog(index)
        index['GPL-3.0'] = ['GNU General Public License v3.0 only', True]
        index['MIT'][0] = 'Changed'
        assert 'GPL-3.0' not in catalog
        assert 'MIT License' == catalog.get('MIT').full_name

    def test_empty_catalog(self):
        catalog = LicenseCatalog({})
        assert 0 == len(catalog)
        assert not catalog.contains('MIT')


class LicenseCatalogErrorsTest(TestCase):

    def test_CatalogError_is_an_ExpressionError(self):
        assert issubclass(CatalogError, ExpressionError)

    def test_catalog_error_can_be_caught_as_ExpressionError(self):
        with self.assertRaises(ExpressionError):
            LicenseCatalog({'MIT': ['MIT License']})

    def test_catalog_with_short_record_raise_CatalogError(self):
        with self.assertRaises(CatalogError):
            LicenseCatalog({'MIT': ['MIT License']})

    def test_catalog_with_invalid_osi_flag_raise_CatalogError(self):
        with self.assertRaises(CatalogError):
            LicenseCatalog({'MIT': ['MIT License', 'yes']})

    def test_catalog_with_non_mapping_index_raise_CatalogError(self):
        with self.assertRaises(CatalogError):
            LicenseCatalog([['MIT', 'MIT License', True]])

    def test_validate_index_reports_all_errors(self):
        index = {
            'MIT': ['MIT License', True],
            '': ['Empty', True],
            'Apache-2.0': 'Apache License 2.0',
            'BSD-3-Clause': [None, True],
        }
        expected = [
            "Invalid license identifier: ''.",
            "Invalid license record: expected [full name, osi approved] for: "
            "Apache-2.0: 'Apache License 2.0'.",
            "Invalid license record: expected [full name, osi approved] for: "
            "BSD-3-Clause: [None, True].",
        ]
        assert expected == validate_index(index)

    def test_catalog_error_message_lists_all_errors(self):
        try:
            LicenseCatalog({'MIT': ['MIT License'], 'ISC': ['ISC License', 1]})
            self.fail('CatalogError not raised')
        except CatalogError as ce:
            assert 2 == len(str(ce).splitlines())
