#!/usr/bin/env python
# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup


desc = ('spdx-license is a small utility library to validate license '
        'declarations written in SPDX tag notation and to look up SPDX '
        'license metadata such as full names and OSI approval.')

setup(
    name='spdx-license',
    version='1.0.0',
    license='apache-2.0',
    description=desc,
    long_description=desc,
    author='nexB Inc.',
    author_email='info@nexb.com',
    url='https://github.com/aboutcode-org',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    package_data={'spdx_license': ['data/*.json']},
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: Apache Software License',
        'Intended Audience :: Developers',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Utilities',
    ],
    keywords=[
        'license', 'spdx', 'license expression', 'open source', 'validate',
        'licence', 'osi'
    ],
    install_requires=[
        'boolean.py',
    ],
    extras_require={
        'testing': [
            'pytest',
        ],
    },
)
