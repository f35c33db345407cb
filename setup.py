# -*- coding: utf-8 -*-

# Copyright (c) 2015-2016 MIT Probabilistic Computing Project

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#    http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os.path

from setuptools import setup


def readme_contents():
    readme_path = os.path.join(
        os.path.abspath(os.path.dirname(__file__)),
        'README.md')
    with open(readme_path, encoding='utf-8') as readme_file:
        return readme_file.read()

setup(
    name='colgpm',
    version='0.0.0',
    description='CRP mixture Column GPM for CrossCat',
    long_description=readme_contents(),
    long_description_content_type='text/markdown',
    license='Apache-2.0',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Information Analysis',
    ],
    packages=[
        'colgpm',
        'colgpm.mixtures',
        'colgpm.primitives',
        'colgpm.utils',
    ],
    package_dir={
        'colgpm': 'src',
    },
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'scipy>=0.14.0',
    ],
    extras_require={
        'tests': ['pytest'],
    },
)
