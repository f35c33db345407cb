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

import numpy as np
import pandas as pd
import pytest

from colgpm.mixtures.column import Column
from colgpm.mixtures.column import construct_column_from_latents
from colgpm.mixtures.column import update_column
from colgpm.primitives.bernoulli import Bernoulli
from colgpm.utils import general as gu


DATA = [True, False, None, True, True, float('nan'), False]
LATENTS = {
    'alpha': 2.,
    'counts': {'c0': 4, 'c1': 2, 'c2': 1},
    'y': {0: 'c0', 1: 'c0', 2: 'c0', 3: 'c1', 4: 'c0', 5: 'c1', 6: 'c2'},
}


def test_construct_single_category():
    latents = {'alpha': 1., 'counts': {'only': 4},
        'y': {0: 'only', 1: 'only', 2: 'only', 3: 'only'}}
    data = [True, False, None, True]
    column = construct_column_from_latents(
        'flip', 'bernoulli', {'alpha': 2., 'beta': .5}, latents, data,
        rng=gu.gen_rng(0))
    assert list(column.categories) == ['only']
    assert column.categories['only'].N == 3
    assert column.data is None
    primitive = Bernoulli('flip', hypers={'alpha': 2., 'beta': .5})
    for x in [True, False, True]:
        primitive.incorporate({'flip': x})
    assert np.allclose(column.logpdf_score(), primitive.logpdf_score())
    assert column.assignments == {True: {'only': 2}, False: {'only': 1}}
    assert sorted(column.hyper_grids) == ['alpha', 'beta']


def test_construct_from_latents():
    column = construct_column_from_latents(
        'flip', 'bernoulli', {}, LATENTS, DATA, crosscat=True,
        rng=gu.gen_rng(0))
    assert column.alpha == 2.
    assert column.counts() == {'c0': 3, 'c1': 1, 'c2': 1}
    assert column.assignments == {
        True: {'c0': 2, 'c1': 1},
        False: {'c0': 1, 'c2': 1},
    }
    # Only observed values are recorded.
    assert column.data == {0: True, 1: False, 3: True, 4: True, 6: False}


def test_construct_drops_empty_categories():
    latents = {'alpha': 1., 'counts': {'a': 2, 'b': 1},
        'y': {0: 'a', 1: 'a', 2: 'b'}}
    column = construct_column_from_latents(
        'x', 'normal', {}, latents, [1., 2., None], rng=gu.gen_rng(0))
    assert list(column.categories) == ['a']
    assert column.n_observations() == 2


def test_construct_from_series():
    data = pd.Series([1., np.nan, 2.5], index=['r0', 'r1', 'r2'])
    latents = {'alpha': 1., 'counts': {0: 1, 1: 2},
        'y': {'r0': 0, 'r1': 1, 'r2': 1}}
    column = construct_column_from_latents(
        'x', 'normal', {}, latents, data, crosscat=True, rng=gu.gen_rng(0))
    assert column.counts() == {0: 1, 1: 1}
    assert column.data == {'r0': 1., 'r2': 2.5}
    assert sorted(column.hyper_grids) == ['m', 'nu', 'r', 's']


def test_construct_from_dict_without_data():
    latents = {'alpha': 1., 'counts': {}, 'y': {}}
    column = construct_column_from_latents(
        'x', 'poisson', {}, latents, {}, crosscat=True, rng=gu.gen_rng(0))
    assert column.categories == {}
    assert column.hyper_grids == {}
    assert column.data == {}
    assert column.logpdf_score() == 0


def test_construct_missing_assignment_raises():
    latents = {'alpha': 1., 'counts': {'a': 1}, 'y': {0: 'a'}}
    with pytest.raises(ValueError):
        construct_column_from_latents(
            'x', 'normal', {}, latents, [1., 2.], rng=gu.gen_rng(0))
    # Missing values need no assignment.
    column = construct_column_from_latents(
        'x', 'normal', {}, latents, [1., None], rng=gu.gen_rng(0))
    assert column.n_observations() == 1


def test_construct_categorical_options():
    latents = {'alpha': 1., 'counts': {0: 3}, 'y': {0: 0, 1: 0, 2: 0}}
    options = {'color': ['red', 'green', 'blue']}
    column = construct_column_from_latents(
        'color', 'categorical', {}, latents, ['red', 'red', 'green'],
        options=options, rng=gu.gen_rng(0))
    assert column.distargs == {'values': ['red', 'green', 'blue']}
    assert np.isfinite(column.logpdf({'color': 'blue'}))
    assert np.allclose(
        gu.logsumexp([column.logpdf({'color': c}) for c in options['color']]),
        0)
    # Without options the domain is the observed values.
    column = construct_column_from_latents(
        'color', 'categorical', {}, latents, ['red', 'green', 'red'],
        rng=gu.gen_rng(0))
    assert column.distargs == {'values': ['red', 'green']}
    assert column.logpdf({'color': 'blue'}) == -float('inf')


def test_crosscat_incorporate_agrees_with_construct():
    expected = construct_column_from_latents(
        'flip', 'bernoulli', {}, LATENTS, DATA, crosscat=True,
        rng=gu.gen_rng(0))
    column = Column('flip', 'bernoulli', alpha=2., rng=gu.gen_rng(0))
    for rowid, x in enumerate(DATA):
        column = column.crosscat_incorporate(
            {'flip': x}, LATENTS['y'][rowid], rowid)
    assert column.counts() == expected.counts()
    assert column.assignments == expected.assignments
    assert column.data == expected.data
    assert np.allclose(column.logpdf_score(), expected.logpdf_score())
    assert np.allclose(
        column.logpdf({'flip': True}), expected.logpdf({'flip': True}))


def test_crosscat_unincorporate():
    column = construct_column_from_latents(
        'flip', 'bernoulli', {}, LATENTS, DATA, crosscat=True,
        rng=gu.gen_rng(0))
    # Row 6 is the only member of c2.
    column2 = column.crosscat_unincorporate('c2', 6)
    assert 'c2' not in column2.categories
    assert column2.assignments[False] == {'c0': 1}
    assert 6 not in column2.data
    assert 6 in column.data
    assert column.counts()['c2'] == 1
    # Rows with missing values are not recorded.
    assert column2.crosscat_unincorporate('c0', 2) is column2
    # Remove all remaining rows.
    for rowid in [0, 1, 3, 4]:
        column2 = column2.crosscat_unincorporate(LATENTS['y'][rowid], rowid)
    assert column2.categories == {}
    assert column2.assignments == {}
    assert column2.data == {}


def test_crosscat_errors():
    column = Column('x', 'normal', rng=gu.gen_rng(0))
    assert column.crosscat_incorporate({'x': None}, 0, 0) is column
    column = column.crosscat_incorporate({'x': 1.}, 0, 'r0')
    assert column.data == {'r0': 1.}
    with pytest.raises(ValueError):
        column.crosscat_incorporate({'x': 2.}, 0, 'r0')
    # The value of r0 is not in category 1.
    with pytest.raises(ValueError):
        column.crosscat_unincorporate(1, 'r0')
    assert column.crosscat_unincorporate(0, 'unknown') is column


def test_update_column():
    column = construct_column_from_latents(
        'flip', 'bernoulli', {}, LATENTS, DATA, crosscat=True,
        rng=gu.gen_rng(0))
    latents = {'alpha': .5, 'counts': {'z': 7}, 'y': {r: 'z' for r in range(7)}}
    updated = update_column(column, latents)
    assert updated.alpha == .5
    assert updated.counts() == {'z': 5}
    assert updated.assignments == {True: {'z': 3}, False: {'z': 2}}
    assert sorted(updated.hyper_grids) == sorted(column.hyper_grids)
    assert updated.data == column.data
    assert column.counts() == {'c0': 3, 'c1': 1, 'c2': 1}
    plain = construct_column_from_latents(
        'flip', 'bernoulli', {}, LATENTS, DATA, rng=gu.gen_rng(0))
    with pytest.raises(ValueError):
        update_column(plain, latents)


def test_crosscat_requires_recorded_data():
    latents = {'alpha': 1., 'counts': {'a': 2}, 'y': {0: 'a', 1: 'a'}}
    column = construct_column_from_latents(
        'x', 'bernoulli', {}, latents, [True, False], rng=gu.gen_rng(0))
    with pytest.raises(ValueError):
        column.crosscat_unincorporate('a', 0)
    with pytest.raises(ValueError):
        column.crosscat_incorporate({'x': True}, 'a', 2)
    # A Column filled by incorporate does not record rows either.
    column = Column('x', 'bernoulli', rng=gu.gen_rng(0))
    with pytest.raises(ValueError):
        column.crosscat_unincorporate(0, 0)
    column = column.incorporate({'x': True})
    with pytest.raises(ValueError):
        column.crosscat_incorporate({'x': False}, 0, 0)
    # Missing values never touch the Column.
    assert column.crosscat_incorporate({'x': None}, 0, 0) is column


def test_construct_categorical_without_values():
    latents = {'alpha': 1., 'counts': {}, 'y': {0: 0, 1: 0}}
    with pytest.raises(ValueError):
        construct_column_from_latents(
            'color', 'categorical', {}, latents, [None, None],
            rng=gu.gen_rng(0))
    column = construct_column_from_latents(
        'color', 'categorical', {}, latents, [None, None],
        options={'color': ['red', 'blue']}, crosscat=True, rng=gu.gen_rng(0))
    assert column.categories == {}
    assert column.data == {}
    assert np.allclose(column.logpdf({'color': 'red'}), np.log(.5))
