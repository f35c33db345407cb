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

import pytest

import numpy as np

from colgpm.mixtures.column import Column
from colgpm.utils import config as cu
from colgpm.utils import general as gu


CASES = [
    ('bernoulli', None, [True, False, True, True, 1]),
    ('categorical', {'values': ['a', 'b', 'c']}, ['a', 'c', 'c', 'b', 'c']),
    ('categorical', {'k': 4}, [0, 3, 3, 1, 2]),
    ('normal', None, [1.2, -.5, 3.1, 0., 2.]),
    ('poisson', None, [0, 3, 1, 4, 4]),
]


def make_primitive(stattype, distargs, seed=0):
    model = cu.stattype_class(stattype)
    return model('x', hypers=None, distargs=distargs, rng=gu.gen_rng(seed))


@pytest.mark.parametrize('stattype, distargs, data', CASES)
def test_logpdf_score_chain(stattype, distargs, data):
    """Ensure that logpdf_score agrees with sequence of predictives."""
    primitive = make_primitive(stattype, distargs)
    logpdf_predictive = []
    logpdf_marginal = []
    for x in data:
        logpdf_predictive.append(primitive.logpdf({'x': x}))
        primitive.incorporate({'x': x})
        logpdf_marginal.append(primitive.logpdf_score())
    assert primitive.N == len(data)
    # Joint probability = sum of predictives = marginal likelihood.
    assert np.allclose(sum(logpdf_predictive), logpdf_marginal[-1])
    # First differences of logpdf marginal should be predictives.
    assert np.allclose(np.diff(logpdf_marginal), logpdf_predictive[1:])


@pytest.mark.parametrize('stattype, distargs, data', CASES)
def test_unincorporate_restores_empty(stattype, distargs, data):
    primitive = make_primitive(stattype, distargs)
    empty_logp = primitive.logpdf({'x': data[0]})
    for x in data:
        primitive.incorporate({'x': x})
    for x in reversed(data):
        primitive.unincorporate({'x': x})
    assert primitive.N == 0
    assert np.allclose(primitive.logpdf_score(), 0)
    assert np.allclose(primitive.logpdf({'x': data[0]}), empty_logp)
    # Nothing left to remove.
    with pytest.raises(ValueError):
        primitive.unincorporate({'x': data[0]})


@pytest.mark.parametrize('stattype, distargs, data', CASES)
def test_copy_is_independent(stattype, distargs, data):
    primitive = make_primitive(stattype, distargs)
    primitive.incorporate({'x': data[0]})
    suffstats = primitive.get_suffstats()
    clone = primitive.copy()
    assert clone.rng is primitive.rng
    for x in data[1:]:
        clone.incorporate({'x': x})
    assert primitive.get_suffstats() == suffstats
    assert clone.N == len(data)


@pytest.mark.parametrize('stattype, distargs, data', CASES)
def test_simulate_many(stattype, distargs, data):
    primitive = make_primitive(stattype, distargs)
    for x in data:
        primitive.incorporate({'x': x})
    sample = primitive.simulate(['x'])
    assert list(sample) == ['x']
    samples = primitive.simulate(['x'], N=7)
    assert len(samples) == 7
    for s in samples:
        assert np.isfinite(primitive.logpdf(s))


def test_bernoulli_values():
    primitive = make_primitive('bernoulli', None)
    assert np.allclose(
        gu.logsumexp([primitive.logpdf({'x': True}),
            primitive.logpdf({'x': False})]), 0)
    assert primitive.logpdf({'x': 2}) == -float('inf')
    assert primitive.logpdf({'x': 'True'}) == -float('inf')
    with pytest.raises(ValueError):
        primitive.incorporate({'x': .5})
    primitive.incorporate({'x': np.bool_(True)})
    assert primitive.get_suffstats() == {'N': 1, 'x_sum': 1}
    # Only True was incorporated.
    with pytest.raises(ValueError):
        primitive.unincorporate({'x': False})
    samples = primitive.simulate(['x'], N=20)
    assert all(isinstance(s['x'], bool) for s in samples)


def test_categorical_symbolic_domain():
    primitive = make_primitive('categorical', {'values': ['red', 'green']})
    assert primitive.get_distargs() == {'k': 2, 'values': ['red', 'green']}
    primitive.incorporate({'x': 'green'})
    primitive.incorporate({'x': 'green'})
    assert np.allclose(np.exp(primitive.logpdf({'x': 'green'})), 3./4)
    assert primitive.logpdf({'x': 'blue'}) == -float('inf')
    with pytest.raises(ValueError):
        primitive.incorporate({'x': 'blue'})
    with pytest.raises(ValueError):
        primitive.unincorporate({'x': 'red'})
    samples = primitive.simulate(['x'], N=20)
    assert all(s['x'] in ['red', 'green'] for s in samples)


def test_categorical_requires_domain():
    with pytest.raises(ValueError):
        make_primitive('categorical', {})
    with pytest.raises(ValueError):
        make_primitive('categorical', {'values': []})
    with pytest.raises(ValueError):
        make_primitive('categorical', {'values': ['a', 'a']})


def test_hyper_grids():
    X = [1., 2., 4.]
    grids = cu.stattype_class('normal').construct_hyper_grids(X, n_grid=5)
    assert sorted(grids) == ['m', 'nu', 'r', 's']
    assert all(len(grids[h]) == 5 for h in grids)
    grids = cu.stattype_class('bernoulli').construct_hyper_grids([1, 0, 1])
    assert sorted(grids) == ['alpha', 'beta']
    assert np.allclose(grids['alpha'][[0, -1]], [1., 3.])


def test_get_hypers():
    assert make_primitive('bernoulli', None).get_hypers() == \
        {'alpha': 1., 'beta': 1.}
    assert make_primitive('normal', None).get_hypers() == \
        {'m': 0., 'r': 1., 's': 1., 'nu': 1.}
    poisson = cu.stattype_class('poisson')('x', hypers={'a': 3.})
    assert poisson.get_hypers() == {'a': 3., 'b': 1}
    # Every category of a Column shares the hypers of the Column.
    column = Column('x', 'categorical', hypers={'alpha': 2.5},
        distargs={'k': 3}, rng=gu.gen_rng(0))
    for x in [0, 1, 2, 0, 1]:
        column = column.incorporate({'x': x})
    assert all(column.categories[k].get_hypers() == {'alpha': 2.5}
        for k in column.categories)
    assert column.generate_category().get_hypers() == {'alpha': 2.5}
