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

from math import log

import numpy as np

from scipy.special import gammaln

from colgpm.primitives.distribution import DistributionGpm
from colgpm.utils import general as gu


class Categorical(DistributionGpm):
    """Categorical distribution with symmetric dirichlet prior on
    category weight vector v.

    k := number of values in the domain
    v ~ Symmetric-Dirichlet(alpha/k)
    x ~ Categorical(v)
    http://www.cs.berkeley.edu/~stephentu/writeups/dirichlet-conjugate-prior.pdf

    The domain is given by the distarg `values`, a list of arbitrary hashable
    symbols, or by the distarg `k` for the integer codes 0,...,k-1.
    """

    def __init__(self, var_name, hypers=None, distargs=None, rng=None):
        DistributionGpm.__init__(self, var_name, hypers, distargs, rng)
        # Distargs.
        if distargs is None: distargs = {}
        values = distargs.get('values', None)
        if values is None:
            k = distargs.get('k', None)
            if k is None:
                raise ValueError('Categorical requires distarg `values` or `k`.')
            values = list(range(int(k)))
        self.values = list(values)
        self.k = len(self.values)
        if self.k == 0:
            raise ValueError('Categorical requires a non-empty domain.')
        self.index = {v: i for i, v in enumerate(self.values)}
        if len(self.index) != self.k:
            raise ValueError('Duplicate values in Categorical domain: %s'
                % (self.values,))
        # Sufficient statistics.
        self.N = 0
        self.counts = np.zeros(self.k)
        # Hyperparameters.
        if hypers is None: hypers = {}
        self.alpha = hypers.get('alpha', 1.)
        assert self.alpha > 0

    def incorporate(self, observation):
        DistributionGpm.incorporate(self, observation)
        x = observation[self.var_name]
        if x not in self.index:
            raise ValueError('Invalid Categorical(%s): %s' % (self.values, x))
        self.N += 1
        self.counts[self.index[x]] += 1

    def unincorporate(self, observation):
        DistributionGpm.unincorporate(self, observation)
        x = observation[self.var_name]
        if x not in self.index or self.counts[self.index[x]] == 0:
            raise ValueError('Value not incorporated: %s' % (x,))
        self.N -= 1
        self.counts[self.index[x]] -= 1

    def logpdf(self, targets, constraints=None):
        DistributionGpm.logpdf(self, targets, constraints)
        x = targets[self.var_name]
        if x not in self.index:
            return -float('inf')
        return Categorical.calc_predictive_logp(
            self.index[x], self.N, self.counts, self.alpha)

    @gu.simulate_many
    def simulate(self, targets, constraints=None, N=None):
        DistributionGpm.simulate(self, targets, constraints, N)
        x = gu.pflip(self.counts + self.alpha, array=self.values, rng=self.rng)
        return {self.var_name: x}

    def logpdf_score(self):
        return Categorical.calc_logpdf_marginal(self.N, self.counts, self.alpha)

    ##################
    # NON-GPM METHOD #
    ##################

    def copy(self):
        clone = DistributionGpm.copy(self)
        clone.counts = np.copy(self.counts)
        return clone

    def get_hypers(self):
        return {'alpha': self.alpha}

    def get_suffstats(self):
        return {'N' : self.N, 'counts' : list(self.counts)}

    def get_distargs(self):
        return {'k': self.k, 'values': list(self.values)}

    @staticmethod
    def construct_hyper_grids(X, n_grid=30):
        grids = dict()
        grids['alpha'] = gu.log_linspace(1., float(len(X)), n_grid)
        return grids

    @staticmethod
    def name():
        return 'categorical'

    ##################
    # HELPER METHODS #
    ##################

    @staticmethod
    def calc_predictive_logp(x, N, counts, alpha):
        numer = log(alpha + counts[x])
        denom = log(np.sum(counts) + alpha * len(counts))
        return numer - denom

    @staticmethod
    def calc_logpdf_marginal(N, counts, alpha):
        K = len(counts)
        A = K * alpha
        lg = sum(gammaln(counts[k] + alpha) for k in range(K))
        return gammaln(A) - gammaln(A+N) + lg - K * gammaln(alpha)
