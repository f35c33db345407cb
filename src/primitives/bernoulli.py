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

from scipy.special import betaln

from colgpm.primitives.distribution import DistributionGpm
from colgpm.utils import general as gu


class Bernoulli(DistributionGpm):
    """Bernoulli distribution with beta prior on bias theta.

    theta ~ Beta(alpha, beta)
    x ~ Bernoulli(theta)

    Observations are booleans; 0 and 1 are accepted as False and True.
    """

    def __init__(self, var_name, hypers=None, distargs=None, rng=None):
        DistributionGpm.__init__(self, var_name, hypers, distargs, rng)
        # Sufficent statistics.
        self.N = 0
        self.x_sum = 0
        # Hyperparameters.
        if hypers is None: hypers = {}
        self.alpha = hypers.get('alpha', 1.)
        self.beta = hypers.get('beta', 1.)
        assert self.alpha > 0
        assert self.beta > 0

    def incorporate(self, observation):
        DistributionGpm.incorporate(self, observation)
        x = observation[self.var_name]
        if not Bernoulli.validate(x):
            raise ValueError('Invalid Bernoulli: %s' % str(x))
        self.N += 1
        self.x_sum += int(x)

    def unincorporate(self, observation):
        DistributionGpm.unincorporate(self, observation)
        x = observation[self.var_name]
        if not Bernoulli.validate(x):
            raise ValueError('Invalid Bernoulli: %s' % str(x))
        if (x and self.x_sum == 0) or (not x and self.N == self.x_sum):
            raise ValueError('Value not incorporated: %s' % str(x))
        self.N -= 1
        self.x_sum -= int(x)

    def logpdf(self, targets, constraints=None):
        DistributionGpm.logpdf(self, targets, constraints)
        x = targets[self.var_name]
        if not Bernoulli.validate(x):
            return -float('inf')
        return Bernoulli.calc_predictive_logp(
            x, self.N, self.x_sum, self.alpha, self.beta)

    @gu.simulate_many
    def simulate(self, targets, constraints=None, N=None):
        DistributionGpm.simulate(self, targets, constraints, N)
        p0 = Bernoulli.calc_predictive_logp(
            0, self.N, self.x_sum, self.alpha, self.beta)
        p1 = Bernoulli.calc_predictive_logp(
            1, self.N, self.x_sum, self.alpha, self.beta)
        x = gu.log_pflip([p0, p1], array=[False, True], rng=self.rng)
        return {self.var_name: x}

    def logpdf_score(self):
        return Bernoulli.calc_logpdf_marginal(
            self.N, self.x_sum, self.alpha, self.beta)

    ##################
    # NON-GPM METHOD #
    ##################

    def get_hypers(self):
        return {'alpha': self.alpha, 'beta': self.beta}

    def get_suffstats(self):
        return {'N': self.N, 'x_sum': self.x_sum}

    def get_distargs(self):
        return {'k': 2}

    @staticmethod
    def construct_hyper_grids(X, n_grid=30):
        grids = dict()
        grids['alpha'] = gu.log_linspace(1., float(len(X)), n_grid)
        grids['beta'] = gu.log_linspace(1., float(len(X)), n_grid)
        return grids

    @staticmethod
    def name():
        return 'bernoulli'

    ##################
    # HELPER METHODS #
    ##################

    @staticmethod
    def validate(x):
        return isinstance(x, (bool, int, np.bool_, np.integer)) \
            and x in (0, 1)

    @staticmethod
    def calc_predictive_logp(x, N, x_sum, alpha, beta):
        log_denom = log(N + alpha + beta)
        if x:
            return log(x_sum + alpha) - log_denom
        else:
            return log(N - x_sum + beta) - log_denom

    @staticmethod
    def calc_logpdf_marginal(N, x_sum, alpha, beta):
        return betaln(x_sum + alpha, N - x_sum + beta) - betaln(alpha, beta)
