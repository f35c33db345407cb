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

import copy

from colgpm.gpm import Gpm
from colgpm.utils import general as gu


class DistributionGpm(Gpm):
    """Interface for generative population models representing univariate
    probability distribution.

    A typical DistributionGpm will have:
    - Sufficient statistics T, for the observed data X.
    - Parameters Q, for the likelihood p(X|Q).
    - Hyperparameters H, for the prior p(Q|H).

    All DistributionGpms here are collapsed: the parameters Q are integrated
    out, and the sufficient statistics T together with the hyperparameters H
    determine every query. The statistics always include the number N of
    incorporated observations. Raw observations are not retained, so
    `unincorporate` removes a value rather than a row.
    """

    def __init__(self, var_name, hypers=None, distargs=None, rng=None):
        self.var_name = var_name
        self.N = 0
        self.rng = gu.gen_rng() if rng is None else rng

    def incorporate(self, observation):
        assert self.var_name in observation

    def unincorporate(self, observation):
        assert self.var_name in observation
        if self.N <= 0:
            raise ValueError('Cannot unincorporate from empty %s: %s'
                % (self.name(), observation[self.var_name]))

    def logpdf(self, targets, constraints=None):
        assert not constraints
        assert self.var_name in targets

    def simulate(self, targets, constraints=None, N=None):
        assert not constraints
        assert list(targets) == [self.var_name]

    ##################
    # NON-GPM METHOD #
    ##################

    def copy(self):
        """Return an independent DistributionGpm with identical hypers and
        sufficient statistics, sharing the source of entropy."""
        return copy.copy(self)

    def get_hypers(self):
        """Return a dictionary of hyperparameters."""
        raise NotImplementedError

    def get_suffstats(self):
        """Return a dictionary of sufficient statistics."""
        raise NotImplementedError

    def get_distargs(self):
        """Return a dictionary of distribution arguments."""
        raise NotImplementedError

    @staticmethod
    def construct_hyper_grids(X, n_grid=30):
        """Return a dict<str,list>, where grids['hyper'] is a list of
        grid points for the binned hyperparameter distribution.

        This method is included in the interface since each GPM knows the
        valid values of its hypers, and may also use data-dependent
        heuristics from X to create better grids.
        """
        raise NotImplementedError

    @staticmethod
    def name():
        """Return the name of the distribution as a string."""
        raise NotImplementedError
