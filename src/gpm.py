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

class Gpm(object):
    """Interface for generative population models over a single variable.

    Generative population models provide a computational abstraction for
    probability densities and stochastic samplers. Every implementation
    models exactly one variable, identified by `var_name`, and is backed by
    sufficient statistics of the observations incorporated into it.
    """

    def incorporate(self, observation):
        """Record an observation into the dataset.

        observation : dict{str:value}
            The observed value, keyed by the name of the modeled variable.
            The value must be type-matched based on the statistical data type
            of that variable.
        """
        raise NotImplementedError

    def unincorporate(self, observation):
        """Remove one previously incorporated occurrence of `observation`."""
        raise NotImplementedError

    def logpdf(self, targets, constraints=None):
        """Return the density of `targets` given `constraints`.

            Pr[targets | constraints]

        targets : dict{str:value}
            Values of the variables whose density is requested. Variables
            not modeled by the Gpm are ignored.

        constraints : dict{str:value}, optional
            Values of the variables serving as probabilistic conditions.
            Variables not modeled by the Gpm are ignored.
        """
        raise NotImplementedError

    def simulate(self, targets, constraints=None, N=None):
        """Return N iid samples of `targets` given `constraints`.

            (X_1, X_2, ... X_N) ~iid Pr[targets | constraints]

        targets : list<str>
            List of variables to simulate.

        constraints : dict{str:value}, optional
            Values of the variables serving as probabilistic conditions.

        N : int, (optional, default None)
            Number of samples to return. If None, returns a single sample as
            a dictionary with size len(targets), where each key is a variable
            and each value the sample for that variable. If `N` is not None,
            a size N list of dictionaries will be returned, each
            corresponding to a single sample.
        """
        raise NotImplementedError

    def logpdf_score(self):
        """Return the log marginal likelihood of all observations."""
        raise NotImplementedError
