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

from math import log

import pandas as pd

from colgpm.gpm import Gpm
from colgpm.utils import config as cu
from colgpm.utils import general as gu


class _Aux(object):
    """Key of the auxiliary category, i.e. a new table of the CRP."""

    def __repr__(self):
        return 'AUX'

AUX = _Aux()


def crp_weights(column, alpha):
    """Return the CRP predictive over the categories of `column`.

    The result maps each category key to the log probability of joining that
    category, and AUX to the log probability of creating a new category.
    """
    weights = {k: log(column.categories[k].N) for k in column.categories}
    weights[AUX] = log(alpha)
    return gu.log_normalize(weights)


class Column(Gpm):
    """Gpm representing a single variable as a CRP mixture of primitive Gpms.

    Each category of the CRP partition owns a DistributionGpm, built from the
    stattype, hypers and distargs of the Column. The ledger `assignments` maps
    each incorporated value to the number of its occurrences in each category,
    so that a value can be unincorporated without knowing its category.

    A Column is never modified in place: `incorporate`, `unincorporate` and
    their CrossCat variants return a new Column and leave the receiver
    unchanged. Categories whose statistics are untouched by an operation are
    shared between the old and the new Column, the others are copied.
    """

    def __init__(self, var_name, stattype, hypers=None, distargs=None,
            alpha=None, rng=None, categories=None, assignments=None,
            hyper_grids=None, data=None):
        """Column constructor creates an empty Column by default.

        Parameters
        ----------
        var_name : str
            Name of the modeled variable.
        stattype : str
            DistributionGpm name see `colgpm.utils.config`.
        hypers : dict, optional
            Shared hypers of the primitive Gpm of every category.
        distargs : dict, optional.
            Distargs appropriate for the stattype.
        alpha : float, optional.
            Concentration of the CRP, defaults to 1.
        rng : np.random.RandomState, optional.
            Source of entropy, shared with every category.
        categories : dict, optional
            Mapping of category key to a non-empty DistributionGpm.
        assignments : dict, optional
            Mapping of value to a mapping of category key to count.
        hyper_grids : dict, optional
            Hyperparameter grids, computed once from the initial data.
        data : dict, optional
            Mapping of rowid to value, required by the CrossCat API.
        """
        # -- Seed --------------------------------------------------------------
        self.rng = gu.gen_rng() if rng is None else rng

        # -- Identifier --------------------------------------------------------
        self.var_name = var_name

        # -- DistributionGpms --------------------------------------------------
        self.model = cu.stattype_class(stattype)
        self.stattype = stattype
        self.distargs = dict(distargs) if distargs is not None else {}

        # -- Hyperparameters ---------------------------------------------------
        self.hypers = dict(hypers) if hypers is not None else {}
        self.hyper_grids = dict(hyper_grids) if hyper_grids is not None else {}
        self.alpha = cu.DEFAULT_ALPHA if alpha is None else alpha
        if not self.alpha > 0:
            raise ValueError('CRP concentration must be positive: %s.'
                % (self.alpha,))

        # -- Categories and Assignments ----------------------------------------
        self.categories = dict(categories) if categories is not None else {}
        self.assignments = {}
        if assignments is not None:
            self.assignments = {x: dict(assignments[x]) for x in assignments}
        self.data = dict(data) if data is not None else None
        self.next_category = 0
        if any(self.categories[k].N == 0 for k in self.categories):
            raise ValueError('Column cannot hold empty categories.')

        # Fail on invalid hypers or distargs before the first incorporate.
        self.generate_category()

    # --------------------------------------------------------------------------
    # Observe

    def incorporate(self, observation):
        x = observation.get(self.var_name)
        if gu.is_missing(x):
            return self
        weights = crp_weights(self, self.alpha)
        k = gu.log_pflip_dict(weights, rng=self.rng)
        column = self._clone()
        if k is AUX:
            k = column._fresh_category()
        column._incorporate_into(x, k)
        return column

    def unincorporate(self, observation):
        x = observation.get(self.var_name)
        if gu.is_missing(x):
            return self
        bag = self.assignments.get(x)
        if not bag:
            raise ValueError('Value not incorporated: %r.' % (x,))
        keys = list(bag)
        k = keys[self.rng.randint(len(keys))]
        column = self._clone()
        column._unincorporate_from(x, k)
        return column

    # --------------------------------------------------------------------------
    # logpdf score

    def logpdf_score(self):
        # Weighted by category sizes, without a new category.
        if not self.categories:
            return 0
        weights = {k: log(self.categories[k].N) for k in self.categories}
        scores = {k: self.categories[k].logpdf_score() for k in self.categories}
        return gu.logsumexp(
            gu.merged_sum(gu.log_normalize(weights), scores).values())

    # --------------------------------------------------------------------------
    # logpdf

    def logpdf(self, targets, constraints=None):
        x = targets.get(self.var_name)
        if gu.is_missing(x):
            return 0
        constraint = constraints.get(self.var_name) if constraints else None
        if not gu.is_missing(constraint):
            return 0 if constraint == x else -float('inf')
        target = {self.var_name: x}
        weights = crp_weights(self, self.alpha)
        logps = {k: self.categories[k].logpdf(target) for k in self.categories}
        logps[AUX] = self.generate_category().logpdf(target)
        return gu.logsumexp(gu.merged_sum(weights, logps).values())

    # --------------------------------------------------------------------------
    # Simulate

    def simulate(self, targets, constraints=None, N=None):
        constraint = constraints.get(self.var_name) if constraints else None
        if self.var_name not in targets:
            sample = lambda: {}
        elif not gu.is_missing(constraint):
            sample = lambda: {self.var_name: constraint}
        else:
            # The auxiliary category is shared by all N samples.
            categories = dict(self.categories)
            categories[AUX] = self.generate_category()
            weights = crp_weights(self, self.alpha)
            def sample():
                k = gu.log_pflip_dict(weights, rng=self.rng)
                return categories[k].simulate([self.var_name])
        if N is None:
            return sample()
        return [sample() for _i in range(N)]

    # --------------------------------------------------------------------------
    # CrossCat

    def crosscat_incorporate(self, observation, category, rowid):
        """Incorporate `observation` of `rowid` into the given `category`.

        The category is chosen by the caller rather than by the CRP. A missing
        value leaves the Column unchanged. A Column holding observations must
        record its data.
        """
        x = observation.get(self.var_name)
        if gu.is_missing(x):
            return self
        if self.data is None and self.categories:
            raise ValueError('Column %r does not record its data.'
                % (self.var_name,))
        if self.data is not None and rowid in self.data:
            raise ValueError('rowid already incorporated: %r.' % (rowid,))
        column = self._clone()
        if column.data is None:
            column.data = {}
        column._incorporate_into(x, category)
        column.data[rowid] = x
        return column

    def crosscat_unincorporate(self, category, rowid):
        """Unincorporate the value of `rowid` from the given `category`.

        A rowid without recorded value, i.e. whose value was missing, leaves
        the Column unchanged. The Column must record its data.
        """
        if self.data is None:
            raise ValueError('Column %r does not record its data.'
                % (self.var_name,))
        if rowid not in self.data:
            return self
        column = self._clone()
        column._unincorporate_from(column.data.pop(rowid), category)
        return column

    # --------------------------------------------------------------------------
    # Accessors

    def generate_category(self):
        """Return an empty DistributionGpm for a new category."""
        return self.model(
            self.var_name, hypers=self.hypers, distargs=self.distargs,
            rng=self.rng)

    def counts(self):
        return {k: self.categories[k].N for k in self.categories}

    def n_observations(self):
        return sum(self.categories[k].N for k in self.categories)

    def get_distargs(self):
        return dict(self.distargs)

    def get_suffstats(self):
        return {str(k): self.categories[k].get_suffstats()
            for k in self.categories}

    def name(self):
        return self.model.name()

    # --------------------------------------------------------------------------
    # Internal

    def _clone(self):
        clone = copy.copy(self)
        clone.categories = dict(self.categories)
        clone.assignments = dict(self.assignments)
        clone.data = dict(self.data) if self.data is not None else None
        return clone

    def _fresh_category(self):
        k = self.next_category
        while k in self.categories:
            k += 1
        self.next_category = k + 1
        return k

    def _incorporate_into(self, x, k):
        category = self.categories.get(k)
        category = self.generate_category() if category is None \
            else category.copy()
        category.incorporate({self.var_name: x})
        self.categories[k] = category
        bag = dict(self.assignments.get(x, {}))
        bag[k] = bag.get(k, 0) + 1
        self.assignments[x] = bag

    def _unincorporate_from(self, x, k):
        bag = dict(self.assignments.get(x, {}))
        if bag.get(k, 0) == 0:
            raise ValueError('Value %r not incorporated in category %r.'
                % (x, k))
        bag[k] -= 1
        if bag[k] == 0:
            del bag[k]
        if bag:
            self.assignments[x] = bag
        else:
            del self.assignments[x]
        category = self.categories[k].copy()
        category.unincorporate({self.var_name: x})
        if category.N == 0:
            del self.categories[k]
        else:
            self.categories[k] = category

    def _repartition(self, latents, data):
        """Return a Column with categories rebuilt from `data` and `latents`."""
        y = latents.get('y', {})
        column = self._clone()
        if latents.get('alpha') is not None:
            column.alpha = latents['alpha']
        column.categories = {
            k: column.generate_category() for k in latents.get('counts', {})}
        column.assignments = {}
        for rowid, x in data.items():
            if gu.is_missing(x):
                continue
            if rowid not in y:
                raise ValueError('No category assignment for rowid: %r.'
                    % (rowid,))
            k = y[rowid]
            if k not in column.categories:
                column.categories[k] = column.generate_category()
            column.categories[k].incorporate({self.var_name: x})
            bag = column.assignments.setdefault(x, {})
            bag[k] = bag.get(k, 0) + 1
        # Categories with no observed value are not kept.
        column.categories = {k: column.categories[k]
            for k in column.categories if column.categories[k].N > 0}
        return column


def rowid_data(data):
    """Return `data` as a dict mapping rowid to value.

    `data` is either a dict, a pandas.Series indexed by rowid, or a sequence
    whose positions are the rowids.
    """
    if isinstance(data, pd.Series):
        return data.to_dict()
    if isinstance(data, dict):
        return dict(data)
    return dict(enumerate(data))


def construct_column_from_latents(var_name, stattype, hypers, latents, data,
        options=None, crosscat=False, rng=None):
    """Constructor for a Column, given data for the column and latent
    assignments of data to their respective categories. Used to restore a
    Column after CrossCat inference elsewhere.

    Parameters
    ----------
    var_name : str
        Name of the variable contained in the column.
    stattype : str
        Statistical type of the variable, e.g. 'bernoulli'.
    hypers : dict
        Hyperparameters of the column, shared by all categories.
    latents : dict
        Row-category assignments, of the form

            {'alpha': float,            Concentration of the CRP.
             'counts': {k: int},        Size of each category k.
             'y': {rowid: k}}           Category of each rowid.

    data : dict, pandas.Series, or list
        Values of the column by rowid. A list is indexed by position. Missing
        values are None or nan.
    options : dict, optional
        Mapping of variable name to the list of values the variable may
        take. Used by the categorical stattype; when absent the values are
        those observed in `data`, in order of appearance.
    crosscat : bool, optional
        Keep `data` in the Column, as required by the CrossCat API.
    rng : np.random.RandomState, optional.
        Source of entropy.
    """
    data = rowid_data(data)
    observed_data = {r: data[r] for r in data if not gu.is_missing(data[r])}
    observed = list(observed_data.values())
    model = cu.stattype_class(stattype)
    distargs = {}
    if model.name() == 'categorical':
        values = (options or {}).get(var_name)
        if values is None:
            if not observed:
                raise ValueError('Categorical column %r observes no value, '
                    'its values must be given in options.' % (var_name,))
            values = pd.unique(pd.Series(observed, dtype=object))
        distargs = {'values': list(values)}
    # The hyper grids depend only on the initial data, compute them once.
    hyper_grids = model.construct_hyper_grids(observed, n_grid=cu.N_GRID) \
        if observed else {}
    column = Column(
        var_name, stattype, hypers=hypers, distargs=distargs,
        alpha=latents.get('alpha'), rng=rng, hyper_grids=hyper_grids,
        data=observed_data if crosscat else None)
    return column._repartition(latents, observed_data)


def update_column(column, latents):
    """Return `column` with its categories rebuilt from new latents.

    Used after the partition of the view containing the column was
    transitioned, e.g. by a CrossCat sweep. The column must hold its data.
    """
    if column.data is None:
        raise ValueError('Column %r does not record its data.'
            % (column.var_name,))
    return column._repartition(latents, column.data)
