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

import importlib


# Concentration of the CRP of a Column when none is given.
DEFAULT_ALPHA = 1.

# Number of points in each hyperparameter grid.
N_GRID = 30

stattype_class_lookup = {
    'bernoulli'         : ('colgpm.primitives.bernoulli', 'Bernoulli'),
    'categorical'       : ('colgpm.primitives.categorical', 'Categorical'),
    'gaussian'          : ('colgpm.primitives.normal', 'Normal'),
    'normal'            : ('colgpm.primitives.normal', 'Normal'),
    'poisson'           : ('colgpm.primitives.poisson', 'Poisson'),
}

def stattype_class(stattype):
    """Return class object for initializing a named primitive Gpm."""
    if not stattype:
        raise ValueError('Specify a stattype!')
    if stattype not in stattype_class_lookup:
        raise ValueError('Unknown stattype: %s.' % (stattype,))
    modulename, classname = stattype_class_lookup[stattype]
    mod = importlib.import_module(modulename)
    return getattr(mod, classname)

def valid_stattype(stattype):
    """Returns True if stattype names a known primitive Gpm."""
    return stattype in stattype_class_lookup

def all_stattypes():
    """Returns a list of all known stattypes."""
    return list(stattype_class_lookup.keys())
