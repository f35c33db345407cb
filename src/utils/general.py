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

import math
import warnings

from math import log

import numpy as np
import pandas as pd

from colgpm.gpm import Gpm
GPM_SIMULATE_NARGS = Gpm.simulate.__code__.co_argcount


def gen_rng(seed=None):
    if seed is None:
        seed = np.random.randint(low=1, high=2**31)
    return np.random.RandomState(seed)

def is_missing(x):
    """True if x denotes a missing value (None or nan)."""
    if x is None:
        return True
    try:
        return bool(pd.isnull(x))
    except (TypeError, ValueError):
        return False

def logsumexp(array):
    # https://github.com/probcomp/bayeslite/blob/master/src/math_util.py
    array = list(array)
    if len(array) == 0:
        return float('-inf')
    m = max(array)

    # m = +inf means addends are all +inf, hence so are sum and log.
    # m = -inf means addends are all zero, hence so is sum, and log is
    # -inf.  But if +inf and -inf are among the inputs, or if input is
    # NaN, let the usual computation yield a NaN.
    if math.isinf(m) and min(array) != -m and \
       all(not math.isnan(a) for a in array):
        return m

    # Since m = max{a_0, a_1, ...}, it follows that a <= m for all a,
    # so a - m <= 0; hence exp(a - m) is guaranteed not to overflow.
    return m + math.log(sum(math.exp(a - m) for a in array))

def log_normalize(logp):
    """Normalizes log probabilities.

    A mapping of key to log weight is normalized into a mapping with the same
    keys; any other sequence is normalized into a numpy array.
    """
    if isinstance(logp, dict):
        Z = logsumexp(list(logp.values()))
        return {k: logp[k] - Z for k in logp}
    return np.subtract(logp, logsumexp(logp))

def normalize(p):
    """Normalizes a np array of probabilites."""
    return np.asarray(p, dtype=float) / sum(p)

def merged_sum(left, right):
    """Pointwise sum of two log-space mappings over the same keys."""
    if set(left) != set(right):
        raise ValueError('Cannot merge mappings with different keys: %s, %s'
            % (sorted(map(repr, left)), sorted(map(repr, right))))
    return {k: left[k] + right[k] for k in left}

def logp_crp_fresh(N, Nk, alpha, m=1):
    """Compute the CRP probabilities for a fresh customer i=N+1, with
    table counts Nk, total customers N=sum(Nk), and m auxiliary tables."""
    log_crp_numer = np.log(list(Nk) + [alpha/m]*m)
    logp_crp_denom = log(N + alpha)
    return log_crp_numer - logp_crp_denom

def log_pflip(logp, array=None, size=None, rng=None):
    """Categorical draw from a vector logp of log probabilities."""
    p = np.exp(log_normalize(logp))
    return pflip(p, array=array, size=size, rng=rng)

def log_pflip_dict(logps, rng=None):
    """Categorical draw of a key from a mapping of key to log probability."""
    keys = list(logps)
    return log_pflip([logps[k] for k in keys], array=keys, rng=rng)

def pflip(p, array=None, size=None, rng=None):
    """Categorical draw from a vector p of probabilities.

    The draw is over indexes into `array`, so entries of `array` may be
    arbitrary objects and are returned as is.
    """
    if array is None:
        array = list(range(len(p)))
    if len(p) == 1:
        return array[0] if size is None else [array[0]] * size
    if rng is None:
        rng = gen_rng()
    p = normalize(p)
    if 10.**(-8.) < math.fabs(1.-sum(p)):
        warnings.warn('pflip probability vector sums to %f.' % sum(p))
    index = rng.choice(len(p), size=size, p=p)
    if size is None:
        return array[index]
    return [array[i] for i in index]

def log_linspace(a, b, n):
    """linspace from a to b with n entries over log scale."""
    return np.exp(np.linspace(log(a), log(b), n))

def simulate_crp(N, alpha, rng=None):
    """Generates random N-length partition from the CRP with parameter alpha."""
    if rng is None:
        rng = gen_rng()

    assert N > 0 and alpha > 0.
    alpha = float(alpha)

    partition = [0]*N
    Nk = [1]
    for i in range(1, N):
        K = len(Nk)
        ps = np.zeros(K+1)
        for k in range(K):
            ps[k] = float(Nk[k])
        ps[K] = alpha
        ps /= (float(i) - 1 + alpha)
        assignment = pflip(ps, rng=rng)
        if assignment == K:
            Nk.append(1)
        elif assignment < K:
            Nk[assignment] += 1
        else:
            raise ValueError("Invalid assignment: %i, max=%i" % (assignment, K))
        partition[i] = assignment

    assert max(partition)+1 == len(Nk)
    assert len(partition) == N
    assert sum(Nk) == N
    return partition

def simulate_many(simulate):
    """Simple wrapper for a gpm `simulate` method to call itself N times."""
    def simulate_wrapper(*args, **kwargs):
        if len(args) == GPM_SIMULATE_NARGS:
            N = args[-1]
        else:
            N = kwargs.get('N', None)
        if N is None:
            return simulate(*args, **kwargs)
        return [simulate(*args, **kwargs) for _i in range(N)]
    return simulate_wrapper
