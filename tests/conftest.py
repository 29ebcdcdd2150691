import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from decision_tree import DecisionTree
from sample import FlowerClass, Sample

# SL separates setosa from the rest, PL separates versicolor from virginica, SW and PW are constant.
NINE_FLOWERS = """\
1.0,3.0,2.1,1.0,0
1.1,3.0,3.5,1.0,0
1.2,3.0,5.1,1.0,0
5.0,3.0,2.0,1.0,1
5.2,3.0,2.2,1.0,1
5.4,3.0,2.4,1.0,1
5.1,3.0,5.0,1.0,2
5.3,3.0,5.2,1.0,2
5.5,3.0,5.4,1.0,2
"""


def make_sample(sl, sw, pl, pw, code):
    return Sample((sl, sw, pl, pw), FlowerClass(code))


@pytest.fixture
def nine_samples():
    samples = []
    for line in NINE_FLOWERS.splitlines():
        *values, code = line.split(",")
        samples.append(make_sample(*map(float, values), int(code)))
    return samples


@pytest.fixture
def random_samples():
    """Sixty noisy samples whose classes overlap on every feature."""
    rng = np.random.default_rng(7)
    samples = []
    for code in FlowerClass:
        centre = np.array([5.0, 3.0, 1.5, 0.3]) + code * np.array([0.8, -0.2, 2.0, 0.8])
        for values in rng.normal(centre, 0.6, size=(20, 4)):
            samples.append(Sample(tuple(np.round(np.abs(values), 1)), code))
    return samples


@pytest.fixture
def seeded_tree():
    return DecisionTree(rng=np.random.default_rng(0))
