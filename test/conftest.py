"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.
"""

import numpy as np
import pytest

from slidefit.data import Cluster


def make_cluster(x, z, energy=None):
    """Builds a cluster from the x and z coordinates of its hits."""
    x, z = np.asarray(x, dtype=np.float64), np.asarray(z, dtype=np.float64)
    points = np.column_stack([x, np.zeros_like(x), z])

    return Cluster(points=points, depositions=energy)


@pytest.fixture(name="straight_cluster")
def fixture_straight_cluster():
    """Straight track along z at constant x, one hit per pseudo-layer."""
    z = np.arange(200) * 0.3

    return make_cluster(np.full_like(z, 0.5), z)


@pytest.fixture(name="sloped_cluster")
def fixture_sloped_cluster():
    """Straight track with x = 0.2 * z + 1."""
    z = np.arange(200) * 0.3

    return make_cluster(0.2 * z + 1.0, z)


@pytest.fixture(name="right_angle_cluster")
def fixture_right_angle_cluster():
    """Track along z up to (0, 0, 30), then along x up to (30, 0, 30)."""
    leg = np.arange(300) * 0.1
    x = np.concatenate([np.zeros(300), leg + 0.1])
    z = np.concatenate([leg, np.full(300, 30.0)])

    return make_cluster(x, z)


@pytest.fixture(name="kinked_cluster")
def fixture_kinked_cluster():
    """Track along z up to (0, 0, 30), then kinked by 30 degrees."""
    leg = np.arange(300) * 0.1
    angle = np.radians(30.0)
    x = np.concatenate([np.zeros(300), np.sin(angle) * (leg + 0.1)])
    z = np.concatenate([leg, 30.0 + np.cos(angle) * (leg + 0.1)])

    return make_cluster(x, z)


@pytest.fixture(name="semicircle_cluster")
def fixture_semicircle_cluster():
    """Half circle of radius 20 which folds back in x."""
    theta = np.linspace(-np.pi / 2, np.pi / 2, 2000)

    return make_cluster(20.0 * np.cos(theta), 20.0 * np.sin(theta))


@pytest.fixture(name="zigzag_cluster")
def fixture_zigzag_cluster():
    """Track along z whose hits alternate by +/- 0.1 in x."""
    z = np.arange(200) * 0.3
    x = 0.1 * (-1.0) ** np.arange(200)

    return make_cluster(x, z)


@pytest.fixture(name="cluster_factory")
def fixture_cluster_factory():
    """Returns the function which builds a cluster from x and z coordinates."""
    return make_cluster
