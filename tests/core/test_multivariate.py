import unittest
import numpy as np

from onlinemix import ConstructionError, UnsupportedOperationError
from onlinemix.core.distributions import Distribution
from onlinemix.core.multivariate import MvNormal, Normal1D


class TestMvNormal(unittest.TestCase):

    def setUp(self):
        self.mean = np.array([1.0, 2.0])
        self.cov = np.array([[1.0, 0.2], [0.2, 2.0]])
        self.dist = MvNormal(self.mean, self.cov, rng=np.random.default_rng(123))

    def test_sample_shape(self):
        self.assertEqual(self.dist.sample(10).shape, (10, 2))
        # single draw keeps the row axis
        self.assertEqual(self.dist.sample(1).shape, (1, 2))
        self.assertEqual(self.dist.sample().shape, (1, 2))

    def test_mean_cov(self):
        np.testing.assert_allclose(self.dist.mean(), self.mean)
        np.testing.assert_allclose(self.dist.cov(), self.cov)
        self.assertEqual(self.dist.dimension, 2)

    def test_parameters_are_copied_and_frozen(self):
        mean = np.array([0.0, 0.0])
        dist = MvNormal(mean, np.eye(2))
        mean[0] = 5.0
        self.assertEqual(dist.mean()[0], 0.0)
        with self.assertRaises(ValueError):
            dist.mean()[0] = 1.0

    def test_density_matches_closed_form(self):
        dist = MvNormal(np.zeros(2), 0.01 * np.eye(2))
        p = dist.density(np.zeros(2))
        self.assertEqual(p.shape, (1, 1))
        np.testing.assert_allclose(p[0, 0], 1.0 / (2 * np.pi * 0.01), rtol=1e-12)

    def test_density_shapes(self):
        X = np.zeros((5, 2))
        self.assertEqual(self.dist.density(X).shape, (5, 1))
        self.assertEqual(self.dist.log_density(X).shape, (5, 1))
        with self.assertRaises(ValueError):
            self.dist.density(np.zeros((5, 3)))

    def test_log_density_consistency(self):
        X = np.array([[0.0, 0.0], [1.0, 2.0], [-1.0, 3.0]])
        np.testing.assert_allclose(
            self.dist.log_density(X), np.log(self.dist.density(X)), rtol=1e-10
        )

    def test_diagonal(self):
        dist = MvNormal.diagonal([0.5, -0.5], [0.02, 0.03])
        np.testing.assert_allclose(dist.cov(), np.diag([0.02, 0.03]))

    def test_one_dimensional(self):
        dist = MvNormal([0.0], [[1.0]])
        self.assertEqual(dist.sample(4).shape, (4, 1))
        self.assertEqual(dist.density(np.array([0.0, 1.0, 2.0])).shape, (3, 1))


class TestMvNormalConstructionErrors(unittest.TestCase):

    def test_not_positive_definite(self):
        with self.assertRaises(ConstructionError):
            MvNormal(np.zeros(2), np.array([[1.0, 2.0], [2.0, 1.0]]))

    def test_singular(self):
        with self.assertRaises(ConstructionError):
            MvNormal(np.zeros(2), np.zeros((2, 2)))

    def test_asymmetric(self):
        with self.assertRaises(ConstructionError):
            MvNormal(np.zeros(2), np.array([[1.0, 0.5], [0.0, 1.0]]))

    def test_shape_mismatch(self):
        with self.assertRaises(ConstructionError):
            MvNormal(np.zeros(3), np.eye(2))
        with self.assertRaises(ConstructionError):
            MvNormal(np.zeros((2, 2)), np.eye(2))

    def test_non_finite(self):
        with self.assertRaises(ConstructionError):
            MvNormal(np.array([np.nan, 0.0]), np.eye(2))

    def test_non_positive_variance(self):
        with self.assertRaises(ConstructionError):
            MvNormal.diagonal([0.0, 0.0], [0.01, 0.0])

    def test_is_value_error(self):
        # callers catching ValueError keep working
        with self.assertRaises(ValueError):
            MvNormal(np.zeros(2), -np.eye(2))


class TestNormal1D(unittest.TestCase):

    def setUp(self):
        self.dist = Normal1D(mu=1.5, sigma=2.5, rng=np.random.default_rng(123))

    def test_sample_shape(self):
        self.assertEqual(self.dist.sample(1).shape, (1, 1))
        self.assertEqual(self.dist.sample(10).shape, (10, 1))

    def test_mean_cov(self):
        np.testing.assert_allclose(self.dist.mean(), [1.5])
        np.testing.assert_allclose(self.dist.cov(), [[6.25]])

    def test_density_shapes(self):
        arr1d = np.linspace(-1, 1, 5)
        for fn in (self.dist.density, self.dist.log_density):
            self.assertEqual(fn(0.0).shape, (1, 1))
            self.assertEqual(fn(arr1d).shape, (5, 1))
            self.assertEqual(fn(arr1d.reshape(5, 1)).shape, (5, 1))

    def test_invalid_sigma(self):
        for sigma in (0.0, -1.0, np.inf, np.nan):
            with self.assertRaises(ConstructionError):
                Normal1D(0.0, sigma)


class TestDistributionBase(unittest.TestCase):

    def test_log_density_unsupported_by_default(self):
        class Flat(Distribution):
            def sample(self, n_samples=1):
                return np.zeros((n_samples, 1))

            def density(self, values):
                return np.ones((np.asarray(values).reshape(-1, 1).shape[0], 1))

        with self.assertRaises(UnsupportedOperationError):
            Flat().log_density(np.zeros(3))

    def test_abstract(self):
        with self.assertRaises(TypeError):
            Distribution()


if __name__ == "__main__":
    unittest.main()
