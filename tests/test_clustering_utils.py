import unittest
import numpy as np
from kmeans_elbow.data_processing.clustering_utils import (
    assign_clusters,
    update_centroids,
    compute_wcss,
    fit_kmeans,
)
from kmeans_elbow.exceptions import DimensionMismatch, InvalidClusterCount, EmptyDataset
from tests.conftest import SCENARIO_A, make_blobs


class TestAssignClusters(unittest.TestCase):
    def test_tie_goes_to_lowest_index(self):
        table = np.array([[0.0, 0.0]])
        centroids = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]])
        np.testing.assert_array_equal(assign_clusters(table, centroids), [0])

    def test_idempotent_for_fixed_centroids(self):
        table, _ = make_blobs([[0, 0], [3, 3]], n_per_center=15, spread=1.0)
        centroids = table[[0, 20]]
        first = assign_clusters(table, centroids)
        second = assign_clusters(table, centroids)
        np.testing.assert_array_equal(first, second)


class TestUpdateCentroids(unittest.TestCase):
    def test_means(self):
        table = np.array([[0.0, 0.0], [2.0, 2.0], [10.0, 10.0]])
        new, empty = update_centroids(table, np.array([0, 0, 1]), np.zeros((2, 2)))
        np.testing.assert_array_equal(new, [[1.0, 1.0], [10.0, 10.0]])
        self.assertEqual(empty.size, 0)

    def test_empty_cluster_keeps_centroid(self):
        table = np.array([[0.0, 0.0], [2.0, 2.0]])
        old = np.array([[5.0, 5.0], [-50.0, 99.0]])
        new, empty = update_centroids(table, np.array([0, 0]), old)
        np.testing.assert_array_equal(new[1], [-50.0, 99.0])
        np.testing.assert_array_equal(empty, [1])
        np.testing.assert_array_equal(old[0], [5.0, 5.0])

    def test_empty_cluster_reseed(self):
        table = np.array([[0.0, 0.0], [2.0, 2.0]])
        old = np.array([[5.0, 5.0], [-50.0, 99.0]])
        new, _ = update_centroids(table, np.array([0, 0]), old, empty_cluster='reseed', rng=np.random.default_rng(0))
        self.assertTrue(any((new[1] == row).all() for row in table))


class TestComputeWcss(unittest.TestCase):
    def test_squared_distances(self):
        table = np.array([[0.0, 0.0], [3.0, 4.0]])
        self.assertEqual(compute_wcss(table, np.array([0, 0]), np.array([[0.0, 0.0]])), 25.0)

    def test_label_length_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            compute_wcss(np.zeros((3, 2)), np.array([0, 0]), np.zeros((1, 2)))


class TestFitKMeans(unittest.TestCase):
    def test_scenario_two_pairs(self):
        for seed in range(10):
            res = fit_kmeans(SCENARIO_A, 2, max_iterations=100, random_state=seed)
            self.assertEqual(res.labels[0], res.labels[1])
            self.assertEqual(res.labels[2], res.labels[3])
            self.assertNotEqual(res.labels[0], res.labels[2])
            centroids = res.centroids[np.argsort(res.centroids[:, 0])]
            np.testing.assert_allclose(centroids, [[1.05, 2.05], [5.05, 6.05]], atol=1e-9)
            self.assertTrue(res.converged)

    def test_k_equals_sample_count(self):
        res = fit_kmeans(SCENARIO_A, 4, random_state=3)
        self.assertEqual(res.wcss, 0.0)
        self.assertEqual(sorted(res.labels.tolist()), [0, 1, 2, 3])
        self.assertEqual(sorted(map(tuple, res.centroids.tolist())), sorted(map(tuple, SCENARIO_A)))

    def test_single_cluster_is_mean(self):
        table, _ = make_blobs([[1, 1], [4, 9]], n_per_center=10)
        res = fit_kmeans(table, 1, random_state=0)
        np.testing.assert_allclose(res.centroids[0], table.mean(axis=0))
        np.testing.assert_array_equal(res.labels, np.zeros(len(table), dtype=int))

    def test_all_zero_dataset_terminates(self):
        res = fit_kmeans(np.zeros((6, 2)), 3, max_iterations=50, random_state=0)
        self.assertTrue(res.converged)
        self.assertEqual(res.wcss, 0.0)
        self.assertEqual(len(res.labels), 6)

    def test_deterministic_from_explicit_centroids(self):
        table, _ = make_blobs([[0, 0], [6, 0], [3, 5]], n_per_center=20, spread=1.2, seed=8)
        init = table[[0, 1, 2]]
        a = fit_kmeans(table, 3, initial_centroids=init)
        b = fit_kmeans(table, 3, initial_centroids=init)
        np.testing.assert_array_equal(a.centroids, b.centroids)
        np.testing.assert_array_equal(a.labels, b.labels)
        self.assertEqual(a.n_iter, b.n_iter)

    def test_labels_match_final_centroids(self):
        table, _ = make_blobs([[0, 0], [6, 0], [3, 5]], n_per_center=20, spread=2.0, seed=2)
        res = fit_kmeans(table, 3, max_iterations=1, random_state=0)
        self.assertEqual(res.n_iter, 1)
        np.testing.assert_array_equal(res.labels, assign_clusters(table, res.centroids))
        self.assertAlmostEqual(res.wcss, compute_wcss(table, res.labels, res.centroids))

    def test_zero_iterations_returns_seeds(self):
        res = fit_kmeans(SCENARIO_A, 2, max_iterations=0, random_state=0)
        self.assertEqual(res.n_iter, 0)
        self.assertFalse(res.converged)
        for c in res.centroids:
            self.assertIn(c.tolist(), SCENARIO_A)

    def test_stranded_centroid_is_kept(self):
        table = np.array([[0.0], [1.0], [2.0]])
        res = fit_kmeans(table, 2, initial_centroids=[[1.0], [100.0]])
        np.testing.assert_array_equal(res.centroids, [[1.0], [100.0]])
        np.testing.assert_array_equal(res.labels, [0, 0, 0])
        self.assertTrue(res.converged)

    def test_stranded_centroid_warns_once(self):
        table = np.array([[0.0], [1.0], [2.0], [10.0], [11.0]])
        # centroid 2 never wins a sample while the other two keep moving
        with self.assertLogs("kmeans_elbow.data_processing.clustering_utils", level="WARNING") as logs:
            res = fit_kmeans(table, 3, initial_centroids=[[0.0], [2.0], [500.0]])
        self.assertGreater(res.n_iter, 1)
        self.assertEqual(len(logs.records), 1)

    def test_reseed_moves_stranded_centroid(self):
        table = np.array([[0.0], [1.0], [2.0]])
        res = fit_kmeans(table, 2, initial_centroids=[[1.0], [100.0]], empty_cluster='reseed', random_state=0)
        self.assertLessEqual(res.centroids.max(), 2.0)

    def test_tolerance_variant(self):
        table, _ = make_blobs([[0, 0], [8, 8]], n_per_center=30, spread=1.0, seed=6)
        res = fit_kmeans(table, 2, random_state=1, tol=1e-3)
        self.assertTrue(res.converged)
        self.assertEqual(len(np.unique(res.labels)), 2)

    def test_recovers_blobs(self):
        table, truth = make_blobs([[0, 0], [10, 10], [0, 10]], n_per_center=25, spread=0.3, seed=4)
        res = fit_kmeans(table, 3, random_state=11, weighting='squared')
        for t in range(3):
            self.assertEqual(len(np.unique(res.labels[truth == t])), 1)

    def test_invalid_k(self):
        with self.assertRaises(InvalidClusterCount):
            fit_kmeans(SCENARIO_A, 5)
        with self.assertRaises(InvalidClusterCount):
            fit_kmeans(SCENARIO_A, 0)

    def test_empty_table(self):
        with self.assertRaises(EmptyDataset):
            fit_kmeans([], 1)

    def test_initial_centroids_shape(self):
        with self.assertRaises(DimensionMismatch):
            fit_kmeans(SCENARIO_A, 2, initial_centroids=[[1.0, 2.0, 3.0], [0.0, 0.0, 0.0]])

    def test_unknown_empty_cluster_policy(self):
        with self.assertRaises(ValueError):
            fit_kmeans(SCENARIO_A, 2, empty_cluster='drop')


if __name__ == '__main__':
    unittest.main()
