import unittest

import numpy as np

from crngen.errors import InfeasibleParametersError, InvalidParameterError
from crngen.generators import (
    barabasi_albert,
    erdos_renyi,
    pan_sinha,
    simple_modular,
    watts_strogatz,
)
from crngen.topology import EdgeFlags, HierarchicalModules, SimpleModules


class FlagAssertions:
    def assertFlagCompliant(self, edges, n, flags):
        for u, v in edges:
            self.assertTrue(0 <= u < n and 0 <= v < n)
            if not flags.self_loop:
                self.assertNotEqual(u, v)
            if not flags.directed:
                self.assertLessEqual(u, v)
        if not flags.allow_multiple:
            self.assertEqual(len(set(edges)), len(edges))


class TestErdosRenyi(FlagAssertions, unittest.TestCase):
    def test_default_flags(self):
        flags = EdgeFlags()
        edges = erdos_renyi(np.random.default_rng(1), 10, 15, flags)
        self.assertEqual(len(edges), 15)
        self.assertFlagCompliant(edges, 10, flags)

    def test_directed(self):
        flags = EdgeFlags(directed=True)
        edges = erdos_renyi(np.random.default_rng(2), 10, 60, flags)
        self.assertEqual(len(edges), 60)
        self.assertFlagCompliant(edges, 10, flags)
        self.assertTrue(any(u > v for u, v in edges))

    def test_multiple_and_self_loops(self):
        flags = EdgeFlags(allow_multiple=True, self_loop=True)
        edges = erdos_renyi(np.random.default_rng(3), 3, 50, flags)
        self.assertEqual(len(edges), 50)
        self.assertFlagCompliant(edges, 3, flags)

    def test_complete_graph_is_reached(self):
        edges = erdos_renyi(np.random.default_rng(4), 6, 15)
        expected = {(u, v) for u in range(6) for v in range(u + 1, 6)}
        self.assertEqual(set(edges), expected)

    def test_infeasible_edge_count(self):
        with self.assertRaises(InfeasibleParametersError):
            erdos_renyi(np.random.default_rng(5), 5, 11)

    def test_self_loops_extend_capacity(self):
        flags = EdgeFlags(self_loop=True)
        edges = erdos_renyi(np.random.default_rng(5), 3, 6, flags)
        self.assertEqual(len(edges), 6)
        self.assertEqual(len(set(edges)), 6)

    def test_negative_counts(self):
        with self.assertRaises(InvalidParameterError):
            erdos_renyi(np.random.default_rng(6), -1, 2)

    def test_zero_edges(self):
        self.assertEqual(erdos_renyi(np.random.default_rng(6), 4, 0), [])

    def test_seeded_runs_are_identical(self):
        first = erdos_renyi(np.random.default_rng(42), 30, 80)
        second = erdos_renyi(np.random.default_rng(42), 30, 80)
        self.assertEqual(first, second)


class TestBarabasiAlbert(FlagAssertions, unittest.TestCase):
    def test_edge_count_and_flags(self):
        flags = EdgeFlags()
        edges = barabasi_albert(np.random.default_rng(1), 50, 100, flags)
        self.assertEqual(len(edges), 100)
        self.assertFlagCompliant(edges, 50, flags)

    def test_sparse_network(self):
        edges = barabasi_albert(np.random.default_rng(2), 20, 10)
        self.assertEqual(len(edges), 10)
        self.assertIn((0, 1), edges)

    def test_directed_edges_point_to_older_nodes(self):
        flags = EdgeFlags(directed=True)
        edges = barabasi_albert(np.random.default_rng(3), 40, 40, flags)
        self.assertEqual(len(edges), 40)
        self.assertFlagCompliant(edges, 40, flags)
        # after the seed path every node attaches to an existing node
        self.assertTrue(all(u > v for u, v in edges[1:]))

    def test_dense_request_completes_graph(self):
        edges = barabasi_albert(np.random.default_rng(4), 5, 10)
        expected = {(u, v) for u in range(5) for v in range(u + 1, 5)}
        self.assertEqual(set(edges), expected)

    def test_multiple_edges(self):
        flags = EdgeFlags(allow_multiple=True)
        edges = barabasi_albert(np.random.default_rng(5), 5, 40, flags)
        self.assertEqual(len(edges), 40)
        self.assertFlagCompliant(edges, 5, flags)

    def test_infeasible(self):
        with self.assertRaises(InfeasibleParametersError):
            barabasi_albert(np.random.default_rng(6), 4, 7)

    def test_hubs_emerge(self):
        edges = barabasi_albert(np.random.default_rng(7), 200, 400)
        degree = np.bincount(np.array(edges).ravel(), minlength=200)
        self.assertGreater(degree.max(), 3 * degree.mean())


class TestWattsStrogatz(FlagAssertions, unittest.TestCase):
    def test_no_rewiring_gives_ring_lattice(self):
        edges = watts_strogatz(np.random.default_rng(1), 8, 16, 0.0)
        expected = set()
        for node in range(8):
            for offset in (1, 2):
                other = (node + offset) % 8
                expected.add((min(node, other), max(node, other)))
        self.assertEqual(len(edges), 16)
        self.assertEqual(set(edges), expected)

    def test_lattice_is_cut_offset_by_offset(self):
        edges = watts_strogatz(np.random.default_rng(1), 10, 15, 0.0)
        nearest = [(node, node + 1) for node in range(9)] + [(0, 9)]
        self.assertEqual(edges[:10], nearest)
        self.assertEqual(edges[10:], [(0, 2), (1, 3), (2, 4), (3, 5), (4, 6)])

    def test_full_rewiring_keeps_count_and_flags(self):
        flags = EdgeFlags()
        edges = watts_strogatz(np.random.default_rng(2), 20, 40, 1.0, flags)
        self.assertEqual(len(edges), 40)
        self.assertFlagCompliant(edges, 20, flags)

    def test_rewiring_changes_lattice(self):
        lattice = set(watts_strogatz(np.random.default_rng(3), 30, 60, 0.0))
        rewired = set(watts_strogatz(np.random.default_rng(3), 30, 60, 0.5))
        self.assertNotEqual(lattice, rewired)

    def test_directed(self):
        flags = EdgeFlags(directed=True)
        edges = watts_strogatz(np.random.default_rng(4), 12, 30, 0.3, flags)
        self.assertEqual(len(edges), 30)
        self.assertFlagCompliant(edges, 12, flags)

    def test_invalid_alpha(self):
        with self.assertRaises(InvalidParameterError):
            watts_strogatz(np.random.default_rng(5), 10, 10, 1.5)


class TestPanSinha(FlagAssertions, unittest.TestCase):
    def test_edge_count_and_flags(self):
        flags = EdgeFlags()
        edges = pan_sinha(np.random.default_rng(1), 27, 50, 2, 3, 0.5, flags)
        self.assertEqual(len(edges), 50)
        self.assertFlagCompliant(edges, 27, flags)

    def test_zero_ratio_keeps_edges_in_leaf_modules(self):
        hierarchy = HierarchicalModules(27, 2, 3)
        edges = pan_sinha(np.random.default_rng(2), 27, 20, 2, 3, 0.0)
        self.assertEqual(len(edges), 20)
        for u, v in edges:
            self.assertEqual(hierarchy.distance(u, v), 0)

    def test_zero_ratio_capacity(self):
        with self.assertRaises(InfeasibleParametersError):
            pan_sinha(np.random.default_rng(3), 27, 28, 2, 3, 0.0)

    def test_local_edges_dominate(self):
        hierarchy = HierarchicalModules(64, 2, 4)
        edges = pan_sinha(np.random.default_rng(4), 64, 150, 2, 4, 0.1)
        levels = [hierarchy.distance(u, v) for u, v in edges]
        self.assertGreater(levels.count(0), levels.count(2))

    def test_invalid_parameters(self):
        with self.assertRaises(InvalidParameterError):
            pan_sinha(np.random.default_rng(5), 27, 10, 2, 3, 1.5)
        with self.assertRaises(InvalidParameterError):
            pan_sinha(np.random.default_rng(5), 27, 10, 2, 0, 0.5)


class TestSimpleModular(FlagAssertions, unittest.TestCase):
    def test_intra_module_only(self):
        partition = SimpleModules(20, 4)
        edges = simple_modular(np.random.default_rng(1), 20, 30, 4, 0.0)
        self.assertEqual(len(edges), 30)
        self.assertTrue(all(partition.common_module(u, v) is not None for u, v in edges))

    def test_inter_module_only(self):
        partition = SimpleModules(20, 4)
        edges = simple_modular(np.random.default_rng(2), 20, 30, 4, 1.0)
        self.assertEqual(len(edges), 30)
        self.assertTrue(all(partition.common_module(u, v) is None for u, v in edges))

    def test_mixed(self):
        flags = EdgeFlags(directed=True)
        edges = simple_modular(np.random.default_rng(3), 30, 80, 3, 0.3, flags)
        self.assertEqual(len(edges), 80)
        self.assertFlagCompliant(edges, 30, flags)

    def test_intra_capacity(self):
        with self.assertRaises(InfeasibleParametersError):
            simple_modular(np.random.default_rng(4), 20, 41, 4, 0.0)

    def test_invalid_module_count(self):
        with self.assertRaises(InvalidParameterError):
            simple_modular(np.random.default_rng(5), 20, 10, 0, 0.5)


class TestModules(unittest.TestCase):
    def test_hierarchy_levels(self):
        hierarchy = HierarchicalModules(27, 2, 3)
        self.assertEqual(hierarchy.leaf_size, 3)
        self.assertEqual(hierarchy.distance(0, 1), 0)
        self.assertEqual(hierarchy.distance(0, 3), 1)
        self.assertEqual(hierarchy.distance(0, 9), 2)
        self.assertEqual(hierarchy.common_module(9, 10), (0, 3))
        self.assertEqual(hierarchy.common_module(9, 13), (1, 1))
        self.assertEqual(hierarchy.leaf_sizes(), [3] * 9)

    def test_uneven_leaves(self):
        hierarchy = HierarchicalModules(10, 1, 3)
        self.assertEqual(hierarchy.leaf_sizes(), [4, 4, 2])

    def test_simple_partition(self):
        partition = SimpleModules(10, 3)
        self.assertEqual(sum(partition.sizes()), 10)
        self.assertEqual(len(partition), 3)
        self.assertEqual(partition.common_module(0, 1), 0)
        self.assertIsNone(partition.common_module(0, 9))


if __name__ == "__main__":
    unittest.main()
