import unittest

import numpy as np

from crngen.assembler import assemble_network, assemble_unary_network
from crngen.coupling import couple_erdos_renyi
from crngen.generators import erdos_renyi
from crngen.models import EnergyDistribution


class TestAssembleNetwork(unittest.TestCase):
    def _coupled_network(self, seed):
        rng = np.random.default_rng(seed)
        edges = erdos_renyi(rng, 20, 40)
        pairs = couple_erdos_renyi(rng, edges, 10).pairs
        species, reactions = assemble_network(
            20,
            edges,
            pairs,
            rng=rng,
            energy_dist=EnergyDistribution.LINEAR,
            aener_dist=EnergyDistribution.LINEAR,
        )
        return edges, pairs, species, reactions

    def test_counts_are_conserved(self):
        _, pairs, species, reactions = self._coupled_network(1)
        self.assertEqual(len(species), 20)
        self.assertEqual(len(reactions), 30)
        binary = [r for r in reactions if r.is_binary()]
        unary = [r for r in reactions if r.is_unary()]
        self.assertEqual(len(binary), len(pairs))
        self.assertEqual(len(unary), 40 - 2 * len(pairs))
        # binary reactions come first
        self.assertTrue(all(r.is_binary() for r in reactions[: len(pairs)]))

    def test_species_and_energies(self):
        _, _, species, reactions = self._coupled_network(2)
        self.assertEqual([sp.name for sp in species], [f"A_{i}" for i in range(20)])
        self.assertEqual([sp.id for sp in species], list(range(20)))
        self.assertTrue(all(-1.0 <= sp.energy <= 0.0 for sp in species))
        self.assertTrue(all(0.0 <= r.activation <= 1.0 for r in reactions))
        self.assertTrue(all(r.reversible for r in reactions))
        self.assertTrue(all(r.k == r.k_b == r.c == 1.0 for r in reactions))

    def test_pair_becomes_binary_reaction(self):
        edges = [(0, 1), (2, 3), (4, 5)]
        species, reactions = assemble_network(6, edges, [(2, 0)])
        self.assertEqual(len(species), 6)
        self.assertEqual(reactions[0].educts, (4, 0))
        self.assertEqual(reactions[0].products, (5, 1))
        self.assertEqual(reactions[1].educts, (2,))
        self.assertEqual(reactions[1].products, (3,))
        self.assertEqual(len(reactions), 2)

    def test_unary_network_has_zero_energies(self):
        species, reactions = assemble_unary_network(3, [(0, 1), (1, 2)])
        self.assertTrue(all(sp.energy == 0.0 for sp in species))
        self.assertTrue(all(r.activation == 0.0 for r in reactions))
        self.assertEqual([r.educts for r in reactions], [(0,), (1,)])

    def test_invalid_pairs(self):
        edges = [(0, 1), (1, 2), (2, 3)]
        for pairs in ([(0, 0)], [(0, 1), (1, 2)], [(0, 3)]):
            with self.assertRaises(ValueError):
                assemble_network(4, edges, pairs)

    def test_sampling_needs_generator(self):
        with self.assertRaises(ValueError):
            assemble_network(2, [(0, 1)], energy_dist=EnergyDistribution.LINEAR)

    def test_logarithmic_slot_samples_like_linear(self):
        linear = assemble_network(
            3, [(0, 1)], rng=np.random.default_rng(3),
            energy_dist=EnergyDistribution.LINEAR, aener_dist=EnergyDistribution.LINEAR,
        )
        logarithmic = assemble_network(
            3, [(0, 1)], rng=np.random.default_rng(3),
            energy_dist=EnergyDistribution.LOGARITHMIC, aener_dist=EnergyDistribution.LOGARITHMIC,
        )
        self.assertEqual(linear, logarithmic)

    def test_seeded_runs_are_identical(self):
        self.assertEqual(self._coupled_network(7), self._coupled_network(7))


if __name__ == "__main__":
    unittest.main()
