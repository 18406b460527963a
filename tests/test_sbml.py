import tempfile
import unittest
from pathlib import Path

import libsbml

from crngen.errors import FileIOError
from crngen.models import Reaction, Species
from crngen.persistence.sbml import build_document, write_sbml


class TestSbml(unittest.TestCase):
    def setUp(self):
        self.species = [
            Species(0, "A_0", False, -0.5),
            Species(1, "A_1", True, -0.2),
            Species(2, "A_2"),
        ]
        self.reactions = [
            Reaction(educts=(0, 0), products=(1,), reversible=True),
            Reaction(educts=(1, 2), products=(0, 2), reversible=False, k=2.0),
        ]

    def test_document_structure(self):
        document = build_document(self.species, self.reactions)
        model = document.getModel()
        self.assertEqual(document.getLevel(), 2)
        self.assertEqual(document.getVersion(), 4)
        self.assertEqual(model.getNumSpecies(), 3)
        self.assertEqual(model.getNumReactions(), 2)
        self.assertEqual(model.getSpecies("s_1").getName(), "A_1")
        self.assertTrue(model.getSpecies("s_1").getBoundaryCondition())
        self.assertFalse(model.getSpecies("s_0").getBoundaryCondition())

    def test_repeated_species_share_one_reference(self):
        model = build_document(self.species, self.reactions).getModel()
        reversible = model.getReaction("r_0")
        self.assertTrue(reversible.getReversible())
        self.assertEqual(reversible.getNumReactants(), 1)
        self.assertEqual(reversible.getReactant(0).getStoichiometry(), 2.0)
        law = reversible.getKineticLaw()
        self.assertEqual(law.getNumParameters(), 2)
        self.assertIn("k_b", libsbml.formulaToL3String(law.getMath()))

    def test_irreversible_rate_law(self):
        model = build_document(self.species, self.reactions).getModel()
        law = model.getReaction("r_1").getKineticLaw()
        self.assertFalse(model.getReaction("r_1").getReversible())
        self.assertEqual(law.getNumParameters(), 1)
        self.assertEqual(law.getParameter("k").getValue(), 2.0)

    def test_written_file_can_be_read(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "1-net.xml"
            write_sbml(path, self.species, self.reactions)
            document = libsbml.readSBMLFromFile(str(path))
            model = document.getModel()
            self.assertIsNotNone(model)
            self.assertEqual(model.getId(), "_1_net")
            self.assertEqual(model.getNumReactions(), 2)

    def test_write_failure(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileIOError):
                write_sbml(Path(tmp) / "missing" / "net.xml", self.species, self.reactions)


if __name__ == "__main__":
    unittest.main()
