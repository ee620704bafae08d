from __future__ import annotations

import io
import math
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from rich.console import Console

from ngram import training
from ngram import Document, NgramDistribution


class TrainingCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._console = training.console
        training.console = Console(file=io.StringIO(), width=120)
        self.model = NgramDistribution(2, Document.from_text("a b a b a c"))

    def tearDown(self) -> None:
        training.console = self._console

    def test_levels_table_has_one_row_per_order(self) -> None:
        table = training.create_levels_table(self.model)
        self.assertEqual(table.row_count, 2)

    def test_evaluate_reports_perplexity(self) -> None:
        results = training.evaluate_model_cli(self.model, [Document.from_text("a b a")])
        self.assertEqual(results["ngrams_scored"], 2)
        self.assertEqual(results["documents_skipped"], 0)
        self.assertAlmostEqual(results["perplexity"], self.model.perplexity("a b a"))

    def test_evaluate_skips_unscorable_documents(self) -> None:
        docs = [Document.from_text("a b"), Document.from_text("c a")]
        results = training.evaluate_model_cli(self.model, docs)
        self.assertEqual(results["documents_skipped"], 1)
        self.assertAlmostEqual(results["log_likelihood"], math.log(self.model.prob("a", "b")))

    def test_evaluate_counts_windows_per_document(self) -> None:
        docs = [Document.from_text("a b a b"), Document.from_text("a")]
        results = training.evaluate_model_cli(self.model, docs)
        self.assertEqual(results["ngrams_scored"], 3)
        self.assertEqual(results["documents_skipped"], 0)

    def test_interactive_demo_reports_generation_errors(self) -> None:
        with self.assertLogs("ngram.model", level="WARNING"):
            empty = NgramDistribution(1, Document.from_text(""))
        with mock.patch.object(training.console, "input", side_effect=["hello", "quit"]):
            training.interactive_demo(empty)
        output = training.console.file.getvalue()
        self.assertIn("no observed tokens", output)
        self.assertIn("Goodbye", output)

    def test_train_from_corpus_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "train.txt"
            path.write_text("a b a b a c", encoding="utf-8")
            model = training.train_model_cli(n=2, corpus_path=str(path))
        self.assertAlmostEqual(model.prob("a", "c"), self.model.prob("a", "c"))


if __name__ == "__main__":
    unittest.main()
