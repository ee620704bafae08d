from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ngram import Document, NgramDistribution, load_brown_corpus, load_documents


class DocumentTests(unittest.TestCase):
    def test_increment(self) -> None:
        doc = Document.from_text("x")
        doc.increment("x")
        doc.increment("x", 3)
        self.assertEqual(doc.counts(), {"x": 4})

    def test_increment_rejects_non_positive_amounts(self) -> None:
        with self.assertRaises(ValueError):
            Document.from_text("x").increment("x", 0)

    def test_counts_returns_a_copy(self) -> None:
        doc = Document.from_text("x")
        doc.counts()["y"] = 1
        self.assertEqual(doc.counts(), {})


class LoadDocumentsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "b.txt").write_text("b b", encoding="utf-8")
        (self.root / "a.txt").write_text("a a", encoding="utf-8")
        (self.root / "notes.md").write_text("ignored", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_directory_in_sorted_order(self) -> None:
        docs = load_documents(self.root)
        self.assertEqual([Path(d.name).name for d in docs], ["a.txt", "b.txt"])
        self.assertEqual(docs[0].content, "a a")

    def test_single_file(self) -> None:
        docs = load_documents(self.root / "notes.md")
        self.assertEqual(len(docs), 1)
        self.assertEqual(docs[0].content, "ignored")

    def test_missing_path(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_documents(self.root / "missing")

    def test_model_from_path(self) -> None:
        model = NgramDistribution.from_path(self.root, 2)
        self.assertEqual(dict(model.kth_frequencies(1)[""]), {"a": 2, "b": 2})
        self.assertEqual(set(model.kth_frequencies(2)), {"a", "b"})


class BrownCorpusTests(unittest.TestCase):
    def test_sentences_become_documents(self) -> None:
        fake_brown = mock.Mock()
        fake_brown.sents.return_value = [["The", "jury", "said"], ["Yes"]]
        with mock.patch("ngram.corpus.brown", fake_brown), \
                mock.patch("ngram.corpus.ensure_nltk_data"):
            docs = load_brown_corpus(categories=["news"], lowercase=True, min_sentence_length=2)
        fake_brown.sents.assert_called_once_with(categories=["news"])
        self.assertEqual(len(docs), 1)
        self.assertEqual(docs[0].content, "the jury said")


if __name__ == "__main__":
    unittest.main()
