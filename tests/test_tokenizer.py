from __future__ import annotations

import unittest

from ngram import CharacterTokenizer, Document, WordTokenizer, get_tokenizer


class WordTokenizerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tokenizer = WordTokenizer()

    def test_tokens_keep_case_and_punctuation(self) -> None:
        self.assertEqual(self.tokenizer.tokens("Hello,  world!\nFoo"), ["Hello,", "world!", "Foo"])

    def test_lowercase(self) -> None:
        self.assertEqual(WordTokenizer(lowercase=True).tokens("The Cat"), ["the", "cat"])

    def test_windows(self) -> None:
        tokens = ["a", "b", "c"]
        self.assertEqual(list(self.tokenizer.windows(tokens, 1)), [("", "a"), ("", "b"), ("", "c")])
        self.assertEqual(list(self.tokenizer.windows(tokens, 2)), [("a", "b"), ("b", "c")])
        self.assertEqual(list(self.tokenizer.windows(tokens, 3)), [("a b", "c")])
        self.assertEqual(list(self.tokenizer.windows(tokens, 4)), [])

    def test_split_inverts_join(self) -> None:
        self.assertEqual(self.tokenizer.split("the cat,"), ["the", "cat,"])
        self.assertEqual(self.tokenizer.split(""), [])

    def test_tokenize_accumulates_into_document(self) -> None:
        doc = Document.from_text("a b a b")
        pairs = list(self.tokenizer.tokenize(doc, 2))
        self.assertEqual(pairs, [("a", "b"), ("b", "a"), ("a", "b")])
        self.assertEqual(doc.counts(), {"a b": 2, "b a": 1})


class CharacterTokenizerTests(unittest.TestCase):
    def test_tokens(self) -> None:
        self.assertEqual(CharacterTokenizer().tokens("ab c"), ["a", "b", " ", "c"])

    def test_split_inverts_join(self) -> None:
        tokenizer = CharacterTokenizer()
        self.assertEqual(tokenizer.split(tokenizer.join(["a", " ", "b"])), ["a", " ", "b"])
        self.assertEqual(tokenizer.split(""), [])

    def test_contexts_are_concatenated(self) -> None:
        pairs = list(CharacterTokenizer().windows(list("abcd"), 3))
        self.assertEqual(pairs, [("ab", "c"), ("bc", "d")])


class FactoryTests(unittest.TestCase):
    def test_known_names(self) -> None:
        self.assertIsInstance(get_tokenizer("word"), WordTokenizer)
        self.assertTrue(get_tokenizer("word", lowercase=True).lowercase)
        self.assertIsInstance(get_tokenizer("char"), CharacterTokenizer)

    def test_unknown_name(self) -> None:
        with self.assertRaises(ValueError):
            get_tokenizer("bpe")


if __name__ == "__main__":
    unittest.main()
