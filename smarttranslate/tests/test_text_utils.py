import unittest

from smarttranslate.models import DispatchRequest, MessageKind, SentenceAnalysis, WordAnalysis, parse_analysis
from smarttranslate.utils import extract_selection_context, validate_text


class TestValidateText(unittest.TestCase):
    def test_bounds(self):
        self.assertIsNone(validate_text("a"))
        self.assertIsNone(validate_text("a" * 10000))
        self.assertEqual(validate_text(""), "empty_text")
        self.assertEqual(validate_text(None), "empty_text")
        self.assertEqual(validate_text("a" * 10001), "text_too_long")


class TestSelectionContext(unittest.TestCase):
    def test_short_context_is_whitespace_collapsed(self):
        self.assertEqual(extract_selection_context("  The   river\nbank  ", "bank"), "The river bank")

    def test_window_around_selection(self):
        container = "a" * 400 + " bank " + "b" * 400
        context = extract_selection_context(container, "bank")
        self.assertTrue(context.startswith("..."))
        self.assertTrue(context.endswith("..."))
        self.assertIn("bank", context)
        self.assertEqual(len(context), 3 + 200 + len("bank") + 200 + 3)

    def test_selection_not_found(self):
        context = extract_selection_context("c" * 800, "zzz")
        self.assertEqual(context, "c" * 500 + "...")


class TestModels(unittest.TestCase):
    def test_request_from_extension_message(self):
        request = DispatchRequest.from_message({"type": "GET_TTS", "text": "hi", "voice": ""})
        self.assertEqual(request.message_kind(), MessageKind.SYNTHESIZE)
        self.assertIsNone(request.voice)

    def test_parse_analysis_shapes(self):
        word = parse_analysis({"type": "word", "word": "cat", "extra": 1})
        self.assertIsInstance(word, WordAnalysis)
        self.assertEqual(word.synonyms, [])

        sentence = parse_analysis({"sentence": "The cat sat.", "words": [{"word": "cat", "index": 1, "role": "noun"}]})
        self.assertIsInstance(sentence, SentenceAnalysis)
        self.assertEqual(sentence.words[0].role, "noun")


if __name__ == "__main__":
    unittest.main()
