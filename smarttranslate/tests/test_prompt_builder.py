import unittest

from smarttranslate.services.prompt_service import (
    SENTENCE,
    WORD,
    build_analysis_messages,
    build_translation_messages,
    classify_analysis_input,
)


class TestClassification(unittest.TestCase):
    def test_single_word(self):
        self.assertEqual(classify_analysis_input("serendipity"), WORD)
        self.assertEqual(classify_analysis_input("  serendipity \n"), WORD)

    def test_sentence(self):
        self.assertEqual(classify_analysis_input("The cat sat."), SENTENCE)
        self.assertEqual(classify_analysis_input("two words"), SENTENCE)

    def test_terminal_punctuation_makes_a_sentence(self):
        for text in ("Stop!", "why?", "end.", "clause;"):
            self.assertEqual(classify_analysis_input(text), SENTENCE)

    def test_other_punctuation_keeps_a_word(self):
        self.assertEqual(classify_analysis_input("well-known"), WORD)
        self.assertEqual(classify_analysis_input("don't"), WORD)


class TestPrompts(unittest.TestCase):
    def test_translation_messages(self):
        messages = build_translation_messages("Good morning", "fr")
        self.assertEqual([m["role"] for m in messages], ["system", "user"])
        self.assertIn("literal translator", messages[0]["content"])
        self.assertIn("to fr exactly", messages[1]["content"])
        self.assertIn('"""\nGood morning\n"""', messages[1]["content"])

    def test_translation_defaults_to_italian(self):
        self.assertIn("to it exactly", build_translation_messages("hi")[1]["content"])

    def test_translation_context_is_marked_as_not_to_translate(self):
        content = build_translation_messages("bank", "it", context="the river bank was muddy")[1]["content"]
        self.assertIn("the river bank was muddy", content)
        self.assertIn("do not translate it", content)

    def test_word_analysis_prompt(self):
        kind, messages = build_analysis_messages(" serendipity ")
        self.assertEqual(kind, WORD)
        self.assertIn("Respond ONLY with valid JSON", messages[0]["content"])
        self.assertIn('Analyze the word "serendipity"', messages[1]["content"])
        self.assertIn('"antonyms"', messages[1]["content"])

    def test_sentence_analysis_prompt(self):
        kind, messages = build_analysis_messages("The cat sat.")
        self.assertEqual(kind, SENTENCE)
        self.assertIn('Sentence to analyze: "The cat sat."', messages[1]["content"])
        self.assertIn('"explanation"', messages[1]["content"])


if __name__ == "__main__":
    unittest.main()
