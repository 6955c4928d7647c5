"""Tests for rule-based intent classification."""

import pytest

from shopchat.core.intents import INTENT_RULES, classify, match_greeting
from shopchat.core.models import Compare, Fallback, Greeting, ProductQuery


class TestGreeting:
    @pytest.mark.parametrize(
        "message",
        ["hello", "Hi", "hey there", "Good morning everyone", "  HELLO  ", "hi there, price of x"],
    )
    def test_greetings(self, message):
        assert classify(message) == Greeting()

    @pytest.mark.parametrize("message", ["history of phones", "heyday", "ohio"])
    def test_greeting_needs_whole_word(self, message):
        assert match_greeting(message) is None

    def test_trailing_punctuation_is_not_a_greeting(self):
        assert match_greeting("hello!") is None

    def test_greeting_wins_over_compare(self):
        assert classify("hello compare A and B") == Greeting()


class TestCompare:
    def test_basic(self):
        assert classify("Compare Phone A and Phone B") == Compare(
            left="Phone A", right="Phone B"
        )

    @pytest.mark.parametrize(
        "message, left, right",
        [
            ("compare iPhone 14 vs Pixel 8", "iPhone 14", "Pixel 8"),
            ("compare iPhone 14 vs. Pixel 8", "iPhone 14", "Pixel 8"),
            ("compare iPhone 14 v Pixel 8?", "iPhone 14", "Pixel 8"),
            ("Can you COMPARE x1 AND y2.", "x1", "y2"),
        ],
    )
    def test_separators(self, message, left, right):
        assert classify(message) == Compare(left=left, right=right)

    def test_first_separator_wins(self):
        assert classify("compare salt and pepper grinder and mill") == Compare(
            left="salt", right="pepper grinder and mill"
        )

    def test_compare_wins_over_product_query(self):
        intent = classify("compare price of A and B")
        assert isinstance(intent, Compare)

    def test_missing_right_side_is_not_compare(self):
        assert not isinstance(classify("compare phone a"), Compare)


class TestProductQuery:
    def test_query_starts_at_trigger(self):
        assert classify("price of Phone A") == ProductQuery(query="price of Phone A")

    def test_trigger_mid_sentence(self):
        assert classify("Give me details about Samsung Galaxy S21.") == ProductQuery(
            query="details about Samsung Galaxy S21."
        )

    @pytest.mark.parametrize(
        "message",
        ["tell me about pixel 8", "What is the iPhone 14", "battery life of pixel"],
    )
    def test_triggers(self, message):
        assert isinstance(classify(message), ProductQuery)

    def test_trigger_needs_word_boundary(self):
        # "ram" inside "program" is not a trigger
        assert classify("program something") == Fallback()

    def test_trigger_without_subject(self):
        assert classify("price") == Fallback()


class TestFallback:
    @pytest.mark.parametrize("message", ["thanks!", "what do you sell", "ok"])
    def test_fallback(self, message):
        assert classify(message) == Fallback()

    def test_rule_order(self):
        names = [rule.__name__ for rule in INTENT_RULES]
        assert names == ["match_greeting", "match_compare", "match_product_query"]
