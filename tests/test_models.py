"""
Tests for data models.
"""

import pytest
from pydantic import ValidationError

from chatbot_engine.models import ConversationLog, Entity, EntityType, FAQItem, IntentResult


class TestFAQItem:
    """Test FAQItem behaviour."""

    def test_keywords_are_long_lowercased_words(self):
        item = FAQItem(question="How Do I Install Python Quickly", answer="Use the installer.")
        assert item.keywords == ["install", "python", "quickly"]

    def test_keywords_follow_question_rewrites(self):
        item = FAQItem(question="What is SQL", answer="A query language.", category="tech")
        created = item.updated_at

        item.update(question="Explain databases")

        assert item.keywords == ["explain", "databases"]
        assert item.updated_at >= created
        assert item.created_at == created

    def test_equality_by_question_and_category(self):
        first = FAQItem(question="Q", answer="one", category="c")
        second = FAQItem(question="Q", answer="two", category="c")
        other = FAQItem(question="Q", answer="one", category="d")

        assert first == second
        assert hash(first) == hash(second)
        assert first != other

    def test_empty_question_rejected(self):
        with pytest.raises(ValidationError):
            FAQItem(question="", answer="something")

    def test_whitespace_only_answer_rejected(self):
        with pytest.raises(ValidationError):
            FAQItem(question="Where is the office", answer="   ")

    def test_update_validates_new_values(self):
        item = FAQItem(question="Where is the office", answer="Downtown.")

        with pytest.raises(ValidationError):
            item.update(question="  ")
        assert item.question == "Where is the office"


class TestValueModels:
    """Test immutable value models."""

    def test_entity_equality(self):
        first = Entity(type=EntityType.NUMBER, value="5", start=0, end=1)
        second = Entity(type=EntityType.NUMBER, value="5", start=0, end=1)
        assert first == second
        assert len({first, second}) == 1

    def test_intent_result_is_frozen(self):
        result = IntentResult(intent="greeting", confidence=0.9)
        with pytest.raises(ValidationError):
            result.confidence = 0.1

    def test_intent_confidence_bounds(self):
        with pytest.raises(ValidationError):
            IntentResult(intent="greeting", confidence=1.5)

    def test_conversation_log_is_frozen(self):
        log = ConversationLog(user_input="hi", bot_response="hello", intent="greeting")
        with pytest.raises(ValidationError):
            log.intent = "farewell"
