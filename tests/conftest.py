"""
Shared fixtures for chatbot engine tests.
"""

from datetime import datetime

import pytest

from chatbot_engine.chatbot import ResponseOrchestrator
from chatbot_engine.conversation_manager import ConversationManager
from chatbot_engine.entity_extractor import EntityExtractor
from chatbot_engine.intent_classifier import IntentClassifier
from chatbot_engine.knowledge_base import KnowledgeBase
from chatbot_engine.learning_module import LearningModule
from chatbot_engine.models import FAQItem
from chatbot_engine.pattern_matcher import PatternMatcher
from chatbot_engine.text_normalizer import TextNormalizer


FIXED_NOW = datetime(2024, 3, 5, 14, 7)


@pytest.fixture
def normalizer():
    return TextNormalizer()


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.fixture
def extractor():
    return EntityExtractor()


@pytest.fixture
def matcher():
    return PatternMatcher(clock=lambda: FIXED_NOW)


@pytest.fixture
def knowledge_base():
    return KnowledgeBase()


@pytest.fixture
def learning_module():
    return LearningModule()


@pytest.fixture
def manager():
    return ConversationManager()


@pytest.fixture
def bot():
    """Orchestrator with a fixed clock for time/date answers."""
    return ResponseOrchestrator(pattern_matcher=PatternMatcher(clock=lambda: FIXED_NOW))


@pytest.fixture
def faq_items():
    return [
        FAQItem(
            question="How do I reset my password",
            answer="Use the reset link on the login page.",
            category="account",
        ),
        FAQItem(
            question="explain the refund policy",
            answer="Refunds are available within 30 days.",
            category="information_request",
        ),
    ]
