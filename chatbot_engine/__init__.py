"""Rule-based conversational response engine"""

from .chatbot import ResponseOrchestrator
from .conversation_manager import ConversationContext, ConversationManager
from .entity_extractor import EntityExtractor
from .intent_classifier import IntentClassifier
from .knowledge_base import KnowledgeBase, KnowledgeStore
from .learning_module import ExampleStore, LearningModule
from .models import (
    BotStatistics,
    ChatResponse,
    ConversationLog,
    Entity,
    EntityType,
    FAQItem,
    IntentResult,
)
from .pattern_matcher import PatternMatcher
from .text_normalizer import TextNormalizer, jaccard_similarity
from .training_module import TrainingModule

__all__ = [
    "ResponseOrchestrator",
    "ConversationContext",
    "ConversationManager",
    "EntityExtractor",
    "IntentClassifier",
    "KnowledgeBase",
    "KnowledgeStore",
    "ExampleStore",
    "LearningModule",
    "BotStatistics",
    "ChatResponse",
    "ConversationLog",
    "Entity",
    "EntityType",
    "FAQItem",
    "IntentResult",
    "PatternMatcher",
    "TextNormalizer",
    "jaccard_similarity",
    "TrainingModule",
]
