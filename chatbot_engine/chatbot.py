"""Response orchestration: understanding pipeline plus response strategies.

One request flows through normalize -> classify -> extract -> context fetch
-> branch on confidence -> context update -> learn. Confidence above the
high threshold dispatches to a per-intent handler, the middle band tries the
learning module, and everything else walks the fallback chain of pattern
match, knowledge-base similarity and a fixed default reply.
"""

import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple
import structlog

from .config import settings
from .conversation_manager import ConversationContext, ConversationManager
from .entity_extractor import EntityExtractor
from .intent_classifier import IntentClassifier
from .knowledge_base import KnowledgeBase
from .learning_module import LearningModule
from .metrics import record_message
from .models import BotStatistics, ChatResponse, Entity, EntityType, FAQItem, IntentResult
from .pattern_matcher import PatternMatcher
from .text_normalizer import TextNormalizer
from .training_module import TrainingModule

logger = structlog.get_logger(__name__)

ERROR_MESSAGE = "I'm sorry, I encountered an error. Please try again."
DEFAULT_MESSAGE = "I'm not entirely sure about that. Could you rephrase your question or ask something else?"
FIRST_GREETING = "Hello! I'm your AI assistant. How can I help you today?"
REPEAT_GREETING = "Hi again! What else can I help you with?"
QUESTION_FALLBACK = "That's an interesting question! Let me think about that..."
TECHNICAL_PREFIX = "I can help you with technical questions."
FAREWELL_MESSAGE = "Goodbye! It was nice talking with you. Feel free to reach out anytime!"
INFORMATION_MESSAGE = "I'll help you find that information. What specifically would you like to know?"
COMPLAINT_MESSAGE = (
    "I understand your concern. Let me help you resolve this issue. Could you provide more details?"
)
PRAISE_MESSAGE = "Thank you for the kind words! I'm here to help whenever you need assistance."

Handler = Callable[[List[Entity], ConversationContext], str]


class ResponseOrchestrator:
    """Composes the understanding components into a reply for each message"""
    
    def __init__(
        self,
        normalizer: Optional[TextNormalizer] = None,
        intent_classifier: Optional[IntentClassifier] = None,
        entity_extractor: Optional[EntityExtractor] = None,
        pattern_matcher: Optional[PatternMatcher] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
        learning_module: Optional[LearningModule] = None,
        conversation_manager: Optional[ConversationManager] = None,
        training_module: Optional[TrainingModule] = None,
        high_confidence_threshold: float = settings.high_confidence_threshold,
        medium_confidence_threshold: float = settings.medium_confidence_threshold,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.intent_classifier = intent_classifier or IntentClassifier()
        self.entity_extractor = entity_extractor or EntityExtractor()
        self.pattern_matcher = pattern_matcher or PatternMatcher()
        self.knowledge_base = knowledge_base or KnowledgeBase()
        self.learning_module = learning_module or LearningModule()
        self.conversation_manager = conversation_manager or ConversationManager()
        self.training_module = training_module or TrainingModule()
        self.high_confidence_threshold = high_confidence_threshold
        self.medium_confidence_threshold = medium_confidence_threshold
        
        self.handlers: Dict[str, Handler] = {
            "greeting": self._handle_greeting,
            "question": self._handle_question,
            "technical_help": self._handle_technical_help,
            "farewell": self._handle_farewell,
            "information_request": self._handle_information_request,
            "complaint": self._handle_complaint,
            "praise": self._handle_praise,
        }
    
    def process_message(self, text: str, session_id: str) -> ChatResponse:
        """Produce a reply for text within session_id; never raises"""
        start_time = time.perf_counter()
        
        try:
            normalized = self.normalizer.normalize(text)
            intent_result = self.intent_classifier.classify(normalized)
            entities = self.entity_extractor.extract(text)
            context = self.conversation_manager.get_context(session_id)
            
            message, strategy = self.generate_response(intent_result, entities, context, normalized)
            
            self.conversation_manager.update_context(session_id, text, message, intent_result)
            self.learning_module.learn_from_interaction(
                text, message, intent_result, entities, session_id=session_id
            )
            
            record_message(
                "success",
                time.perf_counter() - start_time,
                confidence=intent_result.confidence,
                intent=intent_result.intent,
                strategy=strategy
            )
            return ChatResponse(
                message=message,
                intent=intent_result.intent,
                confidence=intent_result.confidence,
                entities=entities
            )
        
        except Exception as e:
            logger.error("Message processing failed", error=str(e), session_id=session_id)
            record_message("error", time.perf_counter() - start_time, strategy="error")
            return ChatResponse(message=ERROR_MESSAGE, intent="error", confidence=0.0, entities=[])
    
    def generate_response(
        self,
        intent_result: IntentResult,
        entities: List[Entity],
        context: ConversationContext,
        text: str,
    ) -> Tuple[str, str]:
        """Reply text and the name of the strategy that produced it"""
        confidence = intent_result.confidence
        
        if confidence > self.high_confidence_threshold:
            return self._handle_high_confidence(intent_result.intent, entities, context), "handler"
        
        if confidence > self.medium_confidence_threshold:
            ml_response = self.learning_module.generate_ml_response(text, intent_result.intent, entities)
            if ml_response is not None:
                return ml_response, "ml"
        
        return self._handle_low_confidence(text)
    
    def _handle_high_confidence(
        self, intent: str, entities: List[Entity], context: ConversationContext
    ) -> str:
        handler = self.handlers.get(intent)
        if handler is not None:
            return handler(entities, context)
        
        response = self.knowledge_base.get_response(intent)
        return response if response is not None else DEFAULT_MESSAGE
    
    def _handle_low_confidence(self, text: str) -> Tuple[str, str]:
        pattern_response = self.pattern_matcher.match(text)
        if pattern_response is not None:
            return pattern_response, "pattern"
        
        similar_response = self.knowledge_base.find_similar_response(text)
        if similar_response is not None:
            return similar_response, "similarity"
        
        return DEFAULT_MESSAGE, "default"
    
    def _handle_greeting(self, entities: List[Entity], context: ConversationContext) -> str:
        if context.is_first_interaction():
            return FIRST_GREETING
        return REPEAT_GREETING
    
    def _handle_question(self, entities: List[Entity], context: ConversationContext) -> str:
        for entity in entities:
            if entity.type == EntityType.TOPIC:
                response = self.knowledge_base.get_topic_response(entity.value)
            elif entity.type == EntityType.TECHNOLOGY:
                response = self.knowledge_base.get_technical_response(entity.value)
            else:
                continue
            if response is not None:
                return response
        return QUESTION_FALLBACK
    
    def _handle_technical_help(self, entities: List[Entity], context: ConversationContext) -> str:
        parts = [TECHNICAL_PREFIX]
        for entity in entities:
            if entity.type == EntityType.TECHNOLOGY:
                tech_response = self.knowledge_base.get_technical_response(entity.value)
                if tech_response is not None:
                    parts.append(tech_response)
        return " ".join(parts)
    
    def _handle_farewell(self, entities: List[Entity], context: ConversationContext) -> str:
        context.set_ended(True)
        return FAREWELL_MESSAGE
    
    def _handle_information_request(self, entities: List[Entity], context: ConversationContext) -> str:
        return INFORMATION_MESSAGE
    
    def _handle_complaint(self, entities: List[Entity], context: ConversationContext) -> str:
        return COMPLAINT_MESSAGE
    
    def _handle_praise(self, entities: List[Entity], context: ConversationContext) -> str:
        return PRAISE_MESSAGE
    
    def train_with_faqs(self, faq_items: Iterable[FAQItem]) -> int:
        """Bulk-load FAQ items into training data, knowledge base and examples"""
        cleaned = self.training_module.train_with_faqs(faq_items)
        self.knowledge_base.load_faqs(cleaned)
        self.learning_module.update_model(cleaned)
        logger.info("Training completed with FAQ items", count=len(cleaned))
        return len(cleaned)
    
    def add_knowledge(self, question: str, answer: str, category: str):
        self.knowledge_base.add_knowledge(question, answer, category)
        self.learning_module.incremental_learning(question, answer, category)
    
    def get_statistics(self) -> BotStatistics:
        return BotStatistics(
            total_conversations=self.conversation_manager.get_total_conversations(),
            model_accuracy=self.learning_module.get_model_accuracy(),
            knowledge_count=self.knowledge_base.get_knowledge_count(),
            average_conversation_length=self.conversation_manager.get_average_conversation_length()
        )
