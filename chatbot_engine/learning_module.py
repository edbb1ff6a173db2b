"""Learning from conversations via example similarity"""

import threading
from typing import Dict, Iterable, List, NamedTuple, Optional
import structlog

from .config import settings
from .models import ConversationLog, Entity, FAQItem, IntentResult
from .text_normalizer import jaccard_similarity

logger = structlog.get_logger(__name__)


class Example(NamedTuple):
    """An example utterance, with the answer it came with if any"""
    text: str
    answer: Optional[str] = None


class ExampleStore:
    """Example utterances kept in two registries: by intent and by FAQ category.

    Looking up examples for an intent returns that intent's examples followed
    by the examples of the FAQ category carrying the same name.
    """
    
    def __init__(self):
        self._lock = threading.Lock()
        self._intent_examples: Dict[str, List[Example]] = {}
        self._category_examples: Dict[str, List[Example]] = {}
    
    def add_intent_example(self, intent: str, text: str):
        with self._lock:
            self._intent_examples.setdefault(intent.lower(), []).append(Example(text))
    
    def add_category_example(self, category: str, text: str, answer: Optional[str] = None):
        with self._lock:
            self._category_examples.setdefault(category.lower(), []).append(Example(text, answer))
    
    def examples_for(self, intent: str) -> List[Example]:
        key = intent.lower()
        with self._lock:
            return (
                list(self._intent_examples.get(key, []))
                + list(self._category_examples.get(key, []))
            )
    
    def intent_counts(self) -> Dict[str, int]:
        with self._lock:
            return {intent: len(examples) for intent, examples in self._intent_examples.items()}
    
    def category_counts(self) -> Dict[str, int]:
        with self._lock:
            return {category: len(examples) for category, examples in self._category_examples.items()}


class LearningModule:
    """Records interactions and answers from the most similar known example"""
    
    def __init__(
        self,
        examples: Optional[ExampleStore] = None,
        initial_accuracy: float = settings.initial_model_accuracy,
        accuracy_decay: float = settings.accuracy_decay,
        accuracy_learning_rate: float = settings.accuracy_learning_rate,
    ):
        self.examples = examples if examples is not None else ExampleStore()
        self.accuracy_decay = accuracy_decay
        self.accuracy_learning_rate = accuracy_learning_rate
        self._model_accuracy = initial_accuracy
        self._training_data: List[ConversationLog] = []
        self._lock = threading.Lock()
    
    def learn_from_interaction(
        self,
        user_input: str,
        response: str,
        intent_result: IntentResult,
        entities: List[Entity],
        session_id: Optional[str] = None,
    ) -> ConversationLog:
        """Store the exchange, remember the input as an example and update accuracy"""
        log = ConversationLog(
            user_input=user_input,
            bot_response=response,
            intent=intent_result.intent,
            entities=tuple(entities),
            session_id=session_id,
        )
        self.examples.add_intent_example(intent_result.intent, user_input)
        
        with self._lock:
            self._training_data.append(log)
            self._model_accuracy = (
                self._model_accuracy * self.accuracy_decay
                + intent_result.confidence * self.accuracy_learning_rate
            )
        
        return log
    
    def generate_ml_response(self, text: str, intent: str, entities: List[Entity]) -> Optional[str]:
        """Answer from the most similar example recorded for intent, None without examples"""
        examples = self.examples.examples_for(intent)
        if not examples:
            return None
        
        most_similar = self.find_most_similar_example(text, examples)
        return self._response_from_example(most_similar, entities)
    
    @staticmethod
    def find_most_similar_example(text: str, examples: List[Example]) -> Example:
        """Highest Jaccard similarity wins; the first seen example wins ties"""
        max_similarity = 0.0
        most_similar = examples[0]
        
        for example in examples:
            similarity = jaccard_similarity(text, example.text)
            if similarity > max_similarity:
                max_similarity = similarity
                most_similar = example
        
        return most_similar
    
    def _response_from_example(self, example: Example, entities: List[Entity]) -> str:
        if example.answer:
            return example.answer
        
        response = f'Based on similar queries like "{example.text}", here\'s what I can help you with'
        if entities:
            topics = ", ".join(dict.fromkeys(entity.value for entity in entities))
            response += f" regarding {topics}"
        return response + "..."
    
    def update_model(self, faq_items: Iterable[FAQItem]) -> int:
        """Register FAQ questions as examples of their category"""
        count = 0
        for faq in faq_items:
            self.examples.add_category_example(faq.category, faq.question, faq.answer)
            count += 1
        logger.info("Model updated with FAQ items", count=count)
        return count
    
    def incremental_learning(self, question: str, answer: str, category: str):
        self.examples.add_category_example(category, question, answer)
        logger.info("Incremental learning: added new knowledge", category=category)
    
    def load_examples(self, examples_by_intent: Dict[str, Iterable[str]]) -> int:
        """Bootstrap hook: populate intent examples from an external collection"""
        count = 0
        for intent, texts in examples_by_intent.items():
            for text in texts:
                self.examples.add_intent_example(intent, text)
                count += 1
        logger.info("Loaded trained examples", count=count, intents=len(examples_by_intent))
        return count
    
    def get_model_accuracy(self) -> float:
        with self._lock:
            return self._model_accuracy
    
    def get_training_data(self) -> List[ConversationLog]:
        with self._lock:
            return list(self._training_data)
