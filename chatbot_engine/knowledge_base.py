"""Knowledge storage and retrieval"""

import threading
from typing import Dict, Iterable, List, Optional
import structlog

from .config import settings
from .models import FAQItem
from .text_normalizer import jaccard_similarity

logger = structlog.get_logger(__name__)

TECHNICAL_RESPONSES = {
    "java": "Java is a versatile, object-oriented programming language. It's platform-independent "
            "and widely used for enterprise applications, Android development, and web services.",
    "python": "Python is a high-level programming language known for its simplicity and readability. "
              "It's popular for data science, AI, web development, and automation.",
    "javascript": "JavaScript is a dynamic programming language primarily used for web development. "
                  "It can run in browsers and servers (Node.js).",
    "html": "HTML (HyperText Markup Language) is the standard markup language for creating web pages "
            "and web applications.",
    "css": "CSS (Cascading Style Sheets) is used for describing the presentation of HTML documents, "
           "including layout, colors, and fonts.",
    "sql": "SQL (Structured Query Language) is used for managing and querying relational databases.",
    "ai": "Artificial Intelligence refers to computer systems that can perform tasks that typically "
          "require human intelligence, such as learning, reasoning, and problem-solving.",
    "machine learning": "Machine Learning is a subset of AI that enables computers to learn and improve "
                        "from experience without being explicitly programmed.",
    "nlp": "Natural Language Processing is a branch of AI that helps computers understand, interpret, "
           "and generate human language.",
}

GENERIC_RESPONSES = {
    "greeting": "Hello! I'm here to help you with any questions you might have.",
    "farewell": "Goodbye! Feel free to ask me anything anytime.",
    "unknown": "I'm not sure about that. Could you please rephrase your question?",
    "praise": "Thank you! I'm glad I could help you.",
    "complaint": "I apologize for any inconvenience. How can I help resolve this issue?",
}


class KnowledgeStore:
    """Thread-safe holder of the knowledge tables; keys are lowercased"""
    
    def __init__(self):
        self._lock = threading.RLock()
        self.responses: Dict[str, str] = {}
        # category -> lowercased question -> answer, in insertion order
        self.category_responses: Dict[str, Dict[str, str]] = {}
        self.technical_responses: Dict[str, str] = {}
        self.faq_items: List[FAQItem] = []
    
    def get_response(self, key: str) -> Optional[str]:
        with self._lock:
            return self.responses.get(key.lower())
    
    def put_response(self, key: str, response: str):
        with self._lock:
            self.responses[key.lower()] = response
    
    def put_category_response(self, category: str, question: str, response: str):
        with self._lock:
            entries = self.category_responses.setdefault(category.lower(), {})
            entries[question.lower()] = response
    
    def get_category_responses(self, category: str) -> List[str]:
        with self._lock:
            return list(self.category_responses.get(category.lower(), {}).values())
    
    def get_technical(self, key: str) -> Optional[str]:
        with self._lock:
            return self.technical_responses.get(key.lower())
    
    def put_technical(self, key: str, response: str):
        with self._lock:
            self.technical_responses[key.lower()] = response
    
    def technical_items(self) -> List[tuple]:
        with self._lock:
            return list(self.technical_responses.items())
    
    def append_faq(self, item: FAQItem):
        with self._lock:
            self.faq_items.append(item)
    
    def get_faqs(self) -> List[FAQItem]:
        with self._lock:
            return list(self.faq_items)
    
    def size(self) -> int:
        with self._lock:
            return len(self.responses) + len(self.technical_responses)


class KnowledgeBase:
    """Generic, per-category and technology/topic responses with similarity fallback"""
    
    def __init__(
        self,
        store: Optional[KnowledgeStore] = None,
        similarity_threshold: float = settings.similarity_threshold,
        seed: bool = True,
    ):
        self.store = store if store is not None else KnowledgeStore()
        self.similarity_threshold = similarity_threshold
        
        if seed:
            self._initialize_knowledge_base()
    
    def _initialize_knowledge_base(self):
        for key, response in TECHNICAL_RESPONSES.items():
            self.store.put_technical(key, response)
        for intent, response in GENERIC_RESPONSES.items():
            self.store.put_response(intent, response)
        logger.info(
            "Knowledge base initialized",
            technical=len(TECHNICAL_RESPONSES),
            generic=len(GENERIC_RESPONSES)
        )
    
    def get_response(self, intent: str) -> Optional[str]:
        return self.store.get_response(intent)
    
    def get_topic_response(self, topic: str) -> Optional[str]:
        return self.store.get_technical(topic)
    
    def get_technical_response(self, technology: str) -> Optional[str]:
        return self.store.get_technical(technology)
    
    def get_category_responses(self, category: str) -> List[str]:
        return self.store.get_category_responses(category)
    
    def find_similar_response(self, text: str) -> Optional[str]:
        """Best technology/topic response by Jaccard similarity, above the threshold"""
        max_similarity = 0.0
        best_response = None
        
        for key, response in self.store.technical_items():
            similarity = jaccard_similarity(text, key)
            if similarity > max_similarity:
                max_similarity = similarity
                best_response = response
        
        if max_similarity > self.similarity_threshold:
            return best_response
        return None
    
    def add_knowledge(self, question: str, answer: str, category: str):
        """Insert question -> answer and file the answer under its category"""
        self.store.put_response(question, answer)
        self.store.put_category_response(category, question, answer)
        logger.info("Added knowledge", question=question[:50], category=category)
    
    def add_technical_response(self, key: str, response: str):
        self.store.put_technical(key, response)
    
    def add_faq(self, item: FAQItem):
        """Keep the FAQ item and make its answer retrievable"""
        self.store.append_faq(item)
        self.add_knowledge(item.question, item.answer, item.category)
    
    def load_faqs(self, items: Iterable[FAQItem]) -> int:
        """Bootstrap hook: populate from an externally loaded collection"""
        count = 0
        for item in items:
            self.add_faq(item)
            count += 1
        logger.info("Loaded FAQ database", count=count)
        return count
    
    def get_faqs(self) -> List[FAQItem]:
        return self.store.get_faqs()
    
    def get_knowledge_count(self) -> int:
        return self.store.size()
