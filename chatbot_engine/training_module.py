"""FAQ training data bookkeeping"""

import threading
from collections import Counter
from typing import Dict, Iterable, List
import structlog

from .models import FAQItem

logger = structlog.get_logger(__name__)


class TrainingModule:
    """Keeps ingested FAQ items and per-category counts"""
    
    def __init__(self):
        self._lock = threading.Lock()
        self.training_faqs: List[FAQItem] = []
        self.category_count: Counter = Counter()
    
    def train_with_faqs(self, faq_items: Iterable[FAQItem]) -> List[FAQItem]:
        """Record a batch, returning the cleaned items"""
        batch = list(faq_items)
        
        with self._lock:
            self.training_faqs.extend(batch)
            for faq in batch:
                self.category_count[faq.category] += 1
            self._process_training_data()
            categories = len(self.category_count)
        
        logger.info("Training completed", items=len(batch), categories=categories)
        return batch
    
    def _process_training_data(self):
        # Keywords follow the question, so trimming refreshes them too
        for faq in self.training_faqs:
            question = faq.question.strip()
            answer = faq.answer.strip()
            if question != faq.question or answer != faq.answer:
                faq.update(question=question, answer=answer)
    
    def get_training_faqs(self) -> List[FAQItem]:
        with self._lock:
            return list(self.training_faqs)
    
    def get_category_statistics(self) -> Dict[str, int]:
        with self._lock:
            return dict(self.category_count)
