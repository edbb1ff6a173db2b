"""Weighted keyword intent classification"""

from typing import Dict, List, Optional, Tuple

from .config import settings
from .models import IntentResult

UNKNOWN_INTENT = "unknown"

# Declaration order is the tie-break order
INTENT_TRIGGERS: Dict[str, Tuple[float, List[str]]] = {
    "greeting": (1.0, [
        "hello", "hi", "hey", "hello there", "good morning",
        "good afternoon", "good evening", "greetings"
    ]),
    "question": (1.2, [
        "what", "how", "why", "when", "where", "which",
        "can you", "do you know"
    ]),
    "technical_help": (1.5, [
        "help", "problem", "issue", "error", "bug", "not working",
        "technical", "support"
    ]),
    "farewell": (1.0, [
        "bye", "goodbye", "see you", "farewell", "take care",
        "until next time"
    ]),
    "information_request": (1.3, [
        "tell me about", "information about", "details about",
        "explain", "describe"
    ]),
    "complaint": (1.4, [
        "complain", "complaint", "problem with", "issue with",
        "not satisfied", "disappointed"
    ]),
    "praise": (1.25, [
        "thank you", "thank", "thanks", "great job", "excellent",
        "amazing", "wonderful", "helpful"
    ]),
}


class IntentClassifier:
    """Scores text against weighted trigger phrases per intent"""
    
    def __init__(
        self,
        triggers: Optional[Dict[str, Tuple[float, List[str]]]] = None,
        divisor: float = settings.confidence_divisor,
        exact_match_bonus: float = settings.exact_match_bonus,
        prefix_bonus: float = settings.prefix_bonus,
    ):
        source = triggers if triggers is not None else INTENT_TRIGGERS
        self.intent_weights: Dict[str, float] = {}
        self.intent_patterns: Dict[str, List[str]] = {}
        for intent, (weight, phrases) in source.items():
            if weight <= 0:
                raise ValueError(f"Intent weight must be positive: {intent}")
            self.intent_weights[intent] = weight
            self.intent_patterns[intent] = [phrase.lower() for phrase in phrases]
        
        self.divisor = divisor
        self.exact_match_bonus = exact_match_bonus
        self.prefix_bonus = prefix_bonus
    
    def score(self, text: str) -> Dict[str, float]:
        """Accumulated score for every intent with at least one trigger hit"""
        lower_text = text.lower()
        scores: Dict[str, float] = {}
        
        for intent, patterns in self.intent_patterns.items():
            weight = self.intent_weights[intent]
            score = 0.0
            
            for pattern in patterns:
                if pattern not in lower_text:
                    continue
                score += weight
                if lower_text == pattern:
                    score += self.exact_match_bonus
                if lower_text.startswith(pattern):
                    score += self.prefix_bonus
            
            if score > 0:
                scores[intent] = score
        
        return scores
    
    def classify(self, text: str) -> IntentResult:
        """Pick the best scoring intent; "unknown" when nothing matched"""
        scores = self.score(text)
        
        if not scores:
            return IntentResult(intent=UNKNOWN_INTENT, confidence=0.0)
        
        # Strict comparison keeps the earliest declared intent on ties
        best_intent = None
        best_score = 0.0
        for intent, score in scores.items():
            if score > best_score:
                best_intent, best_score = intent, score
        
        confidence = min(best_score / self.divisor, 1.0)
        return IntentResult(intent=best_intent, confidence=confidence)
    
    def get_supported_intents(self) -> List[str]:
        """Get list of supported intents"""
        return list(self.intent_patterns.keys())
