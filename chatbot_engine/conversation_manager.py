"""Per-session conversation context tracking"""

import threading
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import structlog

from .models import IntentResult, SessionSummary

logger = structlog.get_logger(__name__)


class ConversationContext:
    """Mutable state of one conversation; mutations are serialized per session"""
    
    def __init__(self, session_id: str):
        self.session_id = session_id
        self._lock = threading.Lock()
        self._history: List[str] = []
        self._context_data: Dict[str, Any] = {}
        self.start_time = datetime.utcnow()
        self.last_interaction = self.start_time
        self._interaction_count = 0
        self._ended = False
    
    def add_interaction(self, user_input: str, bot_response: str, intent: IntentResult) -> int:
        """Record one completed exchange and return the new interaction count"""
        with self._lock:
            self._history.append(f"User: {user_input}")
            self._history.append(f"Bot: {bot_response}")
            self.last_interaction = datetime.utcnow()
            self._interaction_count += 1
            
            self._context_data["lastIntent"] = intent.intent
            self._context_data["lastUserInput"] = user_input
            self._context_data["lastBotResponse"] = bot_response
            return self._interaction_count
    
    def is_first_interaction(self) -> bool:
        return self._interaction_count <= 1
    
    @property
    def interaction_count(self) -> int:
        return self._interaction_count
    
    @property
    def is_ended(self) -> bool:
        return self._ended
    
    def set_ended(self, ended: bool = True):
        with self._lock:
            self._ended = ended
    
    @property
    def conversation_duration(self) -> timedelta:
        return self.last_interaction - self.start_time
    
    def get_history(self) -> List[str]:
        with self._lock:
            return list(self._history)
    
    def history_length(self) -> int:
        with self._lock:
            return len(self._history)
    
    def get_context_data(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._context_data)
    
    def get_context_value(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._context_data.get(key)
    
    def set_context_value(self, key: str, value: Any):
        with self._lock:
            self._context_data[key] = value
    
    def summary(self) -> SessionSummary:
        with self._lock:
            return SessionSummary(
                session_id=self.session_id,
                interaction_count=self._interaction_count,
                is_ended=self._ended,
                start_time=self.start_time,
                last_interaction=self.last_interaction,
                history=list(self._history),
                context=dict(self._context_data),
            )
    
    def __repr__(self) -> str:
        return (
            f"ConversationContext(session_id={self.session_id!r}, "
            f"interactions={self._interaction_count}, duration={self.conversation_duration})"
        )


class ConversationManager:
    """Owns every ConversationContext, keyed by session id"""
    
    def __init__(self):
        self._lock = threading.Lock()
        self.active_contexts: Dict[str, ConversationContext] = {}
        self._total_conversations = 0
    
    def get_context(self, session_id: str) -> ConversationContext:
        """Existing context for session_id, created exactly once on first access"""
        context = self.active_contexts.get(session_id)
        if context is not None:
            return context
        
        with self._lock:
            context = self.active_contexts.get(session_id)
            if context is None:
                context = ConversationContext(session_id)
                self.active_contexts[session_id] = context
                logger.info("Created conversation context", session_id=session_id)
            return context
    
    def find_context(self, session_id: str) -> Optional[ConversationContext]:
        """Context for session_id without creating one"""
        return self.active_contexts.get(session_id)
    
    def update_context(
        self,
        session_id: str,
        user_input: str,
        bot_response: str,
        intent: IntentResult,
    ) -> ConversationContext:
        context = self.get_context(session_id)
        count = context.add_interaction(user_input, bot_response, intent)
        
        if count == 1:
            with self._lock:
                self._total_conversations += 1
        
        return context
    
    def remove_context(self, session_id: str) -> bool:
        """Drop a session; used by external expiry sweeps"""
        with self._lock:
            removed = self.active_contexts.pop(session_id, None)
        if removed is not None:
            logger.info("Removed conversation context", session_id=session_id)
        return removed is not None
    
    def session_ids(self) -> List[str]:
        with self._lock:
            return list(self.active_contexts.keys())
    
    def get_total_conversations(self) -> int:
        with self._lock:
            return self._total_conversations
    
    def get_average_conversation_length(self) -> float:
        """Mean number of history lines per session with at least one exchange"""
        with self._lock:
            contexts = [
                context for context in self.active_contexts.values()
                if context.interaction_count > 0
            ]
        if not contexts:
            return 0.0
        
        total_length = sum(context.history_length() for context in contexts)
        return total_length / len(contexts)
