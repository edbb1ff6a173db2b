"""Data models for the chatbot response engine"""

from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import List, Optional, Dict, Any, Tuple
from datetime import datetime
from enum import Enum


class EntityType(str, Enum):
    """Supported entity labels"""
    TECHNOLOGY = "TECHNOLOGY"
    TOPIC = "TOPIC"
    NUMBER = "NUMBER"
    EMAIL = "EMAIL"
    URL = "URL"
    DATE = "DATE"
    TIME = "TIME"


class IntentResult(BaseModel):
    """Intent classification result"""
    model_config = ConfigDict(frozen=True)

    intent: str
    confidence: float = Field(ge=0.0, le=1.0)


class Entity(BaseModel):
    """Extracted entity with offsets into the original text"""
    model_config = ConfigDict(frozen=True)

    type: EntityType
    value: str
    start: int
    end: int


class ConversationLog(BaseModel):
    """One completed exchange, kept as learning history"""
    model_config = ConfigDict(frozen=True)

    user_input: str
    bot_response: str
    intent: str
    entities: Tuple[Entity, ...] = ()
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    session_id: Optional[str] = None


class FAQItem(BaseModel):
    """Question/answer pair used for training"""
    model_config = ConfigDict(validate_assignment=True)

    question: str = Field(min_length=1, pattern=r"\S")
    answer: str = Field(min_length=1, pattern=r"\S")
    category: str = "general"
    relevance_score: float = 1.0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @computed_field
    @property
    def keywords(self) -> List[str]:
        return [word for word in self.question.lower().split() if len(word) > 3]

    def update(
        self,
        question: Optional[str] = None,
        answer: Optional[str] = None,
        category: Optional[str] = None,
    ) -> "FAQItem":
        """Rewrite fields in place and bump the update timestamp"""
        if question is not None:
            self.question = question
        if answer is not None:
            self.answer = answer
        if category is not None:
            self.category = category
        self.updated_at = datetime.utcnow()
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FAQItem):
            return NotImplemented
        return (self.question, self.category) == (other.question, other.category)

    def __hash__(self) -> int:
        return hash((self.question, self.category))


class ChatResponse(BaseModel):
    """Reply returned for one processed message"""
    message: str
    intent: str
    confidence: float
    entities: List[Entity] = []
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class BotStatistics(BaseModel):
    """Read-only snapshot of engine statistics"""
    total_conversations: int
    model_accuracy: float
    knowledge_count: int
    average_conversation_length: float
    last_updated: datetime = Field(default_factory=datetime.utcnow)


class ChatRequest(BaseModel):
    """Message processing request"""
    text: str
    session_id: str = "default"


class FAQInput(BaseModel):
    """FAQ entry as accepted by the training endpoint"""
    question: str = Field(min_length=1, pattern=r"\S")
    answer: str = Field(min_length=1, pattern=r"\S")
    category: str = "general"


class TrainRequest(BaseModel):
    """Bulk FAQ training request"""
    items: List[FAQInput]


class KnowledgeRequest(BaseModel):
    """Single knowledge insert request"""
    question: str = Field(min_length=1, pattern=r"\S")
    answer: str = Field(min_length=1, pattern=r"\S")
    category: str = "general"


class SessionSummary(BaseModel):
    """Introspection view of one conversation context"""
    session_id: str
    interaction_count: int
    is_ended: bool
    start_time: datetime
    last_interaction: datetime
    history: List[str] = []
    context: Dict[str, Any] = {}
