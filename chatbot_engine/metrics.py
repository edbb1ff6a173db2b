from typing import Optional

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Chatbot engine metrics
chatbot_messages_total = Counter('chatbot_messages_total', 'Total processed messages', ['status'])
chatbot_message_duration_seconds = Histogram('chatbot_message_duration_seconds', 'Message processing duration')
chatbot_intent_confidence = Histogram(
    'chatbot_intent_confidence',
    'Intent confidence scores',
    buckets=(0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)
)
chatbot_intents_detected = Counter('chatbot_intents_detected_total', 'Intents detected', ['intent'])
chatbot_response_strategy = Counter('chatbot_response_strategy_total', 'Strategy that produced the reply', ['strategy'])


def record_message(
    status: str,
    duration: float,
    confidence: Optional[float] = None,
    intent: Optional[str] = None,
    strategy: Optional[str] = None,
):
    """Record message processing metrics"""
    chatbot_messages_total.labels(status=status).inc()
    chatbot_message_duration_seconds.observe(duration)
    if confidence is not None:
        chatbot_intent_confidence.observe(confidence)
    if intent:
        chatbot_intents_detected.labels(intent=intent).inc()
    if strategy:
        chatbot_response_strategy.labels(strategy=strategy).inc()


async def metrics_endpoint():
    """Prometheus metrics endpoint"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
