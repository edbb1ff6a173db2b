"""
Chatbot Response Service
Thin HTTP surface over the rule-based response engine
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import structlog

from .config import settings
from .chatbot import ResponseOrchestrator
from .metrics import metrics_endpoint
from .models import (
    BotStatistics,
    ChatRequest,
    ChatResponse,
    FAQItem,
    KnowledgeRequest,
    SessionSummary,
    TrainRequest,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting chatbot response service", service=settings.service_name)
    
    app.state.chatbot = ResponseOrchestrator()
    
    yield
    
    logger.info("Shutting down chatbot response service")


app = FastAPI(
    title="Chatbot Response Service",
    description="Rule-based intent, entity and response engine",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Process one user message"""
    return app.state.chatbot.process_message(request.text, request.session_id)


@app.post("/train")
async def train(request: TrainRequest):
    """Bulk-load FAQ items"""
    try:
        items = [FAQItem(**item.model_dump()) for item in request.items]
        count = app.state.chatbot.train_with_faqs(items)
        return {"trained": count}
    except Exception as e:
        logger.error("FAQ training failed", error=str(e))
        raise HTTPException(status_code=500, detail="Training failed")


@app.post("/knowledge")
async def add_knowledge(request: KnowledgeRequest):
    """Add a single question/answer pair"""
    try:
        app.state.chatbot.add_knowledge(request.question, request.answer, request.category)
        return {"message": "Knowledge added", "category": request.category}
    except Exception as e:
        logger.error("Knowledge insert failed", error=str(e))
        raise HTTPException(status_code=500, detail="Knowledge insert failed")


@app.get("/statistics", response_model=BotStatistics)
async def get_statistics():
    """Get engine statistics"""
    return app.state.chatbot.get_statistics()


@app.get("/sessions/{session_id}", response_model=SessionSummary)
async def get_session(session_id: str):
    """Inspect one conversation context"""
    context = app.state.chatbot.conversation_manager.find_context(session_id)
    if context is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return context.summary()


@app.get("/intents")
async def get_supported_intents():
    """Get list of supported intents"""
    return {
        "intents": app.state.chatbot.intent_classifier.get_supported_intents(),
        "entities": app.state.chatbot.entity_extractor.get_supported_entities()
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "active_sessions": len(app.state.chatbot.conversation_manager.session_ids())
    }


app.add_api_route("/metrics", metrics_endpoint, methods=["GET"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
