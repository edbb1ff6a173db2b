"""Configuration settings for the chatbot response engine"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # Server
    service_name: str = "chatbot"
    port: int = 8009
    debug: bool = False
    
    # Intent classification
    confidence_divisor: float = 3.0
    exact_match_bonus: float = 0.5
    prefix_bonus: float = 0.3
    
    # Response branching
    high_confidence_threshold: float = 0.8
    medium_confidence_threshold: float = 0.5
    
    # Knowledge base
    similarity_threshold: float = 0.3
    
    # Learning
    initial_model_accuracy: float = 0.75
    accuracy_decay: float = 0.9
    accuracy_learning_rate: float = 0.1
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
