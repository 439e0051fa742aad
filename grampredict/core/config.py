from pydantic_settings import BaseSettings
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseSettings):
    """Defines and validates all environment variables for the application.
    
    Pydantic automatically reads variables from the environment or a .env file,
    validates their types, and provides default values if they are not set.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./grampredict.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "a-secret-key")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))
    MAGIC_TOKEN_EXPIRE_DAYS: int = int(os.getenv("MAGIC_TOKEN_EXPIRE_DAYS", 7))

    SENDGRID_API_KEY: str = os.getenv("SENDGRID_API_KEY", "")
    EMAIL_SENDER: str = os.getenv("EMAIL_SENDER", "no-reply@grampredict.in")
    FRONTEND_BASE_URL: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:8080")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:8080,http://localhost:3000")

    # "gateway" talks to an OpenAI-compatible chat completions endpoint, "ollama" to a local Ollama host.
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "gateway")
    AI_GATEWAY_URL: str = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
    AI_GATEWAY_API_KEY: str = os.getenv("AI_GATEWAY_API_KEY", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "google/gemini-2.5-flash")
    OLLAMA_HOST: str = os.getenv("OLLAMA_HOST", "http://localhost:11434")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", 60))

    # "llm" asks the language model for numbers, "prophet" fits the stored history.
    FORECAST_BACKEND: str = os.getenv("FORECAST_BACKEND", "llm")
    FORECAST_TEMPERATURE: float = float(os.getenv("FORECAST_TEMPERATURE", 0.7))
    PERSIST_FORECASTS: bool = os.getenv("PERSIST_FORECASTS", "true").lower() in ("1", "true", "yes")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'
        extra = "ignore"

settings = Settings()
