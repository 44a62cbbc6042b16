from typing import List, Optional
from pydantic import PostgresDsn, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "PatentBot AI"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/v1"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "patentbot"
    POSTGRES_PORT: int = 5432
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    @computed_field
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> PostgresDsn:
        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    # Retrieval (web-search backed LLM, OpenAI-compatible API)
    PERPLEXITY_API_KEY: Optional[str] = None
    PERPLEXITY_BASE_URL: str = "https://api.perplexity.ai"
    PERPLEXITY_MODEL: str = "sonar"

    # Embeddings
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL_EMBEDDING: str = "text-embedding-3-small"

    # Prior art pipeline
    PRIOR_ART_REQUEST_TIMEOUT: float = 30.0
    PRIOR_ART_EMBEDDING_CONCURRENCY: int = 5
    PRIOR_ART_MAX_CANDIDATES: int = 20
    PRIOR_ART_CONTEXT_MAX_CHARS: int = 10_000
    PRIOR_ART_SOURCE_LABEL: str = "Perplexity"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

settings = Settings()
