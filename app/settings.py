## Application settings configuration

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "dev"
    database_url: str = "sqlite:///./studyplan.db"
    log_level: str = "INFO"

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "llama3.1"

    # OpenAI-compatible provider (OpenRouter by default)
    LLM_PROVIDER: str = "openrouter"
    AI_API_KEY: str = ""
    AI_BASE_URL: str = "https://openrouter.ai/api/v1"
    AI_MODEL: str = "openai/gpt-4o-mini"

    # Content search providers
    YOUTUBE_API_KEY: str = ""
    GOOGLE_BOOKS_KEY: str = ""
    GITHUB_TOKEN: str = ""

    resources_per_query: int = 3
    fetch_stackexchange: bool = False
    http_timeout_seconds: float = 20.0


settings = Settings()
