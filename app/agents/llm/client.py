from app.settings import settings
from app.agents.llm.base import LLMClient
from app.agents.llm.ollama import OllamaOpenAIClient
from app.agents.llm.openai_compat import OpenAICompatClient

def get_llm_client() -> LLMClient:
    if settings.LLM_PROVIDER == "ollama":
        return OllamaOpenAIClient(
            base_url = settings.ollama_base_url,
            model = settings.ollama_model,
        )

    return OpenAICompatClient(
        api_key=settings.AI_API_KEY,
        base_url=settings.AI_BASE_URL,
        model=settings.AI_MODEL,
        timeout=settings.http_timeout_seconds * 3,
    )
