import httpx
from app.agents.llm.base import LLMClient
from app.planning.errors import UpstreamError

class OllamaOpenAIClient(LLMClient):
    def __init__(self, base_url: str, model: str, timeout: float = 120.0,
    transport: httpx.BaseTransport | None = None):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def generate_text(self, * , system: str, user: str, temperature: float = 0.2,
    json_mode: bool = False) -> str:
        # Ollama OpenAI-compatible endpoint
        # POST {base_url}/chat/completions with OpenAI message format

        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Content-Type": "application/json",
            #OpenAI-compatible clients require an api key field; Ollama ignores it
            "Authorization": "Bearer ollama",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                r = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(f"AI service unreachable: {e}") from e

        if r.is_error:
            raise UpstreamError(f"AI error: {r.status_code} {r.text}",
            status_code=r.status_code, body=r.text)

        try:
            data = r.json()
            return (data["choices"][0]["message"]["content"] or "{}").strip()
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamError(f"AI returned an unexpected envelope: {r.text[:500]}") from e
