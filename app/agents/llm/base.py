## Base LLM Client Interface
from abc import ABC, abstractmethod


class LLMClient(ABC):
    @abstractmethod
    def generate_text(self, * , system: str, user: str, temperature: float = 0.2,
    json_mode: bool = False) -> str:
        """
        Return the raw completion text.
        Must raise UpstreamError on transport failure or a non-success status.
        """
        raise NotImplementedError

    def generate_json(self, * , system: str, user: str, temperature: float = 0.2) -> str:
        """
        Ask the provider for a JSON object in native JSON output mode.
        Parsing and shape validation are left to the caller.
        """
        return self.generate_text(system=system, user=user,
        temperature=temperature, json_mode=True)
