from typing import Dict, List, Optional

from huggingface_hub import InferenceClient

from .logger import get_logger

logger = get_logger(__name__)


class ChatCompleter:
    """Chat completion against an OpenAI compatible endpoint."""

    def __init__(self, api_key: Optional[str], base_url: str, model: str, timeout: float = None, max_tokens: int = 500):
        self.client = InferenceClient(base_url=base_url, api_key=api_key, timeout=timeout)
        self.model = model
        self.max_tokens = max_tokens

    def complete(self, messages: List[Dict[str, str]]) -> str:
        try:
            response = self.client.chat_completion(
                messages=messages,
                model=self.model,
                max_tokens=self.max_tokens,
            )
            answer = response.choices[0].message.content
        except Exception as e:
            logger.error(f"LLM call failed: {e}", exc_info=True)
            raise
        if answer is None:
            raise ValueError("Empty response from LLM")
        return answer
