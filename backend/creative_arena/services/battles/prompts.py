import logging
import random
from typing import Optional, Sequence

from .content import FALLBACK_PROMPTS
from .generation import GenerationError, chat_text

logger = logging.getLogger(__name__)

PROMPT_SYSTEM = (
    "You are a creativity coach who creates thought-provoking creative challenges. Generate ONE creative prompt "
    "that would make for an interesting 3-minute creativity battle. The prompt should be open-ended enough to allow "
    "for multiple approaches but specific enough to provide direction. Don't include any additional text, just the "
    "prompt itself."
)


class PromptGenerator:
    """Produces one creative challenge per battle. Never raises."""

    def __init__(self, client=None, model: str = 'gpt-4o', rng: Optional[random.Random] = None,
                 fallback_prompts: Sequence[str] = FALLBACK_PROMPTS):
        self.client = client
        self.model = model
        self.rng = rng or random.Random()
        self.fallback_prompts = list(fallback_prompts)

    def generate(self) -> str:
        if self.client is not None:
            try:
                prompt = chat_text(
                    self.client,
                    self.model,
                    [{'role': 'system', 'content': PROMPT_SYSTEM}],
                    temperature=0.9,
                    max_tokens=100,
                )
                prompt = prompt.strip('"').strip()
                if prompt:
                    return prompt
                logger.warning("[prompt-fallback] reason=empty")
            except GenerationError as exc:
                logger.warning(f"[prompt-fallback] reason={exc.reason}")
        return self.rng.choice(self.fallback_prompts)
