import logging
import random
from typing import Dict, Optional, Sequence

from .content import CURATED_SOLUTIONS, GENERIC_SOLUTIONS, OPPONENT_FAILURE_TEXT
from .generation import GenerationError, chat_text

logger = logging.getLogger(__name__)

SOLVER_SYSTEM = (
    "You are a creative problem solver participating in a creativity battle. You will be given a creative prompt "
    "and must provide an innovative, logical, and well-expressed solution. Your solution should be original, "
    "practical, and clearly communicated. Aim for approximately 150-250 words."
)


class OpponentSolver:
    """Writes the automated opponent's answer to a prompt.

    Live mode asks OpenAI first. Any failure there falls through to curated
    solutions for known prompts, then to generic templates, and finally to
    OPPONENT_FAILURE_TEXT, which the judge recognises as a forfeit.
    """

    def __init__(self, client=None, model: str = 'gpt-4o', rng: Optional[random.Random] = None,
                 curated: Optional[Dict[str, Sequence[str]]] = None,
                 generic: Optional[Sequence[str]] = None):
        self.client = client
        self.model = model
        self.rng = rng or random.Random()
        self.curated = CURATED_SOLUTIONS if curated is None else curated
        self.generic = GENERIC_SOLUTIONS if generic is None else generic

    def solve(self, prompt: str) -> str:
        if self.client is not None:
            try:
                return self._generate(prompt)
            except GenerationError as exc:
                logger.warning(f"[opponent-fallback] reason={exc.reason} prompt_len={len(prompt or '')}")
        solution = self._curated_solution(prompt) or self._generic_solution(prompt)
        if solution:
            return solution
        logger.error(f"[opponent-failed] no content available for prompt_len={len(prompt or '')}")
        return OPPONENT_FAILURE_TEXT

    def _generate(self, prompt: str) -> str:
        return chat_text(
            self.client,
            self.model,
            [
                {'role': 'system', 'content': SOLVER_SYSTEM},
                {'role': 'user', 'content': f"Creative challenge: {prompt}"},
            ],
            temperature=0.8,
            max_tokens=500,
        )

    def _curated_solution(self, prompt: str) -> Optional[str]:
        candidates = [c for c in self.curated.get((prompt or '').strip(), ()) if c]
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def _generic_solution(self, prompt: str) -> Optional[str]:
        templates = [t for t in self.generic if t]
        if not templates:
            return None
        topic = (prompt or '').strip().rstrip('.') or 'this challenge'
        return self.rng.choice(templates).format(prompt=topic)
