import json
import logging
import math
import random
import re
from dataclasses import dataclass
from typing import Optional

from .content import (
    COMMENTARY_POOLS,
    CRITERIA,
    DEGENERATE_FEEDBACK,
    FEEDBACK_POOLS,
    OPPONENT_FAILURE_MARKER,
    SENTINEL_FEEDBACK,
)
from .generation import GenerationError, chat_text

logger = logging.getLogger(__name__)

CHALLENGER = 'user'
OPPONENT = 'ai'

MIN_SUBSCORE = 0
MAX_SUBSCORE = 100

# Degraded scoring bands. The ranges do not overlap, so the drawn winner
# always has the higher subscore on every criterion.
WINNER_BAND = (75, 95)
LOSER_BAND = (55, 74)

JUDGE_SYSTEM = """You are an impartial judge in a creativity battle. You'll evaluate two solutions to a creative prompt based on:

1. Originality (0-100): Novelty, uniqueness, and innovation
2. Logic (0-100): Feasibility, practicality, and coherence
3. Expression (0-100): Clarity, engagement, and communication quality

Provide detailed feedback for each category for both solutions. Calculate a total score for each participant (sum of the three scores). Determine the winner based on total score. If scores are tied, choose the solution with higher originality.

Output your evaluation as a JSON object with this format:
{
  "userScore": {
    "originality": number,
    "logic": number,
    "expression": number,
    "originalityFeedback": string,
    "logicFeedback": string,
    "expressionFeedback": string,
    "total": number
  },
  "aiScore": {
    "originality": number,
    "logic": number,
    "expression": number,
    "originalityFeedback": string,
    "logicFeedback": string,
    "expressionFeedback": string,
    "total": number
  },
  "judgeFeedback": string,
  "winner": "user" or "ai"
}"""


@dataclass
class PartyScore:
    originality: int
    logic: int
    expression: int
    originality_feedback: str = ''
    logic_feedback: str = ''
    expression_feedback: str = ''

    @property
    def total(self) -> int:
        return self.originality + self.logic + self.expression

    def to_dict(self) -> dict:
        return {
            'originality': self.originality,
            'logic': self.logic,
            'expression': self.expression,
            'originalityFeedback': self.originality_feedback,
            'logicFeedback': self.logic_feedback,
            'expressionFeedback': self.expression_feedback,
            'total': self.total,
        }


@dataclass
class Evaluation:
    challenger: PartyScore
    opponent: PartyScore
    judge_feedback: str
    winner: str

    @property
    def challenger_won(self) -> bool:
        return self.winner == CHALLENGER

    def to_dict(self) -> dict:
        return {
            'userScore': self.challenger.to_dict(),
            'aiScore': self.opponent.to_dict(),
            'judgeFeedback': self.judge_feedback,
            'winner': self.winner,
        }


def decide_winner(challenger: PartyScore, opponent: PartyScore) -> str:
    """Higher total wins; a tied total goes to the higher originality.

    If originality also ties, the challenger wins.
    """
    if challenger.total != opponent.total:
        return CHALLENGER if challenger.total > opponent.total else OPPONENT
    if opponent.originality > challenger.originality:
        return OPPONENT
    return CHALLENGER


def _coerce_json(raw: str):
    try:
        return json.loads(raw)
    except ValueError:
        pass
    if raw and '{' in raw and '}' in raw:
        snippet = raw[raw.find('{'): raw.rfind('}') + 1]
        snippet = re.sub(r",\s*}", "}", snippet)
        try:
            return json.loads(snippet)
        except ValueError:
            pass
    return None


def _parse_subscore(party: dict, criterion: str) -> int:
    value = party.get(criterion)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GenerationError('invalid', f"{criterion} is not a number")
    if not math.isfinite(value):
        raise GenerationError('invalid', f"{criterion}={value} is not finite")
    value = int(round(value))
    if not MIN_SUBSCORE <= value <= MAX_SUBSCORE:
        raise GenerationError('invalid', f"{criterion}={value} out of range")
    return value


def _parse_party(data: dict, key: str) -> PartyScore:
    party = data.get(key)
    if not isinstance(party, dict):
        raise GenerationError('invalid', f"missing {key}")
    scores = {c: _parse_subscore(party, c) for c in CRITERIA}
    feedback = {f"{c}_feedback": str(party.get(f"{c}Feedback") or '') for c in CRITERIA}
    return PartyScore(**scores, **feedback)


def parse_evaluation(raw: str) -> Evaluation:
    """Parse the judge model's JSON reply into an Evaluation.

    Totals are recomputed from the subscores and the winner is derived from
    them, so a model that miscounts cannot produce an inconsistent result.
    """
    data = _coerce_json(raw)
    if not isinstance(data, dict):
        raise GenerationError('invalid', 'reply was not a JSON object')
    challenger = _parse_party(data, 'userScore')
    opponent = _parse_party(data, 'aiScore')
    commentary = data.get('judgeFeedback')
    if not isinstance(commentary, str) or not commentary.strip():
        raise GenerationError('invalid', 'missing judgeFeedback')
    winner = decide_winner(challenger, opponent)
    if data.get('winner') not in (None, winner):
        logger.info(f"[judge-winner-corrected] model_said={data.get('winner')} totals_say={winner}")
    return Evaluation(challenger, opponent, commentary.strip(), winner)


class Judge:
    """Scores a challenger and an opponent solution and names a winner.

    Rules are applied in order: opponent forfeit, challenger answer too short,
    live judgment through OpenAI, then procedural scoring. Errors from the
    judgment dependency never escape ``evaluate``.
    """

    def __init__(self, client=None, model: str = 'gpt-4o', rng: Optional[random.Random] = None,
                 min_solution_length: int = 20, challenger_win_probability: float = 0.8):
        self.client = client
        self.model = model
        self.rng = rng or random.Random()
        self.min_solution_length = min_solution_length
        self.challenger_win_probability = challenger_win_probability

    def evaluate(self, prompt: str, challenger_solution: Optional[str],
                 opponent_solution: Optional[str]) -> Evaluation:
        if OPPONENT_FAILURE_MARKER in (opponent_solution or ''):
            logger.info("[judge-forfeit] opponent produced no solution")
            return self._forfeit()
        if len((challenger_solution or '').strip()) < self.min_solution_length:
            logger.info(f"[judge-insufficient] challenger_len={len(challenger_solution or '')}")
            return self._insufficient()
        if self.client is not None:
            try:
                return self._judge_live(prompt, challenger_solution, opponent_solution)
            except GenerationError as exc:
                logger.warning(f"[judge-fallback] reason={exc.reason}")
        return self._judge_degraded()

    def _judge_live(self, prompt, challenger_solution, opponent_solution) -> Evaluation:
        user_message = (
            f"Prompt: {prompt}\n\n"
            f"User solution:\n{challenger_solution}\n\n"
            f"AI solution:\n{opponent_solution}\n\n"
            "Please evaluate both solutions fairly and provide your judgment."
        )
        raw = chat_text(
            self.client,
            self.model,
            [
                {'role': 'system', 'content': JUDGE_SYSTEM},
                {'role': 'user', 'content': user_message},
            ],
            temperature=0.2,
            max_tokens=1000,
            response_format={'type': 'json_object'},
        )
        return parse_evaluation(raw)

    def _judge_degraded(self) -> Evaluation:
        challenger_favoured = self.rng.random() < self.challenger_win_probability
        winner_scores = self._procedural_party(WINNER_BAND, 'winner')
        loser_scores = self._procedural_party(LOSER_BAND, 'loser')
        if challenger_favoured:
            challenger, opponent = winner_scores, loser_scores
        else:
            challenger, opponent = loser_scores, winner_scores
        winner = decide_winner(challenger, opponent)
        commentary = self.rng.choice(COMMENTARY_POOLS[winner])
        return Evaluation(challenger, opponent, commentary, winner)

    def _procedural_party(self, band, outcome) -> PartyScore:
        low, high = band
        scores = {c: self.rng.randint(low, high) for c in CRITERIA}
        feedback = {f"{c}_feedback": self.rng.choice(FEEDBACK_POOLS[outcome][c]) for c in CRITERIA}
        return PartyScore(**scores, **feedback)

    @staticmethod
    def _forfeit() -> Evaluation:
        challenger = PartyScore(85, 80, 82, *([SENTINEL_FEEDBACK['winner']] * 3))
        opponent = PartyScore(10, 10, 10, *([SENTINEL_FEEDBACK['loser']] * 3))
        return Evaluation(challenger, opponent, SENTINEL_FEEDBACK['commentary'], CHALLENGER)

    @staticmethod
    def _insufficient() -> Evaluation:
        challenger = PartyScore(45, 40, 42, *([DEGENERATE_FEEDBACK['loser']] * 3))
        opponent = PartyScore(78, 80, 76, *([DEGENERATE_FEEDBACK['winner']] * 3))
        return Evaluation(challenger, opponent, DEGENERATE_FEEDBACK['commentary'], OPPONENT)
