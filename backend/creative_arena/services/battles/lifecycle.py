import logging
import threading
import time
from typing import Callable, Optional, Set, Tuple

from creative_arena.errors import (
    BattleAlreadyCompleted,
    BattleNotCompleted,
    BattleNotFound,
    DuplicateRecord,
    InvalidBattleState,
    ScoreNotFound,
    ValidationError,
)
from creative_arena.models import (
    GUEST_PASSWORD,
    MAX_USERNAME_LENGTH,
    OPPONENT_AI,
    OPPONENT_HUMAN,
    OPPONENT_TYPES,
    Battle,
    Score,
    User,
)
from creative_arena.storage.base import RecordStore
from .judge import Evaluation, Judge
from .leaderboard import LeaderboardAggregator
from .opponent import OpponentSolver
from .prompts import PromptGenerator

logger = logging.getLogger(__name__)

GUEST_NAME = 'Guest'

# Stages reported to listeners after each persisted write
STAGE_CREATED = 'created'
STAGE_CHALLENGER_SUBMITTED = 'challenger_submitted'
STAGE_OPPONENT_RESPONDED = 'opponent_responded'
STAGE_COMPLETED = 'completed'


class BattleLifecycle:
    """Runs a battle from creation to completion.

    Submission is one sequential chain: store the challenger's answer, get
    the opponent's answer, judge both, store the totals and the score
    breakdown, then update the leaderboard. Each step is persisted as it
    happens and nothing is rolled back if a later step fails.
    """

    def __init__(self, store: RecordStore, prompts: PromptGenerator, opponent: OpponentSolver,
                 judge: Judge, leaderboard: LeaderboardAggregator,
                 notify: Optional[Callable[[int, str], None]] = None):
        self.store = store
        self.prompts = prompts
        self.opponent = opponent
        self.judge = judge
        self.leaderboard = leaderboard
        self.notify = notify
        self._in_flight: Set[int] = set()
        self._in_flight_lock = threading.Lock()

    # Players

    def get_or_create_user(self, username: str) -> Tuple[User, bool]:
        """Return (user, created) for a name-only guest identity."""
        if len(username) > MAX_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at most {MAX_USERNAME_LENGTH} characters")
        existing = self.store.get_user_by_username(username)
        if existing:
            return existing, False
        try:
            return self.store.create_user(username, GUEST_PASSWORD), True
        except DuplicateRecord:
            # Lost a race with a concurrent request for the same name
            return self.store.get_user_by_username(username), False

    def resolve_player(self, username: Optional[str]) -> User:
        name = (username or '').strip()
        if name and name != GUEST_NAME:
            user, _ = self.get_or_create_user(name)
            return user
        return self._create_guest()

    def _create_guest(self) -> User:
        base = f"{GUEST_NAME}_{int(time.time() * 1000)}"
        candidate, suffix = base, 1
        while True:
            try:
                return self.store.create_user(candidate, GUEST_PASSWORD)
            except DuplicateRecord:
                suffix += 1
                candidate = f"{base}_{suffix}"

    # Battles

    def create_battle(self, opponent_type: Optional[str] = OPPONENT_AI, username: Optional[str] = None) -> Battle:
        if opponent_type not in OPPONENT_TYPES:
            opponent_type = OPPONENT_AI
        user = self.resolve_player(username)
        prompt = self.prompts.generate()
        battle = self.store.create_battle(prompt=prompt, user_id=user.id, opponent_type=opponent_type)
        if opponent_type == OPPONENT_HUMAN:
            logger.info(f"[battle-create] battle={battle.id} opponent=human served by automated opponent")
        logger.info(f"[battle-create] battle={battle.id} user={user.id} opponent={opponent_type}")
        self._notify(battle.id, STAGE_CREATED)
        return battle

    def get_battle(self, battle_id: int) -> Battle:
        battle = self.store.get_battle(battle_id)
        if battle is None:
            raise BattleNotFound()
        return battle

    def submit_solution(self, battle_id: int, solution: str) -> Battle:
        with self._in_flight_lock:
            if battle_id in self._in_flight:
                raise InvalidBattleState("A solution for this battle is already being judged")
            self._in_flight.add(battle_id)
        try:
            return self._run_submission(battle_id, solution)
        finally:
            with self._in_flight_lock:
                self._in_flight.discard(battle_id)

    def _run_submission(self, battle_id: int, solution: str) -> Battle:
        battle = self.get_battle(battle_id)
        if battle.completed:
            raise BattleAlreadyCompleted()
        if battle.user_solution is not None:
            raise InvalidBattleState("A solution was already submitted for this battle")
        prompt = battle.prompt
        owner_id = battle.user_id

        self.store.update_battle(battle_id, user_solution=solution)
        logger.info(f"[battle-submit] battle={battle_id} solution_len={len(solution)}")
        self._notify(battle_id, STAGE_CHALLENGER_SUBMITTED)

        ai_solution = self.opponent.solve(prompt)
        self.store.update_battle(battle_id, ai_solution=ai_solution)
        self._notify(battle_id, STAGE_OPPONENT_RESPONDED)

        evaluation = self.judge.evaluate(prompt, solution, ai_solution)
        battle = self.store.update_battle(
            battle_id,
            user_score=evaluation.challenger.total,
            ai_score=evaluation.opponent.total,
            user_won=evaluation.challenger_won,
            completed=True,
        )
        self.store.create_score(battle_id, **self._score_fields(evaluation))
        logger.info(
            f"[battle-complete] battle={battle_id} winner={evaluation.winner} "
            f"user_total={evaluation.challenger.total} ai_total={evaluation.opponent.total}"
        )
        self._notify(battle_id, STAGE_COMPLETED)

        owner = self.store.get_user(owner_id)
        if owner is not None:
            self.leaderboard.record_outcome(
                owner.username, owner.id, evaluation.challenger_won, score=evaluation.challenger.total
            )
        else:
            logger.warning(f"[battle-complete] battle={battle_id} owner={owner_id} missing; leaderboard not updated")
        return battle

    def get_results(self, battle_id: int) -> Tuple[Battle, Score]:
        battle = self.get_battle(battle_id)
        if not battle.completed:
            raise BattleNotCompleted()
        score = self.store.get_score_by_battle_id(battle_id)
        if score is None:
            raise ScoreNotFound()
        return battle, score

    @staticmethod
    def _score_fields(evaluation: Evaluation) -> dict:
        user, ai = evaluation.challenger, evaluation.opponent
        return {
            'user_originality': user.originality,
            'user_logic': user.logic,
            'user_expression': user.expression,
            'ai_originality': ai.originality,
            'ai_logic': ai.logic,
            'ai_expression': ai.expression,
            'user_originality_feedback': user.originality_feedback,
            'user_logic_feedback': user.logic_feedback,
            'user_expression_feedback': user.expression_feedback,
            'ai_originality_feedback': ai.originality_feedback,
            'ai_logic_feedback': ai.logic_feedback,
            'ai_expression_feedback': ai.expression_feedback,
            'judge_feedback': evaluation.judge_feedback,
        }

    def _notify(self, battle_id: int, stage: str) -> None:
        if self.notify is None:
            return
        try:
            self.notify(battle_id, stage)
        except Exception as exc:
            logger.warning(f"[battle-notify] battle={battle_id} stage={stage} failed: {exc}")
