import itertools
import threading
from datetime import datetime
from typing import Dict, List, Optional

from creative_arena.errors import BattleNotFound, DuplicateRecord, LeaderboardEntryNotFound
from creative_arena.models import Battle, LeaderboardEntry, Score, User, utcnow
from creative_arena.storage.base import RecordStore


class InMemoryRecordStore(RecordStore):
    """Record store that lives for the lifetime of the process.

    Holds transient model instances so serialization matches the SQL adapter.
    A single lock serializes every read-modify-write.
    """

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._battles: Dict[int, Battle] = {}
        self._scores: Dict[int, Score] = {}
        self._leaderboard: Dict[int, LeaderboardEntry] = {}
        self._user_ids = itertools.count(1)
        self._battle_ids = itertools.count(1)
        self._score_ids = itertools.count(1)
        self._leaderboard_ids = itertools.count(1)
        self._lock = threading.RLock()

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, username: str, password: str) -> User:
        with self._lock:
            if self.get_user_by_username(username):
                raise DuplicateRecord(f"Username {username!r} already exists")
            user = User(id=next(self._user_ids), username=username)
            user.set_password(password)
            self._users[user.id] = user
            return user

    def get_battle(self, battle_id: int) -> Optional[Battle]:
        return self._battles.get(battle_id)

    def create_battle(self, prompt: str, user_id: int, opponent_type: str) -> Battle:
        with self._lock:
            battle = Battle(
                id=next(self._battle_ids),
                prompt=prompt,
                user_id=user_id,
                user_solution=None,
                ai_solution=None,
                user_score=None,
                ai_score=None,
                user_won=None,
                completed=False,
                opponent_type=opponent_type,
                created_at=utcnow(),
            )
            self._battles[battle.id] = battle
            return battle

    def update_battle(self, battle_id: int, **changes) -> Battle:
        with self._lock:
            battle = self._battles.get(battle_id)
            if battle is None:
                raise BattleNotFound(f"Battle with ID {battle_id} not found")
            for key, value in changes.items():
                setattr(battle, key, value)
            return battle

    def list_completed_battles(self, user_id: Optional[int] = None,
                               since: Optional[datetime] = None) -> List[Battle]:
        with self._lock:
            battles = [b for b in self._battles.values() if b.completed]
        if user_id is not None:
            battles = [b for b in battles if b.user_id == user_id]
        if since is not None:
            battles = [b for b in battles if b.created_at >= since]
        return sorted(battles, key=lambda b: b.id)

    def get_score_by_battle_id(self, battle_id: int) -> Optional[Score]:
        with self._lock:
            return next((s for s in self._scores.values() if s.battle_id == battle_id), None)

    def create_score(self, battle_id: int, **fields) -> Score:
        with self._lock:
            if self.get_score_by_battle_id(battle_id):
                raise DuplicateRecord(f"Score for battle {battle_id} already exists")
            score = Score(id=next(self._score_ids), battle_id=battle_id, **fields)
            self._scores[score.id] = score
            return score

    def get_leaderboard_entry(self, user_id: int) -> Optional[LeaderboardEntry]:
        with self._lock:
            return next((e for e in self._leaderboard.values() if e.user_id == user_id), None)

    def create_leaderboard_entry(self, user_id: int, username: str, total_battles: int,
                                 wins: int, total_score: int) -> LeaderboardEntry:
        with self._lock:
            if self.get_leaderboard_entry(user_id):
                raise DuplicateRecord(f"Leaderboard entry for user {user_id} already exists")
            entry = LeaderboardEntry(
                id=next(self._leaderboard_ids),
                user_id=user_id,
                username=username,
                total_battles=total_battles,
                wins=wins,
                total_score=total_score,
            )
            self._leaderboard[entry.id] = entry
            return entry

    def update_leaderboard_entry(self, user_id: int, **changes) -> LeaderboardEntry:
        with self._lock:
            entry = self.get_leaderboard_entry(user_id)
            if entry is None:
                raise LeaderboardEntryNotFound(f"No leaderboard entry for user {user_id}")
            for key, value in changes.items():
                setattr(entry, key, value)
            return entry

    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        with self._lock:
            return list(self._leaderboard.values())

    def clear(self):
        """Drop every record (only for testing)."""
        with self._lock:
            self._users.clear()
            self._battles.clear()
            self._scores.clear()
            self._leaderboard.clear()
