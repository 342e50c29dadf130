from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from creative_arena.models import Battle, LeaderboardEntry, Score, User


class RecordStore(ABC):
    """Keyed storage for users, battles, scores and leaderboard entries.

    Adapters assign ids and serialize updates per record. No operation spans
    more than one record, so callers must not rely on cross-record atomicity.
    """

    # Users

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def create_user(self, username: str, password: str) -> User:
        pass

    # Battles

    @abstractmethod
    def get_battle(self, battle_id: int) -> Optional[Battle]:
        pass

    @abstractmethod
    def create_battle(self, prompt: str, user_id: int, opponent_type: str) -> Battle:
        pass

    @abstractmethod
    def update_battle(self, battle_id: int, **changes) -> Battle:
        """Apply column changes to a battle; raises BattleNotFound if absent."""

    @abstractmethod
    def list_completed_battles(self, user_id: Optional[int] = None,
                               since: Optional[datetime] = None) -> List[Battle]:
        pass

    # Scores

    @abstractmethod
    def get_score_by_battle_id(self, battle_id: int) -> Optional[Score]:
        pass

    @abstractmethod
    def create_score(self, battle_id: int, **fields) -> Score:
        """Create the single score for a battle; raises DuplicateRecord on a second call."""

    # Leaderboard

    @abstractmethod
    def get_leaderboard_entry(self, user_id: int) -> Optional[LeaderboardEntry]:
        pass

    @abstractmethod
    def create_leaderboard_entry(self, user_id: int, username: str, total_battles: int,
                                 wins: int, total_score: int) -> LeaderboardEntry:
        pass

    @abstractmethod
    def update_leaderboard_entry(self, user_id: int, **changes) -> LeaderboardEntry:
        pass

    @abstractmethod
    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        pass
