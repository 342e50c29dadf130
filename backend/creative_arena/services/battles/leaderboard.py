import logging
import threading
from datetime import timedelta
from typing import Callable, Dict, List, Optional

from creative_arena.errors import ValidationError
from creative_arena.models import LeaderboardEntry, utcnow
from creative_arena.storage.base import RecordStore

logger = logging.getLogger(__name__)

ALL_TIME = 'all-time'
PERIOD_WINDOWS = {
    ALL_TIME: None,
    'monthly': timedelta(days=30),
    'weekly': timedelta(days=7),
}


class LeaderboardAggregator:
    """Owns leaderboard entries: one per player, updated once per completed battle.

    All-time standings come from the stored entries. Weekly and monthly
    standings are replayed from completed battles inside the window.
    """

    def __init__(self, store: RecordStore, clock: Callable = utcnow):
        self.store = store
        self.clock = clock
        self._lock = threading.Lock()

    def record_outcome(self, username: str, player_id: int, did_win: bool, score: int = 0) -> LeaderboardEntry:
        """Fold one completed battle into the player's entry.

        Must be called exactly once per completed battle.
        """
        with self._lock:
            entry = self.store.get_leaderboard_entry(player_id)
            if entry is None:
                entry = self.store.create_leaderboard_entry(
                    user_id=player_id,
                    username=username,
                    total_battles=1,
                    wins=1 if did_win else 0,
                    total_score=score or 0,
                )
            else:
                entry = self.store.update_leaderboard_entry(
                    player_id,
                    username=username,
                    total_battles=entry.total_battles + 1,
                    wins=entry.wins + (1 if did_win else 0),
                    total_score=(entry.total_score or 0) + (score or 0),
                )
        logger.info(
            f"[leaderboard] user={player_id} battles={entry.total_battles} wins={entry.wins} win_rate={entry.win_rate}"
        )
        return entry

    def ranked_view(self, period: str = ALL_TIME, requesting_username: Optional[str] = None) -> List[dict]:
        if period not in PERIOD_WINDOWS:
            raise ValidationError(f"Unknown leaderboard period: {period}")
        window = PERIOD_WINDOWS[period]
        if window is None:
            entries = self.store.list_leaderboard_entries()
        else:
            entries = self._replay(since=self.clock() - window)
        ranked = sorted(entries, key=lambda e: (-e.avg_score, -e.win_rate, e.username))
        return [e.to_dict(current_username=requesting_username or None) for e in ranked]

    def rebuild_entry(self, player_id: int) -> Optional[LeaderboardEntry]:
        """Recompute a player's entry from their completed battles.

        Repairs drift left by a battle that completed without its leaderboard
        update. Returns None when the player has no completed battles.
        """
        user = self.store.get_user(player_id)
        battles = self.store.list_completed_battles(user_id=player_id)
        if user is None or not battles:
            return None
        totals = {
            'username': user.username,
            'total_battles': len(battles),
            'wins': sum(1 for b in battles if b.user_won),
            'total_score': sum(b.user_score or 0 for b in battles),
        }
        with self._lock:
            if self.store.get_leaderboard_entry(player_id) is None:
                entry = self.store.create_leaderboard_entry(user_id=player_id, **totals)
            else:
                entry = self.store.update_leaderboard_entry(player_id, **totals)
        logger.info(f"[leaderboard-rebuild] user={player_id} battles={entry.total_battles} wins={entry.wins}")
        return entry

    def rebuild_all(self) -> int:
        player_ids = sorted({b.user_id for b in self.store.list_completed_battles()})
        for player_id in player_ids:
            self.rebuild_entry(player_id)
        return len(player_ids)

    def _replay(self, since) -> List[LeaderboardEntry]:
        entries: Dict[int, LeaderboardEntry] = {}
        for battle in self.store.list_completed_battles(since=since):
            entry = entries.get(battle.user_id)
            if entry is None:
                user = self.store.get_user(battle.user_id)
                stored = self.store.get_leaderboard_entry(battle.user_id)
                entry = LeaderboardEntry(
                    id=stored.id if stored else None,
                    user_id=battle.user_id,
                    username=user.username if user else f"user-{battle.user_id}",
                    total_battles=0,
                    wins=0,
                    total_score=0,
                )
                entries[battle.user_id] = entry
            entry.total_battles += 1
            entry.wins += 1 if battle.user_won else 0
            entry.total_score += battle.user_score or 0
        return list(entries.values())
