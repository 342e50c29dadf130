from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from creative_arena import db
from creative_arena.errors import BattleNotFound, DuplicateRecord, LeaderboardEntryNotFound
from creative_arena.models import Battle, LeaderboardEntry, Score, User, utcnow
from creative_arena.storage.base import RecordStore


class SqlRecordStore(RecordStore):
    """Record store backed by the Flask-SQLAlchemy session.

    Every write commits immediately so readers observe battle mutations in
    the order they were made. Must be used inside an application context.
    """

    def _commit(self, record, duplicate_message):
        db.session.add(record)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise DuplicateRecord(duplicate_message) from exc
        return record

    def get_user(self, user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    def create_user(self, username: str, password: str) -> User:
        user = User(username=username)
        user.set_password(password)
        return self._commit(user, f"Username {username!r} already exists")

    def get_battle(self, battle_id: int) -> Optional[Battle]:
        return db.session.get(Battle, battle_id)

    def create_battle(self, prompt: str, user_id: int, opponent_type: str) -> Battle:
        battle = Battle(
            prompt=prompt,
            user_id=user_id,
            opponent_type=opponent_type,
            completed=False,
            created_at=utcnow(),
        )
        db.session.add(battle)
        db.session.commit()
        return battle

    def update_battle(self, battle_id: int, **changes) -> Battle:
        battle = db.session.get(Battle, battle_id)
        if battle is None:
            raise BattleNotFound(f"Battle with ID {battle_id} not found")
        for key, value in changes.items():
            setattr(battle, key, value)
        db.session.add(battle)
        db.session.commit()
        return battle

    def list_completed_battles(self, user_id: Optional[int] = None,
                               since: Optional[datetime] = None) -> List[Battle]:
        query = Battle.query.filter_by(completed=True)
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        if since is not None:
            query = query.filter(Battle.created_at >= since)
        return query.order_by(Battle.id).all()

    def get_score_by_battle_id(self, battle_id: int) -> Optional[Score]:
        return Score.query.filter_by(battle_id=battle_id).first()

    def create_score(self, battle_id: int, **fields) -> Score:
        score = Score(battle_id=battle_id, **fields)
        return self._commit(score, f"Score for battle {battle_id} already exists")

    def get_leaderboard_entry(self, user_id: int) -> Optional[LeaderboardEntry]:
        return LeaderboardEntry.query.filter_by(user_id=user_id).first()

    def create_leaderboard_entry(self, user_id: int, username: str, total_battles: int,
                                 wins: int, total_score: int) -> LeaderboardEntry:
        entry = LeaderboardEntry(
            user_id=user_id,
            username=username,
            total_battles=total_battles,
            wins=wins,
            total_score=total_score,
        )
        return self._commit(entry, f"Leaderboard entry for user {user_id} already exists")

    def update_leaderboard_entry(self, user_id: int, **changes) -> LeaderboardEntry:
        entry = self.get_leaderboard_entry(user_id)
        if entry is None:
            raise LeaderboardEntryNotFound(f"No leaderboard entry for user {user_id}")
        for key, value in changes.items():
            setattr(entry, key, value)
        db.session.add(entry)
        db.session.commit()
        return entry

    def list_leaderboard_entries(self) -> List[LeaderboardEntry]:
        return LeaderboardEntry.query.all()
