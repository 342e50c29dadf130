from datetime import datetime, timezone

from werkzeug.security import generate_password_hash, check_password_hash

from creative_arena import db

GUEST_PASSWORD = 'guest'
MAX_USERNAME_LENGTH = 64

OPPONENT_AI = 'ai'
OPPONENT_HUMAN = 'human'
OPPONENT_TYPES = (OPPONENT_AI, OPPONENT_HUMAN)


def utcnow():
    # Naive UTC so values compare the same way before and after a SQL round trip
    return datetime.now(timezone.utc).replace(tzinfo=None)


def round_half_up(numerator, denominator):
    """Integer division rounded to nearest, halves rounding up."""
    return (2 * numerator + denominator) // (2 * denominator)


def _iso(value):
    return value.isoformat() + 'Z' if value else None


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(MAX_USERNAME_LENGTH), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Battle(db.Model):
    __tablename__ = 'battle'
    id = db.Column(db.Integer, primary_key=True)
    prompt = db.Column(db.Text, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    user_solution = db.Column(db.Text, nullable=True)
    ai_solution = db.Column(db.Text, nullable=True)
    user_score = db.Column(db.Integer, nullable=True)
    ai_score = db.Column(db.Integer, nullable=True)
    user_won = db.Column(db.Boolean, nullable=True)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    opponent_type = db.Column(db.String(16), default=OPPONENT_AI, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    @property
    def stage(self):
        """Lifecycle stage derived from which fields have been written."""
        if self.completed:
            return 'completed'
        if self.ai_solution is not None:
            return 'opponent_responded'
        if self.user_solution is not None:
            return 'challenger_submitted'
        return 'created'

    def to_dict(self):
        return {
            'id': self.id,
            'prompt': self.prompt,
            'userId': self.user_id,
            'userSolution': self.user_solution,
            'aiSolution': self.ai_solution,
            'userScore': self.user_score,
            'aiScore': self.ai_score,
            'userWon': self.user_won,
            'completed': bool(self.completed),
            'opponentType': self.opponent_type,
            'createdAt': _iso(self.created_at),
        }


class Score(db.Model):
    __tablename__ = 'score'
    id = db.Column(db.Integer, primary_key=True)
    battle_id = db.Column(db.Integer, db.ForeignKey('battle.id'), unique=True, nullable=False)
    user_originality = db.Column(db.Integer, nullable=False)
    user_logic = db.Column(db.Integer, nullable=False)
    user_expression = db.Column(db.Integer, nullable=False)
    ai_originality = db.Column(db.Integer, nullable=False)
    ai_logic = db.Column(db.Integer, nullable=False)
    ai_expression = db.Column(db.Integer, nullable=False)
    user_originality_feedback = db.Column(db.Text, nullable=True)
    user_logic_feedback = db.Column(db.Text, nullable=True)
    user_expression_feedback = db.Column(db.Text, nullable=True)
    ai_originality_feedback = db.Column(db.Text, nullable=True)
    ai_logic_feedback = db.Column(db.Text, nullable=True)
    ai_expression_feedback = db.Column(db.Text, nullable=True)
    judge_feedback = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'battleId': self.battle_id,
            'userOriginality': self.user_originality,
            'userLogic': self.user_logic,
            'userExpression': self.user_expression,
            'aiOriginality': self.ai_originality,
            'aiLogic': self.ai_logic,
            'aiExpression': self.ai_expression,
            'judgeFeedback': self.judge_feedback,
            'userOriginalityFeedback': self.user_originality_feedback,
            'userLogicFeedback': self.user_logic_feedback,
            'userExpressionFeedback': self.user_expression_feedback,
            'aiOriginalityFeedback': self.ai_originality_feedback,
            'aiLogicFeedback': self.ai_logic_feedback,
            'aiExpressionFeedback': self.ai_expression_feedback,
        }


class LeaderboardEntry(db.Model):
    __tablename__ = 'leaderboard_entry'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False)
    username = db.Column(db.String(MAX_USERNAME_LENGTH), nullable=False)
    total_battles = db.Column(db.Integer, default=0, nullable=False)
    wins = db.Column(db.Integer, default=0, nullable=False)
    # Sum of the player's challenger totals; avg_score is derived from it
    total_score = db.Column(db.Integer, default=0, nullable=False)

    @property
    def win_rate(self):
        if not self.total_battles:
            return 0
        return round_half_up(100 * self.wins, self.total_battles)

    @property
    def avg_score(self):
        if not self.total_battles:
            return 0
        return round_half_up(self.total_score or 0, self.total_battles)

    def to_dict(self, current_username=None):
        return {
            'id': self.id,
            'userId': self.user_id,
            'username': self.username,
            'totalBattles': self.total_battles,
            'wins': self.wins,
            'winRate': self.win_rate,
            'avgScore': self.avg_score,
            'isCurrentUser': current_username is not None and self.username == current_username,
        }
