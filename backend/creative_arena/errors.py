"""Domain errors raised by the battle services and mapped to HTTP by the API."""


class ArenaError(Exception):
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class ValidationError(ArenaError):
    """Invalid request"""
    status_code = 400


class BattleNotFound(ArenaError):
    """Battle not found"""
    status_code = 404


class ScoreNotFound(ArenaError):
    """Battle score not found"""
    status_code = 404


class LeaderboardEntryNotFound(ArenaError):
    """Leaderboard entry not found"""
    status_code = 404


class BattleAlreadyCompleted(ArenaError):
    """Battle already completed"""
    status_code = 400


class BattleNotCompleted(ArenaError):
    """Battle not yet completed"""
    status_code = 400


class InvalidBattleState(ArenaError):
    """Battle is not in a state that allows this change"""
    status_code = 409


class DuplicateRecord(ArenaError):
    """Record already exists"""
    status_code = 409
