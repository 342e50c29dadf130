import os

from dotenv import load_dotenv

load_dotenv()


def _default_generation_mode():
    return 'live' if os.environ.get('OPENAI_API_KEY') else 'degraded'


def _optional_int(name):
    raw = os.environ.get(name)
    return int(raw) if raw not in (None, '') else None


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///creative_arena.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # 'sql' (Flask-SQLAlchemy) or 'memory' (process lifetime only)
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'sql')
    # 'live' calls OpenAI, 'degraded' uses curated/procedural content only
    GENERATION_MODE = os.environ.get('GENERATION_MODE') or _default_generation_mode()
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY', '')
    OPENAI_MODEL = os.environ.get('OPENAI_MODEL', 'gpt-4o')
    OPENAI_TIMEOUT_SEC = float(os.environ.get('OPENAI_TIMEOUT_SEC', '30'))
    # Route-level minimum for a submitted solution
    MIN_SUBMISSION_LENGTH = int(os.environ.get('MIN_SUBMISSION_LENGTH', '10'))
    # Below this the judge awards the battle to the opponent without scoring
    JUDGE_MIN_SOLUTION_LENGTH = int(os.environ.get('JUDGE_MIN_SOLUTION_LENGTH', '20'))
    JUDGE_CHALLENGER_WIN_PROBABILITY = float(os.environ.get('JUDGE_CHALLENGER_WIN_PROBABILITY', '0.8'))
    # Seed for every degraded-mode random draw. None means unseeded.
    RANDOM_SEED = _optional_int('RANDOM_SEED')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
