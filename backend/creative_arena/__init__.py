import random

import click
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from flask_sqlalchemy import SQLAlchemy

from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5000",
    "http://127.0.0.1:5000",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def build_services(flask_app):
    """Wire the battle services from config and attach them to the app."""
    from creative_arena.services.battles.generation import build_client
    from creative_arena.services.battles.judge import Judge
    from creative_arena.services.battles.leaderboard import LeaderboardAggregator
    from creative_arena.services.battles.lifecycle import BattleLifecycle
    from creative_arena.services.battles.opponent import OpponentSolver
    from creative_arena.services.battles.prompts import PromptGenerator
    from creative_arena.socketio_events import emit_battle_update
    from creative_arena.storage import build_store

    cfg = flask_app.config
    rng = random.Random(cfg.get('RANDOM_SEED'))
    model = cfg.get('OPENAI_MODEL', 'gpt-4o')
    client = build_client(
        cfg.get('GENERATION_MODE', 'degraded'),
        cfg.get('OPENAI_API_KEY', ''),
        timeout=float(cfg.get('OPENAI_TIMEOUT_SEC', 30)),
    )
    store = build_store(cfg.get('STORAGE_BACKEND', 'sql'))
    leaderboard = LeaderboardAggregator(store)
    lifecycle = BattleLifecycle(
        store=store,
        prompts=PromptGenerator(client=client, model=model, rng=rng),
        opponent=OpponentSolver(client=client, model=model, rng=rng),
        judge=Judge(
            client=client,
            model=model,
            rng=rng,
            min_solution_length=int(cfg.get('JUDGE_MIN_SOLUTION_LENGTH', 20)),
            challenger_win_probability=float(cfg.get('JUDGE_CHALLENGER_WIN_PROBABILITY', 0.8)),
        ),
        leaderboard=leaderboard,
        notify=emit_battle_update,
    )
    flask_app.extensions['record_store'] = store
    flask_app.extensions['leaderboard'] = leaderboard
    flask_app.extensions['battle_lifecycle'] = lifecycle
    flask_app.logger.info(
        f"[startup] storage={cfg.get('STORAGE_BACKEND')} generation={'live' if client else 'degraded'}"
    )
    return lifecycle


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from creative_arena.main import main
    flask_app.register_blueprint(main)

    from creative_arena.api.battles import battles
    flask_app.register_blueprint(battles, url_prefix='/api/battles')

    from creative_arena.api.leaderboard import leaderboard_bp
    flask_app.register_blueprint(leaderboard_bp, url_prefix='/api/leaderboard')

    from creative_arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    build_services(flask_app)

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        import creative_arena.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('rebuild-leaderboard')
    def rebuild_leaderboard_command():
        """Replays completed battles into leaderboard entries."""
        with flask_app.app_context():
            count = flask_app.extensions['leaderboard'].rebuild_all()
            print(f'Rebuilt leaderboard entries for {count} players.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(rebuild_leaderboard_command)

    return flask_app
