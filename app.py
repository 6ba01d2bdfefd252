import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

from config import Config
from moodwave.auth import init_auth
from moodwave.database.db_manager import initialize_database
from moodwave.domain.catalog import CatalogClient
from moodwave.domain.playlists import PlaylistStore
from moodwave.errors import register_error_handlers
from moodwave.interfaces.http.routes import (
    auth_bp,
    discovery_bp,
    playlist_bp,
    health_bp,
)
from moodwave.observability import configure_structured_logging, metrics_blueprint, init_tracing


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # Read the toggle at call time so a reloaded config module is honoured
    from config import Config as _Cfg
    if _Cfg.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(config_overrides=None, catalog_client=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    configure_structured_logging(app)
    init_tracing(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    allowed_origins = sorted({
        origin.strip()
        for origin in app.config['CORS_ALLOWED_ORIGINS']
        if origin and origin.strip() and origin.strip() != "*"
    })
    CORS(
        app,
        resources={r"/api/*": {"origins": allowed_origins}, r"/user/*": {"origins": allowed_origins}},
        supports_credentials=True,
    )

    initialize_database(app)
    init_auth(app)
    register_error_handlers(app)

    # One catalog client (and its cached token) per process
    if catalog_client is None:
        catalog_client = CatalogClient.from_settings()
    app.extensions['catalog_client'] = catalog_client
    app.extensions['playlist_store'] = PlaylistStore()

    # --- Register Blueprints ---
    app.register_blueprint(auth_bp)
    app.register_blueprint(discovery_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    # In debug with reloader only the child process configures file logging
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'moodwave', 'log')
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    if not Config.SPOTIPY_CLIENT_ID or not Config.SPOTIPY_CLIENT_SECRET:
        logger.warning("Spotify API client ID or client secret not found in environment variables.")
        logger.warning("Please set SPOTIPY_CLIENT_ID and SPOTIPY_CLIENT_SECRET for full functionality.")

    app = create_app()
    app.run(debug=debug_mode, host='0.0.0.0', port=Config.PORT)
