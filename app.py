import logging
import requests
from datetime import timedelta
from flask import Flask, g, render_template
from flask_session import Session
from werkzeug.exceptions import HTTPException

from config.settings import Settings
from routes.auth import create_auth_blueprint
from routes.diagnostics import create_diagnostics_blueprint
from routes.pages import create_pages_blueprint
from routes.report_routes import create_report_blueprint
from services.identity_provider import GoogleIdentityProvider
from services.llm_functions import GenerativeModel, create_chat_model
from services.market_analysis_service import MarketAnalysisService
from services.overpass_service import OverpassClient
from services.query_synthesis_service import QuerySynthesizer
from services.rate_limiter import TokenBucket
from services.report_crud_service import ReportRepository
from services.scoring_service import ScoringService
from services.user_crud_service import UserRepository
from utils.errors import MarketMapperError
from utils.mongodb import SESSIONS, create_mongo_client, ensure_indexes, get_db

logger = logging.getLogger(__name__)


def configure_logging(settings):
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def configure_sessions(app, settings, mongo_client):
    app.secret_key = settings.secret
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=settings.session_lifetime_days)
    app.config["SESSION_COOKIE_HTTPONLY"] = True

    if settings.session_backend == "mongodb":
        app.config["SESSION_TYPE"] = "mongodb"
        app.config["SESSION_MONGODB"] = mongo_client
        app.config["SESSION_MONGODB_DB"] = settings.mongo_db_name
        app.config["SESSION_MONGODB_COLLECT"] = SESSIONS
        app.config["SESSION_PERMANENT"] = True
        Session(app)
        logger.info("Sessions stored in MongoDB")
    else:
        logger.info("Sessions stored in signed cookies")


def register_error_handlers(app):
    def render_error(code, message):
        return render_template("error.html", title="Error", link="error", code=code, message=message), code

    @app.errorhandler(MarketMapperError)
    def handle_app_error(e):
        logger.error(f"{type(e).__name__}: {e.message}")
        return render_error(e.status_code, e.message)

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return render_error(e.code, e.description)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error("Unhandled exception", exc_info=True)
        return render_error(500, "Something went wrong on our side. Please try again.")


def create_app(
    settings=None,
    *,
    db=None,
    mongo_client=None,
    chat_model=None,
    overpass_session=None,
    identity_provider=None,
    rate_limiter=None,
):
    """
    Application factory and composition root.

    Settings are read once and handed to every component. The keyword
    arguments replace external collaborators (database, model, HTTP
    session, OAuth provider, limiter); tests use them to run offline.
    """
    settings = settings or Settings.from_env()
    configure_logging(settings)

    if db is None:
        mongo_client = mongo_client or create_mongo_client(settings)
        db = get_db(mongo_client, settings)
    elif mongo_client is None:
        mongo_client = db.client
    ensure_indexes(db)

    app = Flask(__name__)
    app.config["DEBUG"] = settings.debug
    configure_sessions(app, settings, mongo_client)

    users = UserRepository(db)
    reports = ReportRepository(db)

    model = GenerativeModel(chat_model or create_chat_model(settings))
    rate_limiter = rate_limiter or TokenBucket(settings.overpass_rate_per_second, settings.overpass_burst)
    overpass = OverpassClient(overpass_session or requests.Session(), settings, rate_limiter)
    analysis_service = MarketAnalysisService(
        synthesizer=QuerySynthesizer(model, settings.search_radius_meters),
        overpass=overpass,
        scorer=ScoringService(model),
        reports=reports,
    )
    identity_provider = identity_provider or GoogleIdentityProvider(app, settings)

    app.register_blueprint(create_pages_blueprint(settings))
    app.register_blueprint(create_auth_blueprint(users, identity_provider, settings))
    app.register_blueprint(create_report_blueprint(analysis_service, reports))
    app.register_blueprint(create_diagnostics_blueprint(model))
    register_error_handlers(app)

    @app.context_processor
    def inject_auth():
        user = g.get("user")
        return {"auth": user is not None, "current_user": user}

    return app


if __name__ == '__main__':
    settings = Settings.from_env()
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port)
