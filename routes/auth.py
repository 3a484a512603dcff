import logging
from flask import Blueprint, flash, g, redirect, render_template, session, url_for

from services.auth_service import find_or_create_user
from utils.auth_guard import login_required
from utils.errors import AuthenticationError

logger = logging.getLogger(__name__)


def _safe_redirect_target(target):
    # Only same-site paths saved by the access guard
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("pages.home")


def create_auth_blueprint(users, identity_provider, settings) -> Blueprint:
    auth_bp = Blueprint("auth", __name__)

    @auth_bp.before_app_request
    def load_current_user():
        g.user = None
        user_id = session.get("user_id")
        if user_id:
            g.user = users.get_by_id(user_id)
            if g.user is None:
                logger.info(f"Dropping unknown user id from session: {user_id}")
                session.pop("user_id", None)

    @auth_bp.route("/login", methods=["GET"])
    def login():
        return render_template("login.html", title="Continue with Google", link="login")

    @auth_bp.route("/auth/google", methods=["GET"])
    def google_login():
        return identity_provider.authorize_redirect(settings.google_callback_url)

    @auth_bp.route("/auth/google/callback", methods=["GET"])
    def google_callback():
        try:
            profile = identity_provider.fetch_profile()
        except AuthenticationError as e:
            flash(e.message, "error")
            return redirect(url_for("pages.home"))

        result = find_or_create_user(users, profile)
        if not result.is_ok:
            flash(result.error, "error")
            return redirect(url_for("pages.home"))

        redirect_url = _safe_redirect_target(session.pop("redirect_url", None))
        session["user_id"] = result.value["id"]
        session.permanent = True
        flash("Welcome to MarketMapper !!", "success")
        logger.info(f"User {result.value['id']} signed in")
        return redirect(redirect_url)

    @auth_bp.route("/logout", methods=["GET"])
    @login_required
    def logout():
        session.pop("user_id", None)
        flash("You have been logged out.", "success")
        return redirect(url_for("pages.home"))

    return auth_bp
