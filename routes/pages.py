from flask import Blueprint, render_template


def create_pages_blueprint(settings) -> Blueprint:
    pages_bp = Blueprint("pages", __name__)

    @pages_bp.route("/", methods=["GET"])
    def home():
        return render_template("home.html", title="Home", link="home", radius=settings.search_radius_meters)

    return pages_bp
