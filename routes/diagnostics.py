import logging
from flask import Blueprint, Response, flash, redirect, url_for

from utils.errors import ModelServiceError

logger = logging.getLogger(__name__)


def create_diagnostics_blueprint(model) -> Blueprint:
    diagnostics_bp = Blueprint("diagnostics", __name__)

    @diagnostics_bp.route("/test", methods=["GET"])
    def test_model():
        """Round-trip a trivial prompt to check the model is reachable."""
        logger.info("--> Sending diagnostic request to the model...")
        try:
            reply = model.generate("Hello how are you", "diagnostic")
        except ModelServiceError:
            flash("AI Analysis failed. Please try again.", "error")
            return redirect(url_for("pages.home"))
        return Response(reply.content, mimetype="text/plain")

    return diagnostics_bp
