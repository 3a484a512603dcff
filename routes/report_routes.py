import logging
from flask import Blueprint, flash, redirect, render_template, request, url_for

from models.prompt_submission import extract_submission_fields, validate_submission
from utils.auth_guard import login_required

logger = logging.getLogger(__name__)


def create_report_blueprint(analysis_service, reports) -> Blueprint:
    report_bp = Blueprint("reports", __name__)

    @report_bp.route("/result", methods=["POST"])
    @login_required
    def result():
        # Raises SubmissionValidationError (400) before any external call
        submission = validate_submission(extract_submission_fields(request))
        outcome = analysis_service.run(submission)
        return render_template(
            "result.html",
            title="Result",
            link="result",
            submission=submission,
            report=outcome.report,
            counts=outcome.counts,
        )

    @report_bp.route("/result", methods=["GET"])
    @login_required
    def result_landing():
        flash("Submit a business idea to generate a report.", "success")
        return redirect(url_for("pages.home"))

    @report_bp.route("/history", methods=["GET"])
    @login_required
    def history():
        return render_template("history.html", title="History", link="history", reports=reports.list_all())

    return report_bp
