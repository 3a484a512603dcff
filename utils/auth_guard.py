from functools import wraps
from flask import flash, g, redirect, request, session, url_for

NOT_AUTHENTICATED = "You are not authenticated to perform this operation."


def requested_path():
    # full_path always ends with "?" even without a query string
    return request.full_path.rstrip("?") if request.query_string else request.path


def login_required(view):
    """Send anonymous users to /login, remembering where they were going."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if g.get("user") is None:
            session["redirect_url"] = requested_path()
            flash(NOT_AUTHENTICATED, "error")
            return redirect(url_for("auth.login"))
        return view(*args, **kwargs)
    return wrapped
