import dataclasses

import pytest

from app import create_app


@pytest.fixture
def mongo_session_app(settings, db, chat_model, overpass_session, limiter, identity_provider, monkeypatch):
    # Flask-Session only accepts a real pymongo client; let it take mongomock's
    monkeypatch.setattr("flask_session.mongodb.mongodb.MongoClient", type(db.client))
    app = create_app(
        dataclasses.replace(settings, session_backend="mongodb"),
        db=db,
        chat_model=chat_model,
        overpass_session=overpass_session,
        identity_provider=identity_provider,
        rate_limiter=limiter,
    )
    app.config["TESTING"] = True
    return app


def test_sessions_are_stored_in_mongodb(mongo_session_app, db):
    client = mongo_session_app.test_client()

    client.get("/auth/google/callback")
    response = client.get("/history")

    assert response.status_code == 200
    assert db["sessions"].count_documents({}) >= 1


def test_mongodb_session_lifetime_is_seven_days(mongo_session_app):
    assert mongo_session_app.config["SESSION_TYPE"] == "mongodb"
    assert mongo_session_app.config["PERMANENT_SESSION_LIFETIME"].days == 7


def test_logout_ends_mongodb_session(mongo_session_app):
    client = mongo_session_app.test_client()
    client.get("/auth/google/callback")

    client.get("/logout")
    response = client.get("/history")

    assert response.status_code == 302
    assert "/login" in response.headers["Location"]
