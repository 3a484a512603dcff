"""
Shared fixtures: an offline app wired to mongomock, a scripted chat model,
a scripted Overpass HTTP session and a fake Google provider.
"""
import json

import mongomock
import pytest
from flask import redirect
from langchain_core.messages import AIMessage

from app import create_app
from config.settings import Settings
from services.identity_provider import ProviderProfile
from services.user_crud_service import UserRepository

FIXED_SCORES = {
    "densityScore": 72,
    "scores": {
        "competition": 100,
        "complementary": 0,
        "accessibility": 0,
        "density": 72,
    },
    "verdict": "No direct competitors nearby; weak transit access makes walk-in trade the main risk.",
}

COFFEE_SHOP = {
    "prompt[business]": "coffee shop",
    "prompt[location]": "Downtown",
    "prompt[lat]": "12.9",
    "prompt[lon]": "77.6",
}

COMPETITION_QUERY = '[out:json][timeout:30];(node(around:1000,12.9,77.6)[amenity~"cafe",i];);out tags center;'
COMPLEMENTARY_QUERY = '[out:json][timeout:30];(node(around:1000,12.9,77.6)[shop~"books",i];);out center;'
ACCESSIBILITY_QUERY = '[out:json][timeout:30];(node(around:1000,12.9,77.6)[highway~"bus_stop",i];);out tags center;'


class FakeChatModel:
    """Replays scripted replies in order and records every prompt."""

    def __init__(self):
        self.replies = []
        self.prompts = []

    def script(self, *replies):
        self.replies.extend(replies)

    def invoke(self, messages):
        self.prompts.append(messages[-1].content)
        if not self.replies:
            raise RuntimeError("no scripted reply left")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return AIMessage(content=reply)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeOverpassSession:
    def __init__(self):
        self.responses = []
        self.calls = []

    def script(self, *responses):
        self.responses.extend(responses)

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class CountingLimiter:
    def __init__(self):
        self.acquired = 0

    def acquire(self, tokens=1):
        self.acquired += tokens
        return 0.0


class FakeIdentityProvider:
    def __init__(self):
        self.profile = ProviderProfile(provider_id="google-123", display_name="Ada Lovelace", email="ada.lovelace@gmail.com")
        self.error = None
        self.redirect_uris = []

    def authorize_redirect(self, redirect_uri):
        self.redirect_uris.append(redirect_uri)
        return redirect("https://accounts.google.com/o/oauth2/v2/auth?client_id=test-client-id")

    def fetch_profile(self):
        if self.error:
            raise self.error
        return self.profile


@pytest.fixture
def settings():
    return Settings(
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        client_url="http://localhost:8080",
        secret="test-secret",
        database_link="mongodb://localhost:27017",
        gemini_api_key="test-gemini-key",
        mongo_db_name="marketmapper_test",
        session_backend="signed-cookie",
    )


@pytest.fixture
def db():
    return mongomock.MongoClient()["marketmapper_test"]


@pytest.fixture
def chat_model():
    return FakeChatModel()


@pytest.fixture
def overpass_session():
    return FakeOverpassSession()


@pytest.fixture
def limiter():
    return CountingLimiter()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider()


@pytest.fixture
def app(settings, db, chat_model, overpass_session, limiter, identity_provider):
    app = create_app(
        settings,
        db=db,
        chat_model=chat_model,
        overpass_session=overpass_session,
        identity_provider=identity_provider,
        rate_limiter=limiter,
    )
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def user(db):
    user, _ = UserRepository(db).find_or_create("google-999", "Grace Hopper", "grace.hopper@gmail.com")
    return user


@pytest.fixture
def logged_in_client(client, user):
    with client.session_transaction() as sess:
        sess["user_id"] = user["id"]
    return client


def script_successful_analysis(chat_model, overpass_session, scores=None):
    chat_model.script(
        COMPETITION_QUERY,
        "```\n" + COMPLEMENTARY_QUERY + "\n```",
        ACCESSIBILITY_QUERY,
        "```json\n" + json.dumps(scores or FIXED_SCORES) + "\n```",
    )
    overpass_session.script(
        FakeResponse(200, {"elements": []}),
        FakeResponse(200, {"elements": []}),
        FakeResponse(200, {"elements": []}),
    )
