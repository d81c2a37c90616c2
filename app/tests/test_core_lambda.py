"""Tests for the Lambda entrypoint."""

import json

import pytest

from app.config import AppConfig
from app.handlers.slack_event_handler import SlackEventHandler
from app.services.response_poster import ResponsePoster
from app.tests.fakes import FakeHttpSession, FakeOpenAI, FakeSlackClient
from scripts import core_lambda


@pytest.fixture
def slack():
    return FakeSlackClient()


@pytest.fixture(autouse=True)
def fake_handler(monkeypatch, slack):
    handler = SlackEventHandler(
        AppConfig(openai_api_key="sk-test", bot_tokens={"T1": "xoxb-1"}),
        FakeOpenAI(reply="pong"),
        slack_client_factory=lambda token: slack,
        poster=ResponsePoster(FakeHttpSession()),
    )
    monkeypatch.setattr(core_lambda, "_handler", handler)
    return handler


def _event(team_id):
    body = {"team_id": team_id, "event": {"channel": "C1", "ts": "1.0", "text": "ping"}}
    return {"headers": {}, "body": json.dumps(body)}


def test_lambda_handler_delegates_to_event_handler(slack) -> None:
    response = core_lambda.lambda_handler(_event("T1"), None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"]) == {"message": "pong"}
    assert slack.calls_to("chat_postMessage")[0]["text"] == "pong"


def test_lambda_handler_converts_unknown_workspace_to_500() -> None:
    response = core_lambda.lambda_handler(_event("T-other"), None)

    assert response["statusCode"] == 500
    assert "T-other" in response["body"]["error"]


def test_lambda_handler_converts_malformed_body_to_500() -> None:
    response = core_lambda.lambda_handler({"headers": {}, "body": "not json"}, None)

    assert response["statusCode"] == 500
