# app/handlers/slack_event_handler.py

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from app.config import AppConfig
from app.models.slack_client import build_slack_client
from app.services.chat_engine import ChatEngine, load_priming_prompts
from app.services.image_engine import generate_image_url
from app.services.response_poster import ResponsePoster
from app.services.thread_history import fetch_thread_history, trim_history, to_conversation_turns
from app.util import logger, IMAGE_MARKER, RETRY_HEADER

MENTION_PATTERN = re.compile(r"<@[^>]*>")


@dataclass(frozen=True)
class InboundEvent:
    team_id: Optional[str]
    channel: str
    ts: str
    text: str
    thread_ts: Optional[str] = None

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "InboundEvent":
        event = body["event"]
        return cls(
            team_id=body.get("team_id"),
            channel=event["channel"],
            ts=event["ts"],
            text=event.get("text", ""),
            thread_ts=event.get("thread_ts"),
        )

    @property
    def thread_anchor(self) -> str:
        """The parent message of the thread this event belongs to."""
        return self.thread_ts or self.ts


def strip_mentions(text: str) -> str:
    return MENTION_PATTERN.sub("", text)


def is_retry(headers: Optional[Dict[str, Any]]) -> bool:
    """Slack marks at-least-once redeliveries with a retry-count header."""
    return any(k.lower() == RETRY_HEADER for k in (headers or {}))


def _response(message: str) -> Dict[str, Any]:
    return {"statusCode": 200, "body": json.dumps({"message": message}, ensure_ascii=False)}


class SlackEventHandler:
    """
    Handles one Slack Events API callback: a normal mention gets a chat reply
    built from the thread history, a message carrying the image marker gets a
    generated image uploaded into the thread.
    """

    def __init__(
        self,
        config: AppConfig,
        openai_client,
        slack_client_factory: Callable[[str], Any] = build_slack_client,
        poster: Optional[ResponsePoster] = None,
    ):
        """
        Args:
            config: Immutable app configuration (credential map, model ids)
            openai_client: Client used for chat completions and image generation
            slack_client_factory: Builds a Slack client from a bot token
            poster: Response poster; a default one is created when omitted
        """
        self.config = config
        self.openai_client = openai_client
        self.slack_client_factory = slack_client_factory
        self.poster = poster or ResponsePoster()
        self.chat_engine = ChatEngine(
            openai_client,
            model=config.chat_model,
            priming_prompts=load_priming_prompts(config.priming_prompts_file),
        )

    def handle(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process an API Gateway style event {headers, body}.

        Returns:
            {"statusCode": 200, "body": '{"message": ...}'}

        Raises:
            UnknownWorkspaceError: the event's team_id has no configured token
        """
        logger.info("event: %s", event)
        headers = event.get("headers") or {}
        if is_retry(headers):
            return _response("No need to resend")

        logger.info("event.headers: %s", headers)
        logger.info("event.body: %s", event.get("body"))

        body = event.get("body")
        if isinstance(body, (str, bytes)):
            body = json.loads(body)
        inbound = InboundEvent.from_body(body)

        slack_client = self.slack_client_factory(self.config.token_for(inbound.team_id))
        text = strip_mentions(inbound.text)
        thread_ts = inbound.thread_anchor
        logger.info("input: %s", text)

        if IMAGE_MARKER in text:
            return self._handle_image(slack_client, inbound.channel, text, thread_ts)
        return self._handle_chat(slack_client, inbound.channel, text, thread_ts)

    def _handle_image(self, slack_client, channel: str, text: str, thread_ts: str) -> Dict[str, Any]:
        prompt = text.replace(IMAGE_MARKER, "", 1)
        image_url = generate_image_url(self.openai_client, prompt, model=self.config.image_model)
        self.poster.post_image(slack_client, channel, image_url, thread_ts)
        return _response("Image generated successfully.")

    def _handle_chat(self, slack_client, channel: str, text: str, thread_ts: str) -> Dict[str, Any]:
        history = trim_history(fetch_thread_history(slack_client, channel, thread_ts))
        logger.info("history: %s", history)

        result = self.chat_engine.send_message(text, to_conversation_turns(history))
        self.poster.post_message(slack_client, channel, result.text, thread_ts)
        return _response(result.text)
