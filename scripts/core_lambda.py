from app.config import load_config
from app.handlers.slack_event_handler import SlackEventHandler
from app.models.openai_client import build_openai_client
from app.util import logger

_handler = None


def get_handler() -> SlackEventHandler:
    """Build the event handler once per Lambda container and reuse it."""
    global _handler

    if _handler is None:
        config = load_config()
        _handler = SlackEventHandler(config, build_openai_client(config.openai_api_key))

    return _handler


def lambda_handler(event, context):
    """
    AWS Lambda entrypoint for Slack Events API callbacks.
    """
    try:
        return get_handler().handle(event)
    except Exception as e:
        logger.exception("lambda_handler failed: %s", e)
        return {
            "statusCode": 500,
            "body": {"error": str(e)}
        }
