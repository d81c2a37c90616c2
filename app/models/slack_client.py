from slack_sdk import WebClient


def build_slack_client(bot_token: str) -> WebClient:
    """Create a Slack Web API client bound to one workspace's bot token."""
    return WebClient(token=bot_token)
