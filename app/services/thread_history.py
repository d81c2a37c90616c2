"""
Thread History Module

Retrieves the messages of a Slack thread and turns them into the role-tagged
turns expected by the chat completion API.
"""

from typing import Any, Dict, List

from app.util import logger, HISTORY_LIMIT


def fetch_thread_history(slack_client, channel: str, thread_ts: str) -> List[Dict[str, Any]]:
    """
    Fetch every message in a thread, oldest message included.

    Args:
        slack_client: Slack WebClient bound to the event's workspace
        channel: Channel id the thread lives in
        thread_ts: Timestamp of the thread's parent message

    Returns:
        The thread's messages in reverse delivery order, or an empty list if
        the Slack call failed
    """
    try:
        response = slack_client.conversations_replies(
            channel=channel,
            ts=thread_ts,
            oldest="1",
        )
        messages = response.get("messages") or []
        return list(reversed(messages))
    except Exception as e:
        logger.error("Fetching thread history failed for %s/%s: %s", channel, thread_ts, e)
        return []


def sort_history(history: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort messages ascending by the numeric value of their Slack timestamp."""
    return sorted(history, key=lambda m: float(m["ts"]))


def trim_history(history: List[Dict[str, Any]], limit: int = HISTORY_LIMIT) -> List[Dict[str, Any]]:
    """
    Drop the oldest message (the mention that started the thread) and keep at
    most the last `limit` of the rest, in ascending order.
    """
    remainder = sort_history(history)[1:]
    return remainder[-limit:] if limit > 0 else []


def to_conversation_turns(history: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Map Slack messages to chat turns: bot messages are the assistant, the rest the user."""
    return [
        {
            "role": "assistant" if m.get("bot_id") else "user",
            "content": m.get("text", ""),
        }
        for m in history
    ]
