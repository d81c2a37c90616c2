"""
Chat Engine Module

Relays a Slack thread to an OpenAI chat model. Every request starts with a
fixed two-turn priming preamble (a role-play framing from the user and the
assistant's acknowledgement), followed by the prior thread turns and the new
message.
"""

from dataclasses import dataclass
from typing import List, Dict, Optional
import json

from app.models.openai_client import invoke_chat_messages
from app.util import logger, chatModelId


FALLBACK_NOTICE = "[relay error] 申し訳ありません、応答を生成できませんでした。もう一度お試しください。"


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of one completion request. `text` is the fallback notice when `ok` is False."""
    text: str
    ok: bool = True
    error: Optional[str] = None


def get_default_prompts() -> Dict[str, str]:
    """
    Get the built-in priming preamble.

    Returns:
        Dictionary with the "user" framing turn and the "assistant" acknowledgement
    """
    return {
        "user": (
            "これからロールプレイをしましょう。あなたはこのSlackワークスペースで働く、"
            "親切で知識豊富なアシスタントです。スレッドの流れを踏まえて、簡潔かつ丁寧に答えてください。"
        ),
        "assistant": "承知しました。アシスタントとしてロールプレイを始めます。ご用件をどうぞ。",
    }


def load_priming_prompts(json_file_path: Optional[str] = None) -> Dict[str, str]:
    """
    Load the priming preamble from a JSON file.

    Args:
        json_file_path: Path to a JSON object with "user" and "assistant" keys.
            None selects the built-in preamble.

    Returns:
        Dictionary with "user" and "assistant" entries
    """
    if json_file_path is None:
        return get_default_prompts()

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            prompts = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Required priming prompts file '{json_file_path}' not found. Fallback is disabled.")
    except json.JSONDecodeError as e:
        logger.error("Error parsing %s: %s. Using default prompts.", json_file_path, e)
        return get_default_prompts()

    if not isinstance(prompts, dict):
        logger.error("Priming prompts in %s must be a JSON object, got %s. Using default prompts.",
                     json_file_path, type(prompts).__name__)
        return get_default_prompts()

    defaults = get_default_prompts()
    return {
        "user": prompts.get("user") or defaults["user"],
        "assistant": prompts.get("assistant") or defaults["assistant"],
    }


class ChatEngine:
    """
    Sends a new Slack message plus its trimmed thread history to OpenAI.
    Failures never escape: they come back as a CompletionResult with ok=False.
    """

    def __init__(self, openai_client, model: str = chatModelId, priming_prompts: Optional[Dict[str, str]] = None):
        """
        Initialize the chat engine.

        Args:
            openai_client: OpenAI client (or any object with chat.completions.create)
            model: Chat model id
            priming_prompts: Optional preamble override, see load_priming_prompts
        """
        self.openai_client = openai_client
        self.model = model
        self.priming_prompts = priming_prompts or get_default_prompts()

    def build_messages(self, user_input: str, prev_turns: List[Dict[str, str]]) -> List[Dict[str, str]]:
        """Build the full message list: preamble, prior turns, then the new user turn."""
        return [
            {"role": "user", "content": self.priming_prompts["user"]},
            {"role": "assistant", "content": self.priming_prompts["assistant"]},
            *prev_turns,
            {"role": "user", "content": user_input},
        ]

    def send_message(self, user_input: str, prev_turns: List[Dict[str, str]]) -> CompletionResult:
        """
        Send a message to the chat model and get a response.

        Args:
            user_input: The user's message with mentions stripped
            prev_turns: Prior conversation turns in ascending order

        Returns:
            CompletionResult with the first choice's content
        """
        messages = self.build_messages(user_input, prev_turns)

        try:
            response = invoke_chat_messages(self.openai_client, messages, model=self.model)
        except Exception as e:
            logger.error("Chat completion failed: %s", e)
            return CompletionResult(text=FALLBACK_NOTICE, ok=False, error=str(e))

        if not response:
            logger.error("Chat completion returned no content")
            return CompletionResult(text=FALLBACK_NOTICE, ok=False, error="empty completion")

        return CompletionResult(text=response)
