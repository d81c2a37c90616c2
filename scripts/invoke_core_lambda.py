''' How to run (needs OPENAI_API_KEY, WORKSPACE_ID and SLACK_BOT_TOKEN in .env):
    python -m scripts.invoke_core_lambda --channel C0123 --text "Hello"
    python -m scripts.invoke_core_lambda --channel C0123 --text "[ai_img] a red fox"
    python -m scripts.invoke_core_lambda --channel C0123 --text "Hi" --thread-ts 1700000000.000100

Posts into a real Slack channel.
'''

import argparse
import json
import os
import time

from scripts.core_lambda import lambda_handler


def build_test_event(channel: str, text: str, thread_ts: str = None, retry: bool = False) -> dict:
    """Build an API Gateway event wrapping a Slack app_mention callback."""
    slack_event = {
        "type": "app_mention",
        "channel": channel,
        "ts": f"{time.time():.6f}",
        "text": text,
    }
    if thread_ts:
        slack_event["thread_ts"] = thread_ts

    headers = {"content-type": "application/json"}
    if retry:
        headers["x-slack-retry-num"] = "1"

    return {
        "headers": headers,
        "body": json.dumps({
            "team_id": os.getenv("WORKSPACE_ID"),
            "event": slack_event,
        }),
    }


def test_lambda_locally(channel: str, text: str, thread_ts: str = None, retry: bool = False):
    """
    Invoke the lambda handler locally with a sample Slack event.
    """
    print("Testing Lambda Function Locally")

    # Mock context object
    class MockContext:
        function_name = "test_slack_relay_lambda"
        memory_limit_in_mb = 512
        remaining_time_in_millis = lambda: 30000

    result = lambda_handler(build_test_event(channel, text, thread_ts, retry), MockContext())

    print(f"Status: {result['statusCode']}")
    print(f"Body: {result['body']}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Invoke the Slack relay lambda locally")
    parser.add_argument("--channel", required=True, help="Slack channel id to post into")
    parser.add_argument("--text", default="Hello", help="Message text (add [ai_img] for an image)")
    parser.add_argument("--thread-ts", default=None, help="Existing thread timestamp to reply in")
    parser.add_argument("--retry", action="store_true", help="Simulate a Slack retry delivery")
    args = parser.parse_args()

    test_lambda_locally(args.channel, args.text, args.thread_ts, args.retry)
