"""
Response Poster Module

Writes results back into the Slack thread. Posting is fire-and-forget: a
failure is logged and reported as False, never raised, so the inbound request
still gets its 200.
"""

from typing import Optional

import requests

from app.util import logger, IMAGE_TITLE, IMAGE_CAPTION, IMAGE_FILENAME


class ResponsePoster:
    """Posts text replies and generated images into a Slack thread."""

    def __init__(self, http_session: Optional[requests.Session] = None):
        """
        Args:
            http_session: Session used to download generated images
        """
        self.http_session = http_session or requests.Session()

    def post_message(self, slack_client, channel: str, text: str, thread_ts: str) -> bool:
        """
        Post a text reply into the thread.

        Returns:
            True if Slack accepted the message, False otherwise
        """
        try:
            response = slack_client.chat_postMessage(
                channel=channel,
                text=text,
                as_user=True,
                thread_ts=thread_ts,
            )
            logger.info("slackResponse: %s", response)
            return True
        except Exception as e:
            logger.error("Posting message to %s/%s failed: %s", channel, thread_ts, e)
            return False

    def download_image(self, image_url: str) -> bytes:
        response = self.http_session.get(image_url)
        response.raise_for_status()
        return response.content

    def post_image(self, slack_client, channel: str, image_url: str, thread_ts: str) -> bool:
        """
        Download the generated image and upload it into the thread as a file.

        Returns:
            True if the upload succeeded, False otherwise
        """
        try:
            image_data = self.download_image(image_url)
            response = slack_client.files_upload_v2(
                channel=channel,
                thread_ts=thread_ts,
                file=image_data,
                filename=IMAGE_FILENAME,
                title=IMAGE_TITLE,
                initial_comment=IMAGE_CAPTION,
            )
            logger.info("slackResponse: %s", response)
            return True
        except Exception as e:
            logger.error("Uploading image to %s/%s failed: %s", channel, thread_ts, e)
            return False
