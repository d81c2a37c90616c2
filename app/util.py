# util.py
import os
from dotenv import load_dotenv, find_dotenv

# Load environment variables first; the Lambda/working directory holds .env
load_dotenv(find_dotenv(usecwd=True))


# Model Selection
chatModelId = os.getenv("OPENAI_CHAT_MODEL", "gpt-3.5-turbo")
imageModelId = os.getenv("OPENAI_IMAGE_MODEL", "dall-e-2")


## Slack message conventions
IMAGE_MARKER = "[ai_img]"
RETRY_HEADER = "x-slack-retry-num"
HISTORY_LIMIT = 20

IMAGE_TITLE = "Generated Image"
IMAGE_CAPTION = "こちらが画像です"
IMAGE_FILENAME = "generated_image.png"


# Logging Util
import logging

_handlers = [logging.StreamHandler()]
if os.getenv("LOG_FILE"):
    _handlers.append(logging.FileHandler(os.getenv("LOG_FILE")))

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=_handlers
)

logger = logging.getLogger("slack_relay")
