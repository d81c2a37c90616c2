from openai import OpenAI
from app.util import logger, chatModelId, imageModelId


def build_openai_client(api_key: str) -> OpenAI:
    """
    Create the OpenAI client used for both chat completions and image generation.
    Retries are disabled; every upstream call is attempted exactly once.
    """
    logger.info("OpenAI client initialized (max_retries=0)")
    return OpenAI(api_key=api_key, max_retries=0)


def invoke_chat_messages(client, messages: list, model: str = chatModelId) -> str:
    """
    Invoke an OpenAI chat model with a list of messages.
    Each message should be a dict with 'role' and 'content'.
    Example:
    [{"role": "user", "content": "Hello"}]

    Errors from the API are not caught here; callers decide how to degrade.
    """
    response = client.chat.completions.create(
        model=model,
        messages=messages,
    )
    logger.info("openaiResponse: %s", response)

    # Extract the response text from the first choice
    return response.choices[0].message.content


def invoke_image_generation(client, prompt: str, model: str = imageModelId) -> str:
    """
    Request exactly one generated image and return its provider-hosted URL.
    The URL is time-limited, so it must be downloaded soon after.
    """
    response = client.images.generate(
        model=model,
        prompt=prompt,
        n=1,
    )
    return response.data[0].url
