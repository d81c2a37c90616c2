from app.models.openai_client import invoke_image_generation
from app.util import logger, imageModelId


def generate_image_url(openai_client, prompt: str, model: str = imageModelId) -> str:
    """
    Generate one image for the prompt and return its hosted URL.
    Errors are intentionally propagated to the caller.
    """
    image_url = invoke_image_generation(openai_client, prompt, model=model)
    logger.info("imageUrl: %s", image_url)
    return image_url
