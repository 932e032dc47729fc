from __future__ import annotations

import logging

from utility.error_classifier import classify_provider_error, user_message_for
from utility.exceptions import GenerationFailed, ValidationError
from utility.gemini_client import TextGenerator
from utility.prompt_manager import EmailPromptBuilder
from utility.response_parser import ExtractionOutcome, ParsedResult, parse_model_response

logger = logging.getLogger(__name__)


class EmailRelay:
    """
    Turns one Hindi instruction into a ParsedResult with a single model call.
    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(self, generator: TextGenerator, include_example: bool = True):
        self.generator = generator
        self.include_example = include_example

    async def generate_email(self, hindi_text: str) -> ParsedResult:
        if not hindi_text or not hindi_text.strip():
            raise ValidationError("Hindi text is required.")

        logger.info('Received Hindi text for LLM: "%s"', hindi_text)
        prompt = EmailPromptBuilder.build_email_prompt(hindi_text, include_example=self.include_example)

        try:
            text = await self.generator.generate(prompt)
        except Exception as e:
            # Any provider failure becomes a classified 500, never a retry
            kind = classify_provider_error(str(e))
            logger.error("Error calling Gemini API (%s): %s", kind.value, e)
            raise GenerationFailed(kind, user_message_for(kind)) from e

        logger.debug("Gemini raw response:\n%s", text)

        result = parse_model_response(text)
        if result.outcome is not ExtractionOutcome.BOTH:
            logger.warning("Model response was only partially parsed: %s", result.outcome.value)
        return result
