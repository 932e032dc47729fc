from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from utility.prompt_manager import EmailPromptBuilder

EMAIL_SENTINEL = "Error: Could not extract email."
MAPPING_SENTINEL = "Error: Could not extract mapping."


def _block_pattern(start_tag: str, end_tag: str) -> re.Pattern:
    # Tags must sit on their own lines: START\n<content>\nEND
    return re.compile(rf"{re.escape(start_tag)}\n(.*?)\n{re.escape(end_tag)}", re.DOTALL)


EMAIL_PATTERN = _block_pattern(EmailPromptBuilder.EMAIL_START_TAG, EmailPromptBuilder.EMAIL_END_TAG)
MAPPING_PATTERN = _block_pattern(EmailPromptBuilder.MAPPING_START_TAG, EmailPromptBuilder.MAPPING_END_TAG)


class ExtractionOutcome(str, Enum):
    BOTH = "both"
    EMAIL_ONLY = "email_only"
    MAPPING_ONLY = "mapping_only"
    NEITHER = "neither"


@dataclass
class ParsedResult:
    """Email and mapping pulled out of a model reply; sentinels fill whatever was missing."""
    english_email: str = EMAIL_SENTINEL
    mapping: List[str] = field(default_factory=lambda: [MAPPING_SENTINEL])
    outcome: ExtractionOutcome = ExtractionOutcome.NEITHER

    @property
    def email_found(self) -> bool:
        return self.outcome in (ExtractionOutcome.BOTH, ExtractionOutcome.EMAIL_ONLY)

    @property
    def mapping_found(self) -> bool:
        return self.outcome in (ExtractionOutcome.BOTH, ExtractionOutcome.MAPPING_ONLY)


def _extract_block(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    # an empty capture counts as missing
    if match and match.group(1):
        return match.group(1).strip()
    return None


def _outcome(email_found: bool, mapping_found: bool) -> ExtractionOutcome:
    if email_found and mapping_found:
        return ExtractionOutcome.BOTH
    if email_found:
        return ExtractionOutcome.EMAIL_ONLY
    if mapping_found:
        return ExtractionOutcome.MAPPING_ONLY
    return ExtractionOutcome.NEITHER


def parse_model_response(text: Optional[str]) -> ParsedResult:
    """
    Extract the English email and the Hindi -> English mapping from a raw model reply.

    Each block is looked up independently, so one missing block never hides the other.
    Nothing is raised for missing blocks; the result carries sentinels instead.
    """
    text = text or ""

    email = _extract_block(EMAIL_PATTERN, text)
    mapping = _extract_block(MAPPING_PATTERN, text)

    return ParsedResult(
        english_email=email if email is not None else EMAIL_SENTINEL,
        mapping=mapping.split("\n") if mapping is not None else [MAPPING_SENTINEL],
        outcome=_outcome(email is not None, mapping is not None),
    )
