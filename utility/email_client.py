from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

import httpx
import pyperclip

from utility.config import DEFAULT_RELAY_URL
from utility.dto import GenerateEmailResponse
from utility.exceptions import RelayError

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "generated_email.txt"

STATUS_EMPTY_INPUT = "Please provide Hindi instructions first (speak or type)."
STATUS_GENERATING = "Generating email... Please wait."
STATUS_SUCCESS = "Email generated successfully!"
EMAIL_FAILED = "Failed to generate email. Please check console for details."
MAPPING_GENERATING = "Generating mapping..."
MAPPING_FAILED = "Failed to generate mapping."
MAPPING_EMPTY = "No specific line-by-line mapping provided."


@dataclass
class EmailView:
    """What the user currently sees; overwritten by every generation."""
    hindi_text: str = ""
    status: str = ""
    english_email: str = ""
    mapping_lines: List[str] = field(default_factory=list)
    generating: bool = False

    @property
    def can_generate(self) -> bool:
        return not self.generating


class EmailClient:
    """
    Client side of the relay: validates the instruction, issues one POST per
    user action and renders the reply into an EmailView.
    """

    def __init__(
            self,
            relay_url: str = DEFAULT_RELAY_URL,
            view: Optional[EmailView] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.relay_url = relay_url.rstrip("/")
        self.view = view or EmailView()
        self._transport = transport

    # -----------------------------
    # Generation
    # -----------------------------
    async def _post(self, hindi_text: str) -> GenerateEmailResponse:
        async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
            response = await client.post(
                f"{self.relay_url}/generate-email",
                json={"hindiText": hindi_text},
            )

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            raise RelayError(message or f"HTTP error! status: {response.status_code}")

        return GenerateEmailResponse.model_validate(response.json())

    async def generate(self, hindi_text: Optional[str] = None) -> Optional[GenerateEmailResponse]:
        """
        Generate an email for the given (or currently entered) instruction.
        Returns the relay payload, or None when nothing was sent or the call failed.
        """
        view = self.view
        if not view.can_generate:
            logger.warning("Generation already in progress; ignoring request")
            return None

        if hindi_text is not None:
            view.hindi_text = hindi_text
        text = view.hindi_text.strip()

        if not text:
            view.status = STATUS_EMPTY_INPUT
            return None

        view.generating = True
        view.status = STATUS_GENERATING
        view.english_email = ""
        view.mapping_lines = [MAPPING_GENERATING]

        try:
            data = await self._post(text)
        except (RelayError, httpx.HTTPError, ValueError) as e:
            logger.error("Error generating email: %s", e)
            view.status = f"Error: {e}. Could not generate email."
            view.english_email = EMAIL_FAILED
            view.mapping_lines = [MAPPING_FAILED]
            return None
        finally:
            view.generating = False

        view.english_email = data.englishEmail
        view.mapping_lines = list(data.hindiEnglishMapping) or [MAPPING_EMPTY]
        view.status = STATUS_SUCCESS
        logger.info("Email and mapping received from backend")
        return data

    # -----------------------------
    # Copy / export
    # -----------------------------
    def copy_email(self, clipboard: Callable[[str], None] = pyperclip.copy) -> str:
        if not self.view.english_email:
            return "No email to copy!"
        try:
            clipboard(self.view.english_email)
        except pyperclip.PyperclipException as e:
            logger.error("Failed to copy email: %s", e)
            return "Failed to copy email. Please copy manually."
        logger.info("Email copied to clipboard.")
        return "Email copied to clipboard!"

    def export_email(self, directory: Union[str, Path] = ".") -> Optional[Path]:
        """Write the displayed email, byte for byte, to generated_email.txt."""
        if not self.view.english_email:
            self.view.status = "No email to export!"
            return None

        path = Path(directory) / EXPORT_FILENAME
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.view.english_email.encode("utf-8"))
        self.view.status = f"Email exported as {EXPORT_FILENAME}"
        logger.info("Email exported as %s", path)
        return path
