from enum import Enum


class ProviderErrorKind(str, Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    CONTENT_POLICY = "content_policy"
    UNKNOWN = "unknown"


USER_MESSAGES = {
    ProviderErrorKind.AUTHENTICATION: "API key error. Please check your GEMINI_API_KEY in the .env file.",
    ProviderErrorKind.RATE_LIMIT: "API quota exceeded or rate limited. Please try again later.",
    ProviderErrorKind.CONTENT_POLICY: "Content potentially violates safety guidelines. Please rephrase your request.",
    ProviderErrorKind.UNKNOWN: "Failed to generate email. Please try again.",
}

# Checked in order, case-sensitive
_MARKERS = (
    ("API key", ProviderErrorKind.AUTHENTICATION),
    ("quota", ProviderErrorKind.RATE_LIMIT),
    ("safety", ProviderErrorKind.CONTENT_POLICY),
)


def classify_provider_error(message: str) -> ProviderErrorKind:
    """Map a provider error message onto one of the known failure kinds."""
    message = message or ""
    for marker, kind in _MARKERS:
        if marker in message:
            return kind
    return ProviderErrorKind.UNKNOWN


def user_message_for(kind: ProviderErrorKind) -> str:
    return USER_MESSAGES[kind]
