class HindiEmailError(Exception):
    """Base exception for all email generator errors"""
    pass


class ConfigurationError(HindiEmailError):
    """Raised when required configuration is missing or invalid"""
    pass


class ValidationError(HindiEmailError):
    """Raised when the Hindi instruction is missing or empty"""
    pass


class ProviderError(HindiEmailError):
    """Raised when the external generative model call fails"""
    pass


class GenerationFailed(HindiEmailError):
    """Raised by the relay once a provider failure has been classified"""

    def __init__(self, kind, user_message: str):
        super().__init__(user_message)
        self.kind = kind
        self.user_message = user_message


class InvalidTransition(HindiEmailError):
    """Raised when the speech capture state machine gets an event it cannot accept"""
    pass


class RelayError(HindiEmailError):
    """Raised by the client when the relay answers with an error status"""
    pass
