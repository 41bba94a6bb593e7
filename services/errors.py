"""
Error taxonomy for the polishing assistant.

Every error carries a short user-facing message. Controllers catch
LinguaFlowError at the point of the user action and show that message;
nothing here is fatal to the process.
"""


class LinguaFlowError(Exception):
    """Base class for all application errors."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class ConfigurationError(LinguaFlowError):
    """A required API credential is missing."""
    default_message = "API key is not configured."


class ServiceError(LinguaFlowError):
    """An external AI call failed (auth, empty response, transport)."""
    default_message = "Connection to Engine failed."


class MalformedAudioError(LinguaFlowError):
    """PCM payload is not aligned to the sample/channel framing."""
    default_message = "Failed to generate high-quality audio."


class PersistenceError(LinguaFlowError):
    """Local storage could not be read or written."""
    default_message = "History could not be saved."


class CapabilityUnavailableError(LinguaFlowError):
    """Speech recognition is not supported in this environment."""
    default_message = "Speech recognition is not supported in your browser."
