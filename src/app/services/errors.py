"""
Exceptions raised by external provider adapters.

Use cases translate them into Result errors; they never reach the HTTP layer.
"""


class ProviderError(Exception):
    """An external provider failed, timed out or answered unexpectedly"""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class InvalidCredentialsError(Exception):
    """The identity provider rejected a token or password"""


class IdentityExistsError(Exception):
    """The identity provider already has an account for this email"""


class InvalidWebhookSignatureError(Exception):
    """A payment webhook payload failed signature verification"""
