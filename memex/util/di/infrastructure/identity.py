"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from memex.adapter.identity.firebase import FirebaseTokenVerifier
from memex.config import AuthSettings
from memex.domain.service import TokenVerifier
from memex.util.di.base import ProviderBase
from memex.util.error import ConfigurationError


class IdentityProvider(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider (Firebase ID tokens)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_token_verifier(self, auth_settings: AuthSettings) -> TokenVerifier:
        """Provide token verifier.

        APP scope so the signing certificate cache is shared across requests.

        Raises:
            ConfigurationError: If the Firebase project ID is not configured
        """
        if auth_settings.firebase_project_id == "CHANGE_ME_IN_PRODUCTION":
            raise ConfigurationError("Firebase project ID must be configured")
        return FirebaseTokenVerifier(settings=auth_settings)
