"""Media host infrastructure providers."""

from dishka import Scope, provide

from memex.adapter.media.cloudinary import CloudinaryMediaHost
from memex.config import MediaSettings
from memex.domain.service import MediaHost
from memex.util.di.base import ProviderBase
from memex.util.error import ConfigurationError


class MediaProvider(ProviderBase):
    """Media component base."""

    __mock_component__ = "media"


class ProdMediaProvider(MediaProvider):
    """Production media provider (Cloudinary)."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_media_host(self, media_settings: MediaSettings) -> MediaHost:
        """Provide media host client.

        Raises:
            ConfigurationError: If Cloudinary credentials are not configured
        """
        if not media_settings.cloud_name:
            raise ConfigurationError("Cloudinary cloud name must be configured")
        if not media_settings.api_key or not media_settings.api_secret:
            raise ConfigurationError("Cloudinary API credentials must be configured")
        return CloudinaryMediaHost(settings=media_settings)
