"""Mock media providers for testing."""

from dishka import Scope, provide

from memex.adapter.media.cloudinary import MockMediaHost
from memex.domain.service import MediaHost
from memex.util.di.infrastructure.media import MediaProvider


class MockMediaProvider(MediaProvider):
    """Mock media provider returning fake URLs."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_media_host(self) -> MediaHost:
        """Provide mock media host."""
        return MockMediaHost()
