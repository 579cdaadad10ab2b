from abc import ABC, abstractmethod
import logging

from telco_news.config import SourceConfig
from telco_news.errors import ConfigurationError

logger = logging.getLogger(__name__)


class BaseSource(ABC):
    # Name of the environment variable holding the credential, for error messages
    API_KEY_ENV = ""

    def __init__(self, config: SourceConfig):
        self.config = config
        self.name = self.__class__.__name__

    def require_api_key(self) -> str:
        """Fail before any network call when the credential is missing."""
        if not self.config.api_key:
            raise ConfigurationError(f"{self.API_KEY_ENV} environment variable not set")
        return self.config.api_key

    @abstractmethod
    async def fetch(self, start_date: str, end_date: str):
        """
        Fetch news published between start_date and end_date (ISO dates).
        Raises ConfigurationError or SourceFetchError on failure.
        """
        pass
