"""Base collector abstract class."""

from abc import ABC, abstractmethod
from typing import Any, List
import logging

from ..utils.metrics import OutputLine


class BaseCollector(ABC):
    """Abstract base class for all collectors."""

    def __init__(self, config: Any, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            config: Collector-specific configuration
            logger: Logger instance
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)

    @abstractmethod
    async def collect(self) -> List[OutputLine]:
        """
        Collect metrics and return output lines.

        Returns:
            List[OutputLine]: Lines ready to be written

        Raises:
            CollectorError: Any fatal collection error. Collectors do not
                recover from errors, the caller aborts the run.
        """
        pass
