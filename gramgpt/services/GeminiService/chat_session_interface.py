from abc import ABC, abstractmethod
from collections.abc import Callable

from gramgpt.entities.message import Part


class ChatSessionInterface(ABC):
    @abstractmethod
    async def send_message(self, parts: list[Part]) -> str:
        """
        Send one user message to the stateful provider conversation.

        Returns:
            The generated reply text

        Raises:
            ProviderError: For any network, quota, policy or response failure
        """


# Builds the one session handle of a run; raises InitializationError on failure.
ChatSessionFactory = Callable[[], ChatSessionInterface]
