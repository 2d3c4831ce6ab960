"""Abstract toast channel (port) — how the list core tells the user what happened."""

from abc import ABC, abstractmethod

from wms.domain.entities import Notice


class Notifier(ABC):
    """Fire-and-forget sink for success / warning / error notices."""

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        ...
