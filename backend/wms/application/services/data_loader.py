"""Data loader — concurrent fetch of a view's primary and related collections."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from wms.application.interfaces import Notifier
from wms.domain.entities import Notice
from wms.infrastructure.logging.colored_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger("DataLoader")


@dataclass
class LoadSource:
    """One fetch of a load pass. ``default`` builds the fallback value on failure."""

    name: str
    fetch: Callable[[], Awaitable[Any]]
    default: Callable[[], Any] = list


@dataclass
class SourceOutcome:
    name: str
    ok: bool
    data: Any
    error: BaseException | None = None


@dataclass
class LoadResult:
    primary: SourceOutcome
    secondaries: dict[str, SourceOutcome] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        """Only a failed primary source blocks the view."""
        return not self.primary.ok

    def data(self, name: str) -> Any:
        if name == self.primary.name:
            return self.primary.data
        return self.secondaries[name].data


class DataLoader:
    """Fans out every fetch at once and settles each independently.

    A failing secondary source is replaced by its default and logged; a
    failing primary source additionally raises an error notice. There is no
    retry: the caller runs ``load()`` again to re-trigger.
    """

    def __init__(
        self,
        primary: LoadSource,
        secondaries: list[LoadSource] | None = None,
        notifier: Notifier | None = None,
        label: str = "data",
    ):
        self._primary = primary
        self._secondaries = secondaries or []
        self._notifier = notifier
        self._label = label
        self.is_loading = False

    async def load(self) -> LoadResult:
        self.is_loading = True
        try:
            sources = [self._primary, *self._secondaries]
            alog.step_start(
                ActivityStage.LOAD,
                f"Loading {self._label}",
                sources=",".join(s.name for s in sources),
            )
            settled = await asyncio.gather(
                *(source.fetch() for source in sources),
                return_exceptions=True,
            )
            outcomes = [
                self._settle(source, value) for source, value in zip(sources, settled)
            ]

            result = LoadResult(
                primary=outcomes[0],
                secondaries={o.name: o for o in outcomes[1:]},
            )
            if result.failed:
                alog.step_error(
                    ActivityStage.LOAD,
                    f"Primary source '{self._primary.name}' failed",
                    error=result.primary.error if isinstance(result.primary.error, Exception) else None,
                )
                if self._notifier is not None:
                    self._notifier.notify(Notice.error(f"Failed to load {self._label}"))
            else:
                alog.step_complete(
                    ActivityStage.LOAD,
                    f"Loaded {self._label}",
                    failed_secondaries=sum(1 for o in outcomes[1:] if not o.ok),
                )
            return result
        finally:
            self.is_loading = False

    @staticmethod
    def _settle(source: LoadSource, value: Any) -> SourceOutcome:
        if isinstance(value, BaseException):
            logger.warning("Load source '%s' failed: %s", source.name, value)
            return SourceOutcome(source.name, ok=False, data=source.default(), error=value)
        return SourceOutcome(source.name, ok=True, data=value)
