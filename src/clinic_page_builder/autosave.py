from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, Protocol

from .builder import PageBuilder
from .config import BuilderSettings
from .models.document import SiteDocument

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 3.0
SAVED_DISPLAY_SECONDS = 2.0


class SaveStatus(str, Enum):
    idle = "idle"
    saving = "saving"
    saved = "saved"
    error = "error"


class DocumentSaver(Protocol):
    async def save(self, document: SiteDocument) -> str:
        """Persist ``document`` and return the stored ``updatedAt``."""
        ...


StatusListener = Callable[[SaveStatus], None]


class AutoSaver:
    """Debounced, single-flight persistence of a :class:`PageBuilder` session.

    Every change while the builder is dirty restarts the debounce window, so a
    burst of edits produces a single write once it goes quiet. Starting a
    write cancels any older one still in flight; a cancelled write never
    touches the status or the document. Must be driven from a running event
    loop.
    """

    def __init__(
        self,
        builder: PageBuilder,
        saver: DocumentSaver,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        saved_display_seconds: float = SAVED_DISPLAY_SECONDS,
    ) -> None:
        self._builder = builder
        self._saver = saver
        self._debounce_seconds = debounce_seconds
        self._saved_display_seconds = saved_display_seconds
        self._status = SaveStatus.idle
        self._timer: asyncio.TimerHandle | None = None
        self._idle_timer: asyncio.TimerHandle | None = None
        self._in_flight: asyncio.Task[None] | None = None
        self._listeners: list[StatusListener] = []
        self._closed = False
        self._unsubscribe = builder.subscribe(self._on_builder_change)

    @classmethod
    def from_settings(cls, builder: PageBuilder, saver: DocumentSaver, settings: BuilderSettings) -> "AutoSaver":
        return cls(
            builder,
            saver,
            debounce_seconds=settings.debounce_ms / 1000,
            saved_display_seconds=settings.saved_display_ms / 1000,
        )

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def has_pending_save(self) -> bool:
        return self._timer is not None

    @property
    def in_flight(self) -> asyncio.Task[None] | None:
        return self._in_flight

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_status(self, status: SaveStatus) -> None:
        if status == self._status:
            return
        self._status = status
        for listener in list(self._listeners):
            listener(status)

    # --- scheduling --------------------------------------------------------

    def _on_builder_change(self, builder: PageBuilder) -> None:
        self._cancel_timer()
        if self._closed or not builder.is_dirty or builder.document is None:
            return
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._on_timer)

    def _on_timer(self) -> None:
        self._timer = None
        self._start_save()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _cancel_idle_timer(self) -> None:
        if self._idle_timer is not None:
            self._idle_timer.cancel()
            self._idle_timer = None

    def save_now(self) -> asyncio.Task[None] | None:
        """Skip the debounce window and write the current document immediately."""
        self._cancel_timer()
        return self._start_save()

    def _start_save(self) -> asyncio.Task[None] | None:
        document = self._builder.document
        if self._closed or document is None:
            return None
        previous = self._in_flight
        if previous is not None and not previous.done():
            logger.info("Cancelling superseded save")
            previous.cancel()
        self._cancel_idle_timer()
        self._set_status(SaveStatus.saving)
        task = asyncio.get_running_loop().create_task(self._save(document))
        self._in_flight = task
        return task

    # --- write -------------------------------------------------------------

    async def _save(self, document: SiteDocument) -> None:
        this_task = asyncio.current_task()
        try:
            updated_at = await self._saver.save(document)
        except asyncio.CancelledError:
            logger.debug("Save cancelled", extra={"document_updated_at": document.updated_at})
            raise
        except Exception:
            if self._in_flight is this_task:
                logger.exception("Auto-save failed")
                self._set_status(SaveStatus.error)
            return
        finally:
            if self._in_flight is this_task:
                self._in_flight = None

        if self._closed:
            return
        still_current = self._builder.acknowledge_save(document, updated_at)
        logger.info("Saved page-builder document", extra={"updated_at": updated_at, "clean": still_current})
        self._set_status(SaveStatus.saved)
        self._idle_timer = asyncio.get_running_loop().call_later(self._saved_display_seconds, self._on_idle_timer)

    def _on_idle_timer(self) -> None:
        self._idle_timer = None
        if self._status == SaveStatus.saved:
            self._set_status(SaveStatus.idle)

    # --- teardown ----------------------------------------------------------

    def close(self) -> None:
        """Stop observing the builder, clear timers and cancel any in-flight write."""
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
        self._cancel_timer()
        self._cancel_idle_timer()
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()

    async def aclose(self) -> None:
        task = self._in_flight
        self.close()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    async def __aenter__(self) -> "AutoSaver":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["AutoSaver", "DocumentSaver", "SaveStatus"]
