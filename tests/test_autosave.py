import asyncio

from clinic_page_builder.autosave import AutoSaver, SaveStatus
from clinic_page_builder.builder import PageBuilder
from clinic_page_builder.config import BuilderSettings
from clinic_page_builder.migrate import create_empty_document


class RecordingSaver:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls = []
        self.times = []

    async def save(self, document):
        self.calls.append(document)
        self.times.append(asyncio.get_running_loop().time())
        await asyncio.sleep(0)
        if self.fail:
            raise RuntimeError("storage unavailable")
        return f"2025-03-01T00:00:0{len(self.calls)}Z"


class GatedSaver:
    """Each write blocks until its gate is opened by the test."""

    def __init__(self) -> None:
        self.calls = []
        self.gates = []
        self.cancelled = []

    async def save(self, document):
        call = len(self.calls) + 1
        gate = asyncio.Event()
        self.calls.append(document)
        self.gates.append(gate)
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.cancelled.append(call)
            raise
        return f"saved-{call}"


def new_builder() -> PageBuilder:
    return PageBuilder(create_empty_document())


def test_burst_of_edits_produces_one_save():
    async def scenario():
        builder = new_builder()
        saver = RecordingSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=0.05)
        loop = asyncio.get_running_loop()

        builder.add_section("hero")
        await asyncio.sleep(0.01)
        builder.add_section("text")
        await asyncio.sleep(0.01)
        builder.add_section("faq")
        last_edit = loop.time()
        assert saver.calls == []
        assert autosaver.has_pending_save is True

        await asyncio.sleep(0.2)
        status = autosaver.status
        await autosaver.aclose()
        return builder, saver, last_edit, status

    builder, saver, last_edit, status = asyncio.run(scenario())

    assert len(saver.calls) == 1
    assert saver.times[0] - last_edit >= 0.045
    assert [s.type for s in saver.calls[0].pages[0].sections] == ["hero", "text", "faq"]
    assert status == SaveStatus.saved
    assert builder.is_dirty is False
    assert builder.document.updated_at == "2025-03-01T00:00:01Z"


def test_newer_save_supersedes_in_flight_save():
    async def scenario():
        builder = new_builder()
        saver = GatedSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=10)

        builder.add_section("hero")
        first = autosaver.save_now()
        await asyncio.sleep(0)
        builder.add_section("text")
        second = autosaver.save_now()
        await asyncio.sleep(0)

        assert autosaver.in_flight is second
        assert autosaver.status == SaveStatus.saving
        saver.gates[1].set()
        await second
        status = autosaver.status
        await autosaver.aclose()
        return builder, saver, first, status

    builder, saver, first, status = asyncio.run(scenario())

    assert first.cancelled()
    assert saver.cancelled == [1]
    assert status == SaveStatus.saved
    assert builder.is_dirty is False
    assert builder.document.updated_at == "saved-2"
    assert len(builder.document.pages[0].sections) == 2


def test_failed_save_keeps_edits_and_reports_error():
    async def scenario():
        builder = new_builder()
        saver = RecordingSaver(fail=True)
        autosaver = AutoSaver(builder, saver, debounce_seconds=10)

        builder.add_section("hero")
        edited = builder.document
        await autosaver.save_now()
        status = autosaver.status
        await autosaver.aclose()
        return builder, edited, status

    builder, edited, status = asyncio.run(scenario())

    assert status == SaveStatus.error
    assert builder.is_dirty is True
    assert builder.document is edited


def test_saved_status_returns_to_idle():
    async def scenario():
        builder = new_builder()
        statuses = []
        autosaver = AutoSaver(builder, RecordingSaver(), debounce_seconds=10, saved_display_seconds=0.05)
        autosaver.subscribe(statuses.append)

        builder.add_section("hero")
        await autosaver.save_now()
        assert autosaver.status == SaveStatus.saved
        await asyncio.sleep(0.1)
        await autosaver.aclose()
        return statuses

    statuses = asyncio.run(scenario())

    assert statuses == [SaveStatus.saving, SaveStatus.saved, SaveStatus.idle]


def test_clean_builder_schedules_nothing():
    async def scenario():
        builder = new_builder()
        saver = RecordingSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=0.01)

        builder.mark_clean()
        builder.load(create_empty_document())
        pending = autosaver.has_pending_save
        await asyncio.sleep(0.05)
        await autosaver.aclose()
        return saver, pending, autosaver.status

    saver, pending, status = asyncio.run(scenario())

    assert pending is False
    assert saver.calls == []
    assert status == SaveStatus.idle


def test_close_clears_pending_timer():
    async def scenario():
        builder = new_builder()
        saver = RecordingSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=0.02)

        builder.add_section("hero")
        assert autosaver.has_pending_save is True
        autosaver.close()
        pending = autosaver.has_pending_save
        builder.add_section("text")
        await asyncio.sleep(0.06)
        return saver, pending

    saver, pending = asyncio.run(scenario())

    assert pending is False
    assert saver.calls == []


def test_close_cancels_in_flight_write():
    async def scenario():
        builder = new_builder()
        saver = GatedSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=10)

        builder.add_section("hero")
        task = autosaver.save_now()
        await asyncio.sleep(0)
        await autosaver.aclose()
        return builder, saver, task, autosaver.status

    builder, saver, task, status = asyncio.run(scenario())

    assert task.cancelled()
    assert saver.cancelled == [1]
    assert status == SaveStatus.saving
    assert builder.is_dirty is True


def test_edits_made_during_a_save_stay_dirty():
    async def scenario():
        builder = new_builder()
        saver = GatedSaver()
        autosaver = AutoSaver(builder, saver, debounce_seconds=10)

        builder.add_section("hero")
        task = autosaver.save_now()
        await asyncio.sleep(0)
        builder.add_section("text")
        saver.gates[0].set()
        await task
        result = (builder.is_dirty, autosaver.status, autosaver.has_pending_save, builder.document)
        await autosaver.aclose()
        return result

    dirty, status, pending, document = asyncio.run(scenario())

    assert dirty is True
    assert status == SaveStatus.saved
    assert pending is True
    assert document.updated_at == "saved-1"
    assert [s.type for s in document.pages[0].sections] == ["hero", "text"]


def test_from_settings_uses_configured_windows():
    async def scenario():
        builder = new_builder()
        saver = RecordingSaver()
        settings = BuilderSettings(debounce_ms=20, saved_display_ms=20)
        autosaver = AutoSaver.from_settings(builder, saver, settings)

        builder.add_section("hero")
        await asyncio.sleep(0.08)
        await autosaver.aclose()
        return saver, autosaver.status

    saver, status = asyncio.run(scenario())

    assert len(saver.calls) == 1
    assert status == SaveStatus.idle
