import asyncio
import threading
from datetime import date, datetime

import pytest

from app.reservations.session_state import SlotBoard


DAY = date(2026, 3, 2)


def at(hour, minute=0):
    return datetime(2026, 3, 2, hour, minute)


def test_refresh_publishes_available_slots(store):
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])

    slots = asyncio.run(board.refresh(DAY, services))

    assert [slot.label for slot in slots] == ["09:00 - 10:00", "10:00 - 11:00", "11:00 - 12:00"]
    assert board.available_slots == slots
    assert board.error_message is None
    assert board.is_loading is False


def test_failed_refresh_clears_slots_and_sets_message(store):
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])
    asyncio.run(board.refresh(DAY, services))

    store.groomers.clear()
    slots = asyncio.run(board.refresh(DAY, services))

    assert slots == []
    assert board.available_slots == []
    assert "Groomer not found" in board.error_message


def test_superseded_refresh_result_is_discarded(store, add_reservation):
    gate = threading.Event()
    original = store.list_confirmed_reservations

    def gated(groomer_id, day_start, day_end):
        if day_start.date() == DAY:
            gate.wait(timeout=5)
        return original(groomer_id, day_start, day_end)

    store.list_confirmed_reservations = gated
    add_reservation(datetime(2026, 3, 3, 9), datetime(2026, 3, 3, 10))
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])

    async def scenario():
        stale = asyncio.create_task(board.refresh(DAY, services))
        await asyncio.sleep(0.05)
        fresh = await board.refresh(date(2026, 3, 3), services)
        gate.set()
        await stale
        return fresh

    fresh = asyncio.run(scenario())

    assert [slot.label for slot in fresh] == ["10:00 - 11:00", "11:00 - 12:00"]
    assert board.available_slots == fresh


def test_book_refreshes_and_removes_taken_slot(store):
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])

    async def scenario():
        await board.refresh(DAY, services)
        return await board.book("pet-1", board.available_slots[1])

    reservation = asyncio.run(scenario())

    assert reservation is not None
    assert reservation.start_time == at(10)
    assert [slot.label for slot in board.available_slots] == ["09:00 - 10:00", "11:00 - 12:00"]


def test_failed_book_keeps_offered_slots(store, add_reservation):
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])
    asyncio.run(board.refresh(DAY, services))
    offered = list(board.available_slots)
    add_reservation(at(9, 30), at(10, 30))

    reservation = asyncio.run(board.book("pet-1", offered[0]))

    assert reservation is None
    assert board.available_slots == offered
    assert "overlaps" in board.error_message


def test_book_without_selection_reports_error(store):
    board = SlotBoard(store, "groomer-1", "user-1")
    assert asyncio.run(board.book("pet-1", None)) is None
    assert board.error_message == "Please select a time slot."


def test_cancel_requeries_availability(store):
    board = SlotBoard(store, "groomer-1", "user-1")
    services = store.get_services(["svc-full"])

    async def scenario():
        await board.refresh(DAY, services)
        reservation = await board.book("pet-1", board.available_slots[0])
        taken = [slot.label for slot in board.available_slots]
        await board.cancel(reservation.id)
        return taken

    taken = asyncio.run(scenario())

    assert "09:00 - 10:00" not in taken
    assert [slot.label for slot in board.available_slots][0] == "09:00 - 10:00"


def test_unexpected_refresh_failure_still_clears_loading(store):
    def broken(groomer_id, day_start, day_end):
        raise RuntimeError("connection reset")

    store.list_confirmed_reservations = broken
    board = SlotBoard(store, "groomer-1", "user-1")

    with pytest.raises(RuntimeError):
        asyncio.run(board.refresh(DAY, store.get_services(["svc-full"])))

    assert board.is_loading is False
