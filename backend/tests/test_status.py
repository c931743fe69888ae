"""Tests for the status board."""

from aieditor.status import StatusBoard


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_status_expires_after_ttl():
    clock = FakeClock()
    board = StatusBoard(ttl=2.0, clock=clock)
    board.set_status("Saved")
    assert board.status == "Saved"
    clock.now += 1.9
    assert board.status == "Saved"
    clock.now += 0.2
    assert board.status == ""


def test_status_without_ttl_stays():
    clock = FakeClock()
    board = StatusBoard(ttl=2.0, clock=clock)
    board.set_status("Processing...", ttl=None)
    clock.now += 60
    assert board.status == "Processing..."


def test_error_does_not_expire():
    clock = FakeClock()
    board = StatusBoard(ttl=2.0, clock=clock)
    board.set_error("Failed")
    clock.now += 60
    assert board.error == "Failed"


def test_status_and_error_are_exclusive():
    board = StatusBoard(ttl=2.0, clock=FakeClock())
    board.set_status("Working")
    board.set_error("Broken")
    assert (board.status, board.error) == ("", "Broken")
    board.set_status("Fixed")
    assert (board.status, board.error) == ("Fixed", "")


def test_view_and_clear():
    board = StatusBoard(ttl=2.0, clock=FakeClock())
    board.set_error("Oops")
    assert board.view().model_dump() == {"status": "", "error": "Oops"}
    board.clear()
    assert board.view().model_dump() == {"status": "", "error": ""}
