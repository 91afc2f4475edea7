from portal.application.notifications import NotificationCenter
from portal.domain.entities import SUCCESS, ERROR


def test_notification_expires(clock):
    """Уведомление исчезает по истечении срока"""
    center = NotificationCenter(duration=4.0, clock=clock)
    note = center.success("Saved")
    assert center.current() == note
    clock.advance(3.5)
    assert center.current() == note
    clock.advance(0.5)
    assert center.current() is None


def test_new_notification_supersedes_old_timer(clock):
    """Старый срок жизни не стирает новое уведомление"""
    center = NotificationCenter(duration=4.0, clock=clock)
    center.error("First")
    clock.advance(3.0)
    second = center.success("Second")
    clock.advance(2.0)
    # срок первого уже прошёл, второе должно остаться
    assert center.current() == second
    clock.advance(2.0)
    assert center.current() is None


def test_notification_details_and_kind(clock):
    center = NotificationCenter(duration=4.0, clock=clock)
    note = center.success("Registered", matricNumber="1234567890")
    assert note.kind == SUCCESS
    assert note.details == {"matricNumber": "1234567890"}
    assert center.error("Oops").kind == ERROR


def test_custom_duration(clock):
    center = NotificationCenter(duration=4.0, clock=clock)
    center.push("Long one", duration=10.0)
    clock.advance(8.0)
    assert center.current() is not None


def test_dismiss(clock):
    center = NotificationCenter(duration=4.0, clock=clock)
    center.success("Saved")
    center.dismiss()
    assert center.current() is None
