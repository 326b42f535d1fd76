from src.pupil_dashboard.pupil_dashboard.dashboard.store import DashboardStore, RequestTokens


def test_tokens_increase_monotonically():
    tokens = RequestTokens()

    issued = [tokens.issue() for _ in range(5)]

    assert issued == sorted(issued)
    assert len(set(issued)) == 5
    assert tokens.is_current(issued[-1])
    assert not tokens.is_current(issued[0])


def test_stale_response_is_discarded():
    store = DashboardStore()
    stale = store.begin_refresh()
    fresh = store.begin_refresh()

    assert store.accept_behaviour(fresh, {"data": "fresh"})
    assert not store.accept_behaviour(stale, {"data": "stale"})
    assert store.behaviour == {"data": "fresh"}


def test_stale_attendance_does_not_overwrite():
    store = DashboardStore()
    stale = store.begin_refresh()
    store.begin_refresh()

    assert not store.accept_attendance(stale, {"data": {}})
    assert store.attendance is None


def test_set_announcements_replaces_cursor():
    store = DashboardStore()

    cursor = store.set_announcements([{"title": "a"}, {"title": "b"}], index=1)

    assert store.cursor is cursor
    assert cursor.index == 1
