"""Tests for the in-process change feed."""

from __future__ import annotations

import logging
import threading
import time

from fintro.infra.realtime import ChangeFeed


def test_subscribe_delivers_current_snapshot():
    feed = ChangeFeed()
    data = [1, 2]
    received: list[list] = []

    feed.subscribe("paychecks", "u1", lambda: data, received.append)

    assert received == [[1, 2]]


def test_notify_redelivers_to_matching_pair_only():
    feed = ChangeFeed()
    data = ["a"]
    mine: list[list] = []
    other_user: list[list] = []
    other_collection: list[list] = []
    feed.subscribe("expenses", "u1", lambda: data, mine.append)
    feed.subscribe("expenses", "u2", lambda: data, other_user.append)
    feed.subscribe("savings", "u1", lambda: data, other_collection.append)

    data.append("b")
    assert feed.notify("expenses", "u1") == 1

    assert mine == [["a"], ["a", "b"]]
    assert len(other_user) == 1
    assert len(other_collection) == 1


def test_snapshot_is_a_copy():
    feed = ChangeFeed()
    data = [1]
    received: list[list] = []
    feed.subscribe("c", "u", lambda: data, received.append)
    data.append(2)
    assert received[0] == [1]


def test_cancel_stops_delivery():
    feed = ChangeFeed()
    received: list[list] = []
    subscription = feed.subscribe("c", "u", lambda: [], received.append)

    subscription.cancel()
    subscription.cancel()
    feed.notify("c", "u")

    assert not subscription.active
    assert len(received) == 1
    assert feed.listener_count("c", "u") == 0


def test_subscription_as_context_manager():
    feed = ChangeFeed()
    with feed.subscribe("c", "u", lambda: [], lambda _: None):
        assert feed.listener_count("c", "u") == 1
    assert feed.listener_count("c", "u") == 0


def test_failing_listener_does_not_block_others(caplog):
    feed = ChangeFeed()
    received: list[list] = []

    def broken(_snapshot):
        raise RuntimeError("boom")

    feed.subscribe("c", "u", lambda: [1], broken)
    feed.subscribe("c", "u", lambda: [1], received.append)

    with caplog.at_level(logging.ERROR, logger="fintro"):
        assert feed.notify("c", "u") == 2

    assert len(received) == 2
    assert "Snapshot listener failed" in caplog.text


def test_deliveries_for_a_pair_are_serialized():
    feed = ChangeFeed()
    rows = ["a", "b"]
    received: list[list] = []
    first_fetch_started = threading.Event()
    fetches = []

    def fetch():
        snapshot = list(rows)
        fetches.append(snapshot)
        if len(fetches) == 2:
            first_fetch_started.set()
            time.sleep(0.2)
        return snapshot

    feed.subscribe("c", "u", fetch, received.append)

    rows.remove("a")
    slow = threading.Thread(target=feed.notify, args=("c", "u"))
    slow.start()
    assert first_fetch_started.wait(1)
    rows.remove("b")
    feed.notify("c", "u")
    slow.join()

    assert received[-1] == []
