import pytest
from unittest.mock import MagicMock

from backend.modules.garden.live_feed import FLOWER_PLANTED_EVENT, GARDEN_NAMESPACE, FlowerFeed
from backend.modules.garden.models import FlowerRecord


def _record(flower_id="abc"):
    return FlowerRecord(id=flower_id, species="tulip", message="hi", author="Ana", x=20, y=70)


def test_subscribers_receive_published_records():
    feed = FlowerFeed()
    received = []
    feed.subscribe(received.append)

    feed.publish(_record())

    assert [r.id for r in received] == ["abc"]


def test_unsubscribe_stops_delivery():
    feed = FlowerFeed()
    received = []
    unsubscribe = feed.subscribe(received.append)

    unsubscribe()
    feed.publish(_record())

    assert received == []


def test_failing_subscriber_does_not_break_others():
    feed = FlowerFeed()
    received = []

    def broken(record):
        raise RuntimeError("listener crashed")

    feed.subscribe(broken)
    feed.subscribe(received.append)

    feed.publish(_record())

    assert len(received) == 1


def test_socket_clients_get_connection_event(app):
    sio = app.socketio.test_client(app, namespace=GARDEN_NAMESPACE)

    received = sio.get_received(GARDEN_NAMESPACE)

    assert sio.is_connected(GARDEN_NAMESPACE)
    assert received[0]["name"] == "connection_established"
    assert app.garden_service.feed.connected_clients == 1
    sio.disconnect(namespace=GARDEN_NAMESPACE)


def test_planting_broadcasts_to_socket_clients(app, client):
    sio = app.socketio.test_client(app, namespace=GARDEN_NAMESPACE)
    sio.get_received(GARDEN_NAMESPACE)

    response = client.post('/api/flowers', json={'message': 'Sunny morning', 'author': 'Ana'})
    assert response.status_code == 201

    events = [e for e in sio.get_received(GARDEN_NAMESPACE) if e["name"] == FLOWER_PLANTED_EVENT]
    assert len(events) == 1
    payload = events[0]["args"][0]
    assert payload["id"] == response.get_json()["data"]["id"]
    assert payload["author"] == "Ana"


def test_subscribers_run_off_the_request_thread_with_socketio():
    socketio = MagicMock()
    feed = FlowerFeed(socketio)
    received = []
    feed.subscribe(received.append)
    record = _record()

    feed.publish(record)

    assert received == []
    socketio.emit.assert_called_once_with(FLOWER_PLANTED_EVENT, record.to_dict(), namespace=GARDEN_NAMESPACE)
    task, *args = socketio.start_background_task.call_args.args
    task(*args)
    assert received == [record]


def test_no_background_task_without_subscribers():
    socketio = MagicMock()

    FlowerFeed(socketio).publish(_record())

    socketio.start_background_task.assert_not_called()
