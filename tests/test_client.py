from unittest.mock import Mock

import pytest
import requests

from kimai_tray.client import AuthError, DecodeError, KimaiClient, NoActiveTask, TransportError
from kimai_tray.models import Task

BASE = "https://kimai.example.com/api/timesheets"

TIMESHEET = {
    "id": 42,
    "activity": {"name": "Entwicklung"},
    "project": {"name": "Kunde"},
    "begin": "2024-01-01T10:00:00+0000",
}


def response(status=200, body=None, bad_json=False):
    r = Mock()
    r.status_code = status
    if bad_json:
        r.json.side_effect = ValueError("Expecting value")
    else:
        r.json.return_value = body
    return r


@pytest.fixture()
def kimai():
    client = KimaiClient(BASE + "/", "flow", "secret")
    client.session = Mock(headers=client.session.headers)
    return client


def test_credentials_on_session():
    client = KimaiClient(BASE, "flow", "secret")
    assert client.session.headers["X-AUTH-USER"] == "flow"
    assert client.session.headers["X-AUTH-TOKEN"] == "secret"


def test_fetch_recent(kimai):
    other = dict(TIMESHEET, id=7, project={"name": "Intern"})
    kimai.session.request.return_value = response(body=[TIMESHEET, other])

    tasks = kimai.fetch_recent()

    kimai.session.request.assert_called_once_with("GET", f"{BASE}/recent", timeout=10, params={"size": 10})
    assert tasks == [
        Task(42, "Kunde", "Entwicklung", "2024-01-01T10:00:00+0000"),
        Task(7, "Intern", "Entwicklung", "2024-01-01T10:00:00+0000"),
    ]


def test_fetch_active(kimai):
    kimai.session.request.return_value = response(body=[TIMESHEET])
    task = kimai.fetch_active()
    kimai.session.request.assert_called_once_with("GET", f"{BASE}/active", timeout=10)
    assert task.id == 42
    assert task.label == "[Kunde] Entwicklung"


def test_fetch_active_empty_is_no_active_task(kimai):
    kimai.session.request.return_value = response(body=[])
    with pytest.raises(NoActiveTask):
        kimai.fetch_active()


@pytest.mark.parametrize("method,action", [("restart", "restart"), ("stop", "stop")])
def test_patch_actions(kimai, method, action):
    kimai.session.request.return_value = response(status=200, bad_json=True)
    getattr(kimai, method)(42)
    kimai.session.request.assert_called_once_with("PATCH", f"{BASE}/42/{action}", timeout=10)


def test_network_failure_is_transport_error(kimai):
    kimai.session.request.side_effect = requests.ConnectionError("DNS")
    with pytest.raises(TransportError):
        kimai.fetch_recent()
    kimai.session.request.side_effect = requests.Timeout("slow")
    with pytest.raises(TransportError):
        kimai.restart(1)


def test_rejected_credentials(kimai):
    kimai.session.request.return_value = response(status=403)
    with pytest.raises(AuthError):
        kimai.stop(1)
    # callers that only know TransportError still catch it
    assert issubclass(AuthError, TransportError)


def test_server_error_is_transport_error(kimai):
    kimai.session.request.return_value = response(status=500)
    with pytest.raises(TransportError) as excinfo:
        kimai.fetch_active()
    assert not isinstance(excinfo.value, AuthError)


@pytest.mark.parametrize("r", [
    response(bad_json=True),
    response(body={"id": 1}),
    response(body=[{"id": 1, "project": {"name": "x"}}]),
    response(body=[dict(TIMESHEET, id="42")]),
    response(body=[dict(TIMESHEET, activity=None)]),
])
def test_unexpected_body_is_decode_error(kimai, r):
    kimai.session.request.return_value = r
    with pytest.raises(DecodeError):
        kimai.fetch_recent()
