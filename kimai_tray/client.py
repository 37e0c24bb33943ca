import logging

import requests

from kimai_tray.models import MAX_RECENT, Task

log = logging.getLogger(__name__)


class KimaiError(Exception):
    pass


class TransportError(KimaiError):
    """Network failure, timeout or a non-2xx response."""


class AuthError(TransportError):
    """Credentials rejected (401/403)."""


class DecodeError(KimaiError):
    """Response body is not the JSON we expect."""


class NoActiveTask(Exception):
    """The service reports that no timesheet is running."""


# ========== Kimai API Client ==========
class KimaiClient:
    def __init__(self, base_url, user, token, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "X-AUTH-USER": user,
            "X-AUTH-TOKEN": token,
            "Accept": "application/json",
        })

    def _url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method, path, **kwargs):
        url = self._url(path)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} fehlgeschlagen: {e}") from e

        if r.status_code in (401, 403):
            raise AuthError(f"{method} {url} abgelehnt: HTTP {r.status_code}")
        if not 200 <= r.status_code < 300:
            raise TransportError(f"{method} {url} fehlgeschlagen: HTTP {r.status_code}")
        return r

    def _get_tasks(self, path, **kwargs):
        r = self._request("GET", path, **kwargs)
        try:
            data = r.json()
        except ValueError as e:
            raise DecodeError(f"Ungültiges JSON von {path}: {e}") from e
        if not isinstance(data, list):
            raise DecodeError(f"Liste erwartet von {path}, erhalten: {type(data).__name__}")
        try:
            return [Task.from_json(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Unerwartetes Timesheet-Format von {path}: {e!r}") from e

    def fetch_recent(self, limit=MAX_RECENT):
        tasks = self._get_tasks("recent", params={"size": limit})
        log.debug(f"{len(tasks)} letzte Timesheets geladen.")
        return tasks

    def fetch_active(self):
        tasks = self._get_tasks("active")
        if not tasks:
            raise NoActiveTask()
        return tasks[0]

    def restart(self, task_id):
        self._request("PATCH", f"{task_id}/restart")
        log.info(f"Timesheet neu gestartet: ID={task_id}")

    def stop(self, task_id):
        self._request("PATCH", f"{task_id}/stop")
        log.info(f"Timesheet gestoppt: ID={task_id}")
