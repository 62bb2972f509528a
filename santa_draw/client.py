from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .policies import AssignmentValidationError
from .santa import DrawResult
from .services import LocalCacheStore


log = logging.getLogger(__name__)


class ClientError(RuntimeError):
    pass


class TransportError(ClientError):
    """The server could not be reached at all."""


class UnknownParticipantError(ClientError):
    pass


class NoAssignmentError(ClientError):
    pass


class ImportRejectedError(ClientError):
    def __init__(self, message: str, status: int, existing: dict[str, str] | None = None):
        super().__init__(message)
        self.status = status
        self.existing = existing


@dataclass
class Response:
    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport:
    def __init__(self, api_base: str, timeout: float = 5.0, client: httpx.Client | None = None):
        self.api_base = api_base.rstrip("/")
        self.client = client or httpx.Client(base_url=self.api_base, timeout=timeout)

    def __call__(self, method: str, path: str, payload: Any = None) -> Response:
        try:
            resp = self.client.request(
                method, path, json=payload, headers={"Accept": "application/json"}
            )
        except httpx.TransportError as e:
            raise TransportError(f"Could not reach {self.api_base}: {e}") from e
        return Response(resp.status_code, _decode(resp))

    def close(self) -> None:
        self.client.close()


def _decode(resp: httpx.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return None


class AssignmentClient:
    """
    Reads and resets the draw, preferring the server and falling back to the
    local cache.

    With `sync=False` the server is never contacted and the cache is the only
    copy. Whatever the server returns is written to the cache so a later
    offline lookup still works.
    """

    def __init__(self, cache: LocalCacheStore, transport=None, sync: bool = True):
        self.cache = cache
        self.transport = transport
        self.sync = sync and transport is not None
        self.server_state = "disabled" if not self.sync else "unknown"

    @property
    def participants(self) -> list[str]:
        return self.cache.participants

    def fetch_remote(self) -> dict[str, str] | None:
        if not self.sync:
            return None
        try:
            resp = self.transport("GET", "/api/assignments")
        except TransportError as e:
            log.warning("Server unreachable: %s", e)
            self.server_state = "unreachable"
            return None

        if resp.status == 204:
            self.server_state = "empty"
            return None
        if not resp.ok:
            log.warning("Server returned %s", resp.status)
            self.server_state = f"error ({resp.status})"
            return None

        body = resp.body if isinstance(resp.body, dict) else {}
        assignments = body.get("assignments")
        if not assignments:
            log.warning("Server answered %s without an assignment", resp.status)
            self.server_state = "invalid"
            return None
        try:
            assignments = self.cache.save(assignments)
        except AssignmentValidationError as e:
            log.warning("Server sent an assignment we cannot use: %s", e)
            self.server_state = "invalid"
            return None
        self.server_state = "ok"
        return assignments

    def load(self) -> tuple[dict[str, str] | None, str | None]:
        """Returns (assignments, source) where source is "server", "local" or None."""
        remote = self.fetch_remote()
        if remote is not None:
            return remote, "server"
        local = self.cache.get()
        if local is not None:
            return local, "local"
        return None, None

    def lookup(self, name: str) -> str:
        name = name.strip().lower()
        if name not in self.participants:
            raise UnknownParticipantError(f"No participant called {name!r}.")
        assignments, _ = self.load()
        if assignments is None:
            raise NoAssignmentError("No saved draw. Reset to create one.")
        return assignments[name]

    def reset(self) -> tuple[DrawResult, str]:
        if self.sync:
            try:
                resp = self.transport("POST", "/api/assignments/reset")
            except TransportError as e:
                log.warning("Reset on server failed, drawing locally: %s", e)
                self.server_state = "unreachable"
            else:
                body = resp.body if isinstance(resp.body, dict) else {}
                if resp.ok and body.get("assignments"):
                    assignments = self.cache.save(body["assignments"])
                    repeated = bool(body.get("repeated"))
                    self.server_state = "ok"
                    return DrawResult(assignments, repeated=repeated), "server"
                log.warning("Server refused reset (%s), drawing locally", resp.status)

        return self.cache.reset(), "local"

    def push(self) -> dict[str, str]:
        """Uploads the cached draw to a server that has none."""
        local = self.cache.get()
        if local is None:
            raise NoAssignmentError("No local draw to import; create one first.")
        if not self.sync:
            raise ClientError("Server sync is disabled.")

        resp = self.transport("POST", "/api/assignments/import", {"assignments": local})
        body = resp.body if isinstance(resp.body, dict) else {}
        if resp.ok and body.get("assignments"):
            self.server_state = "ok"
            return self.cache.save(body["assignments"])
        raise ImportRejectedError(
            f"Import failed: {body.get('error') or resp.status}",
            resp.status,
            existing=body.get("assignments"),
        )
