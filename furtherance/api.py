"""Client for the sync server: sign-in, token refresh, sign-out and sync."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

import httpx

from furtherance.encryption import EncryptionError, generate_device_id
from furtherance.sessions import FurUser
from furtherance.shortcuts import EncryptedShortcut
from furtherance.tasks import EncryptedTask
from furtherance.todos import EncryptedTodo

_log = logging.getLogger(__name__)

_T = TypeVar("_T")


class ApiError(Exception):
    """A request to the sync server failed.

    ``kind`` is one of ``AUTH``, ``DEVICE``, ``INACTIVE_SUBSCRIPTION``,
    ``NETWORK``, ``SERVER`` or ``TOKEN_REFRESH``.
    """

    AUTH = "auth"
    DEVICE = "device"
    INACTIVE_SUBSCRIPTION = "inactive_subscription"
    NETWORK = "network"
    SERVER = "server"
    TOKEN_REFRESH = "token_refresh"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass
class LoginResponse:
    access_token: str
    refresh_token: str


@dataclass
class SyncResponse:
    server_timestamp: int
    tasks: list[EncryptedTask] = field(default_factory=list)
    shortcuts: list[EncryptedShortcut] = field(default_factory=list)
    todos: list[EncryptedTodo] = field(default_factory=list)
    orphaned_tasks: list[str] = field(default_factory=list)
    orphaned_shortcuts: list[str] = field(default_factory=list)
    orphaned_todos: list[str] = field(default_factory=list)


def _device_id() -> str:
    try:
        return generate_device_id()
    except EncryptionError as exc:
        _log.error("Failed to create device id: %s", exc)
        raise ApiError(ApiError.DEVICE, "Failed to generate device ID") from exc


async def _post(
    client: httpx.AsyncClient, url: str, payload: dict[str, Any], token: str | None = None
) -> httpx.Response:
    headers = {"Authorization": f"Bearer {token}"} if token is not None else None
    try:
        return await client.post(url, json=payload, headers=headers)
    except httpx.HTTPError as exc:
        raise ApiError(ApiError.NETWORK, str(exc)) from exc


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(ApiError.NETWORK, f"invalid response body: {exc}") from exc


def _record(cls: type[_T], item: Any) -> _T:
    return cls(**{f.name: item[f.name] for f in dataclasses.fields(cls)})  # type: ignore[arg-type]


def _parse_sync_response(data: Any) -> SyncResponse:
    try:
        return SyncResponse(
            server_timestamp=int(data["server_timestamp"]),
            tasks=[_record(EncryptedTask, item) for item in data["tasks"]],
            shortcuts=[_record(EncryptedShortcut, item) for item in data["shortcuts"]],
            todos=[_record(EncryptedTodo, item) for item in data["todos"]],
            orphaned_tasks=list(data["orphaned_tasks"]),
            orphaned_shortcuts=list(data["orphaned_shortcuts"]),
            orphaned_todos=list(data["orphaned_todos"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ApiError(ApiError.NETWORK, f"invalid sync response: {exc}") from exc


async def login(email: str, encryption_key: str, server: str) -> LoginResponse:
    """Sign in and return the access and refresh tokens."""
    payload = {
        "email": email,
        "encryption_key": encryption_key,
        "device_id": _device_id(),
    }
    async with httpx.AsyncClient() as client:
        response = await _post(client, f"{server}/api/login", payload)
    if not response.is_success:
        raise ApiError(ApiError.AUTH, "Invalid credentials")
    data = _json(response)
    try:
        return LoginResponse(
            access_token=data["access_token"], refresh_token=data["refresh_token"]
        )
    except (KeyError, TypeError) as exc:
        raise ApiError(ApiError.NETWORK, f"invalid login response: {exc}") from exc


async def refresh_auth_token(refresh_token: str, server: str) -> str:
    """Exchange a refresh token for a new access token."""
    payload = {"refresh_token": refresh_token, "device_id": _device_id()}
    async with httpx.AsyncClient() as client:
        response = await _post(client, f"{server}/api/refresh", payload)
    if not response.is_success:
        raise ApiError(ApiError.TOKEN_REFRESH, "Failed to refresh token")
    data = _json(response)
    try:
        return data["access_token"]
    except (KeyError, TypeError) as exc:
        raise ApiError(ApiError.NETWORK, f"invalid refresh response: {exc}") from exc


async def server_logout(user: FurUser) -> None:
    """Tell the server this device signs out; failures are only logged."""
    try:
        device_id = generate_device_id()
    except EncryptionError as exc:
        _log.error("Failed to create device id for logout: %s", exc)
        return
    async with httpx.AsyncClient() as client:
        try:
            await client.post(
                f"{user.server}/api/logout",
                json={"device_id": device_id},
                headers={"Authorization": f"Bearer {user.access_token}"},
            )
        except httpx.HTTPError as exc:
            _log.error("Failed to send logout request: %s", exc)


async def sync_with_server(
    user: FurUser,
    last_sync: int,
    tasks: Iterable[EncryptedTask],
    shortcuts: Iterable[EncryptedShortcut],
    todos: Iterable[EncryptedTodo],
    on_token_refresh: Callable[[str, str], None] | None = None,
) -> SyncResponse:
    """Send local changes and receive the server's changes since ``last_sync``.

    An expired access token is refreshed once; ``on_token_refresh`` is called
    with the user's e-mail and the new token so it can be stored.
    """
    payload = {
        "last_sync": last_sync,
        "device_id": _device_id(),
        "tasks": [dataclasses.asdict(item) for item in tasks],
        "shortcuts": [dataclasses.asdict(item) for item in shortcuts],
        "todos": [dataclasses.asdict(item) for item in todos],
    }
    url = f"{user.server}/api/sync"
    async with httpx.AsyncClient() as client:
        response = await _post(client, url, payload, user.access_token)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            new_token = await refresh_auth_token(user.refresh_token, user.server)
            if on_token_refresh is not None:
                try:
                    on_token_refresh(user.email, new_token)
                except Exception as exc:
                    raise ApiError(ApiError.TOKEN_REFRESH, str(exc)) from exc
            response = await _post(client, url, payload, new_token)

    if response.is_success:
        return _parse_sync_response(_json(response))

    try:
        error = response.json()
    except ValueError:
        error = None
    if isinstance(error, dict) and error.get("error") == "inactive_subscription":
        message = error.get("message")
        raise ApiError(
            ApiError.INACTIVE_SUBSCRIPTION,
            message if isinstance(message, str) else "Subscription inactive",
        )
    raise ApiError(ApiError.SERVER, "Sync failed")