"""Authenticated encryption of synced records and of the locally stored sync key."""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
import logging
import os
import socket
import sys
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from furtherance.hashing import blake3_hex

_log = logging.getLogger(__name__)

_KEY_LEN = 32
_NONCE_LEN = 12

_MACHINE_ID_FILES = (Path("/var/lib/dbus/machine-id"), Path("/etc/machine-id"))


class EncryptionError(Exception):
    """Encrypting, decrypting or identifying the device failed.

    ``kind`` is one of ``ENCRYPTION``, ``DECRYPTION``, ``SERIALIZATION`` or ``DEVICE_ID``.
    """

    ENCRYPTION = "encryption"
    DECRYPTION = "decryption"
    SERIALIZATION = "serialization"
    DEVICE_ID = "device_id"

    def __init__(self, kind: str, message: str | None = None) -> None:
        super().__init__(message or kind)
        self.kind = kind


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _check_key(key: bytes) -> bytes:
    key = bytes(key)
    if len(key) != _KEY_LEN:
        raise ValueError(f"key must be {_KEY_LEN} bytes, got {len(key)}")
    return key


def _b64decode(text: str) -> bytes:
    return base64.b64decode(text, validate=True)


def encrypt(data: Any, key: bytes) -> tuple[str, str]:
    """Serialize ``data`` as JSON and seal it with AES-256-GCM under a fresh nonce.

    Returns the base64 ciphertext and the base64 nonce.
    """
    key = _check_key(key)
    nonce = os.urandom(_NONCE_LEN)
    try:
        payload = json.dumps(
            data, default=_json_default, separators=(",", ":"), ensure_ascii=False
        )
    except (TypeError, ValueError) as exc:
        raise EncryptionError(EncryptionError.SERIALIZATION, str(exc)) from exc
    try:
        ciphertext = AESGCM(key).encrypt(nonce, payload.encode("utf-8"), None)
    except (ValueError, OverflowError) as exc:
        raise EncryptionError(EncryptionError.ENCRYPTION, str(exc)) from exc
    return (
        base64.b64encode(ciphertext).decode("ascii"),
        base64.b64encode(nonce).decode("ascii"),
    )


def decrypt(encrypted_data: str, nonce_b64: str, key: bytes) -> Any:
    """Open data sealed by :func:`encrypt` and return the decoded JSON value."""
    key = _check_key(key)
    try:
        ciphertext = _b64decode(encrypted_data)
        nonce = _b64decode(nonce_b64)
    except (binascii.Error, ValueError) as exc:
        raise EncryptionError(EncryptionError.DECRYPTION, "invalid base64") from exc
    if len(nonce) != _NONCE_LEN:
        raise EncryptionError(EncryptionError.DECRYPTION, "nonce has the wrong length")
    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise EncryptionError(EncryptionError.DECRYPTION, "authentication failed") from exc
    try:
        return json.loads(plaintext)
    except (UnicodeDecodeError, ValueError) as exc:
        raise EncryptionError(EncryptionError.SERIALIZATION, str(exc)) from exc


def _machine_id() -> str:
    for path in _MACHINE_ID_FILES:
        try:
            text = path.read_text(encoding="utf-8").strip()
        except OSError:
            continue
        if text:
            return text
    if sys.platform == "win32":
        import winreg

        try:
            with winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE,
                r"SOFTWARE\Microsoft\Cryptography",
                0,
                winreg.KEY_READ | winreg.KEY_WOW64_64KEY,
            ) as handle:
                value, _ = winreg.QueryValueEx(handle, "MachineGuid")
                return str(value)
        except OSError as exc:
            raise EncryptionError(EncryptionError.DEVICE_ID, str(exc)) from exc
    raise EncryptionError(EncryptionError.DEVICE_ID, "machine id unavailable")


def generate_device_id() -> str:
    """Identify this device by its machine id and host name."""
    machine_id = _machine_id()
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = ""
    return f"{machine_id}:{hostname}"


def get_device_key() -> bytes:
    """A 32-byte key bound to this device, used to protect the stored sync key."""
    return bytes.fromhex(blake3_hex(generate_device_id()))[:_KEY_LEN]


def encrypt_encryption_key(encryption_key: str) -> tuple[str, str]:
    """Seal the user's encryption key with the device key."""
    return encrypt(encryption_key, get_device_key())


def decrypt_encryption_key(encrypted_key: str, nonce: str) -> bytes:
    """Recover the user's 32-byte encryption key sealed on this device."""
    key_string = decrypt(encrypted_key, nonce, get_device_key())
    if not isinstance(key_string, str) or "=" in key_string or len(key_string) % 4 == 1:
        raise EncryptionError(EncryptionError.SERIALIZATION, "malformed key text")
    padded = key_string + "=" * (-len(key_string) % 4)
    try:
        key_bytes = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncryptionError(EncryptionError.SERIALIZATION, "malformed key text") from exc
    if len(key_bytes) != _KEY_LEN:
        raise EncryptionError(EncryptionError.SERIALIZATION, "key has the wrong length")
    return key_bytes