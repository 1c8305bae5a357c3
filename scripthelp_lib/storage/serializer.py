from typing import Any, Protocol
import base64
import json
import os


class Serializer(Protocol):
    """Serialize/deserialize Python values for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text). Caller must ensure values are JSON-serializable."""

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, ensure_ascii=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class EncryptedSerializer:
    """Serializer that encrypts payloads using Fernet (symmetric, authenticated).

    Notes:
    - Fernet (AES-CBC + HMAC via the cryptography library) protects the
      secure string store at rest. The key itself must be kept out of the
      data directory or at least in an owner-only file.
    - For passphrase-derived keys, pass `password`; each payload then carries
      its own random salt and KDF parameters so it can be decrypted later.
    """

    def __init__(
        self,
        *,
        key: bytes | None = None,
        password: str | None = None,
        iterations: int = 390000,
        base_serializer: Serializer | None = None,
    ) -> None:
        self._key = key
        self._password = password
        self._iterations = iterations
        self.base_serializer = base_serializer or JSONSerializer()

    @staticmethod
    def generate_key() -> bytes:
        from cryptography.fernet import Fernet

        return Fernet.generate_key()

    def _derive_key(self, password: str, salt: bytes, iterations: int) -> bytes:
        from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
        from cryptography.hazmat.primitives import hashes

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

    def dump(self, value: Any) -> bytes:
        """Serialize and encrypt value, returning a framed JSON blob.

        The frame includes version, kdf params (when password-mode) and the
        base64-encoded ciphertext so the loader can derive the key and decrypt.
        """
        from cryptography.fernet import Fernet

        inner = self.base_serializer.dump(value)

        if self._password is not None:
            salt = os.urandom(16)
            key = self._derive_key(self._password, salt, self._iterations)
            ct = Fernet(key).encrypt(inner)
            frame = {
                "v": 1,
                "mode": "password",
                "kdf": "pbkdf2",
                "iterations": self._iterations,
                "salt": base64.urlsafe_b64encode(salt).decode("ascii"),
                "ct": base64.urlsafe_b64encode(ct).decode("ascii"),
            }
            return json.dumps(frame).encode("utf-8")

        if self._key is not None:
            ct = Fernet(self._key).encrypt(inner)
            frame = {"v": 1, "mode": "key", "ct": base64.urlsafe_b64encode(ct).decode("ascii")}
            return json.dumps(frame).encode("utf-8")

        raise ValueError("EncryptedSerializer requires either `key` or `password`")

    def load(self, data: bytes) -> Any:
        """Parse framed blob, derive key if needed, decrypt and deserialize."""
        from cryptography.fernet import Fernet

        frame = json.loads(data.decode("utf-8"))
        mode = frame.get("mode")
        if mode == "password":
            if self._password is None:
                raise ValueError("serializer was not configured with a password")
            salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
            iterations = frame.get("iterations", self._iterations)
            key = self._derive_key(self._password, salt, iterations)
            ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
            return self.base_serializer.load(Fernet(key).decrypt(ct))

        if mode == "key":
            if self._key is None:
                raise ValueError("serializer was not configured with a key")
            ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
            return self.base_serializer.load(Fernet(self._key).decrypt(ct))

        raise ValueError("unknown frame format")
