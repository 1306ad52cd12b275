import base64
import logging
import os
from typing import Dict, Tuple
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from .exceptions import DecryptionFailure, EncryptionFailure

logger = logging.getLogger(__name__)

# kf1$<iterations>$<salt, urlsafe base64>$<fernet token>
TOKEN_VERSION = "kf1"
DEFAULT_ITERATIONS = 600000
MAX_ITERATIONS = 10_000_000
SALT_SIZE = 16


def generate_salt() -> bytes:
    return os.urandom(SALT_SIZE)


def derive_key(passphrase: str, salt: bytes, iterations: int = DEFAULT_ITERATIONS) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode('utf-8')))


def _seal(fernet: Fernet, plaintext: str, salt: bytes, iterations: int) -> str:
    token = fernet.encrypt(plaintext.encode('utf-8')).decode('ascii')
    salt_b64 = base64.urlsafe_b64encode(salt).decode('ascii')
    return f"{TOKEN_VERSION}${iterations}${salt_b64}${token}"


def _parse(ciphertext: str) -> Tuple[int, bytes, str]:
    try:
        version, iterations_str, salt_b64, token = ciphertext.split("$")
        iterations = int(iterations_str)
        salt = base64.urlsafe_b64decode(salt_b64)
    except (AttributeError, TypeError, ValueError) as e:
        raise DecryptionFailure() from e
    if version != TOKEN_VERSION or len(salt) != SALT_SIZE:
        raise DecryptionFailure()
    if not 1 <= iterations <= MAX_ITERATIONS:
        raise DecryptionFailure()
    return iterations, salt, token


def _open(fernet: Fernet, token: str) -> str:
    try:
        return fernet.decrypt(token.encode('ascii')).decode('utf-8')
    except (InvalidToken, ValueError) as e:
        raise DecryptionFailure() from e


def encrypt(plaintext: str, passphrase: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Encrypt ``plaintext`` under ``passphrase``.

    A fresh salt is drawn for every call and embedded in the returned token
    together with the iteration count, so :func:`decrypt` needs nothing but
    the token and the passphrase. Fernet also randomizes its IV, so two
    encryptions of the same value never compare equal.
    """
    if not plaintext:
        raise EncryptionFailure("Nothing to encrypt")
    if passphrase is None:
        raise EncryptionFailure("A passphrase is required")
    salt = generate_salt()
    try:
        fernet = Fernet(derive_key(passphrase, salt, iterations))
        return _seal(fernet, plaintext, salt, iterations)
    except (TypeError, ValueError) as e:
        logger.error("Encryption failed: %s", type(e).__name__)
        raise EncryptionFailure("Failed to encrypt password") from e


def decrypt(ciphertext: str, passphrase: str) -> str:
    """Reverse :func:`encrypt`.

    Raises DecryptionFailure for a wrong passphrase, a tampered or truncated
    token, or a payload that is not valid UTF-8.
    """
    if not ciphertext or passphrase is None:
        raise DecryptionFailure()
    iterations, salt, token = _parse(ciphertext)
    try:
        fernet = Fernet(derive_key(passphrase, salt, iterations))
    except (TypeError, ValueError) as e:
        raise DecryptionFailure() from e
    return _open(fernet, token)


class CryptoManager:
    """Binds one user's passphrase for the lifetime of a client session.

    Tokens are format-compatible with :func:`encrypt`/:func:`decrypt`. The
    manager reuses a single session salt when encrypting and caches derived
    keys per (salt, iterations), so a vault written in one session costs one
    key derivation to read back.
    """

    def __init__(self, passphrase: str, iterations: int = DEFAULT_ITERATIONS):
        if not passphrase:
            raise ValueError("A passphrase is required to unlock the vault")
        self._passphrase = passphrase
        self._iterations = iterations
        self._salt = generate_salt()
        self._keys: Dict[Tuple[bytes, int], Fernet] = {}

    def _fernet(self, salt: bytes, iterations: int) -> Fernet:
        cache_key = (salt, iterations)
        fernet = self._keys.get(cache_key)
        if fernet is None:
            fernet = Fernet(derive_key(self._passphrase, salt, iterations))
            self._keys[cache_key] = fernet
        return fernet

    def encrypt_text(self, text: str) -> str:
        if not text:
            raise EncryptionFailure("Nothing to encrypt")
        try:
            fernet = self._fernet(self._salt, self._iterations)
            return _seal(fernet, text, self._salt, self._iterations)
        except (TypeError, ValueError) as e:
            logger.error("Encryption failed: %s", type(e).__name__)
            raise EncryptionFailure("Failed to encrypt password") from e

    def decrypt_text(self, token: str) -> str:
        if not token:
            raise DecryptionFailure()
        iterations, salt, body = _parse(token)
        try:
            fernet = self._fernet(salt, iterations)
        except (TypeError, ValueError) as e:
            raise DecryptionFailure() from e
        return _open(fernet, body)
