"""
Wallet identity and fee NFT mint generation

The lock commands only need the payer's public key; signing is exposed so a
transaction-assembly collaborator can reuse the same object. Key material is
validated when the signer is built, before any network traffic.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Optional, Protocol, runtime_checkable

import base58
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from ..errors import SignerError
from ..config import config as global_config

logger = logging.getLogger(__name__)

SECRET_KEY_LEN = 64


@runtime_checkable
class Signer(Protocol):
    """Anything with a base58 pubkey and an ed25519 sign()"""

    @property
    def pubkey(self) -> str:
        ...

    def sign(self, message: bytes) -> bytes:
        ...


class LocalSigner:
    """
    Signer backed by an in-memory solders Keypair

    Usage:
        signer = LocalSigner.from_file("~/.config/solana/id.json")
        payer = signer.public_key
    """

    def __init__(self, keypair: Keypair):
        self._keypair = keypair

    @property
    def pubkey(self) -> str:
        return str(self._keypair.pubkey())

    @property
    def public_key(self) -> Pubkey:
        return self._keypair.pubkey()

    @property
    def keypair(self) -> Keypair:
        """Underlying keypair, for the transaction signing collaborator"""
        return self._keypair

    def sign(self, message: bytes) -> bytes:
        return bytes(self._keypair.sign_message(message))

    @classmethod
    def from_bytes(cls, secret_key: bytes) -> "LocalSigner":
        """64-byte secret key (seed followed by public key)"""
        if len(secret_key) != SECRET_KEY_LEN:
            raise SignerError.failed(f"secret key is {len(secret_key)} bytes, expected {SECRET_KEY_LEN}")
        try:
            return cls(Keypair.from_bytes(secret_key))
        except ValueError as e:
            raise SignerError.failed(str(e)) from e

    @classmethod
    def from_base58(cls, secret_key: str) -> "LocalSigner":
        """Base58 secret key, as exported by Phantom and similar wallets"""
        try:
            raw = base58.b58decode(secret_key.strip())
        except ValueError as e:
            raise SignerError.failed(f"secret key is not base58 ({e})") from e
        return cls.from_bytes(raw)

    @classmethod
    def from_file(cls, path: str) -> "LocalSigner":
        """
        Keypair file written by solana-keygen (JSON byte array), or a bare
        64-byte secret key

        Raises:
            SignerError: If the file is missing or holds neither format
        """
        path = os.path.expanduser(path)
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise SignerError.unreadable(path, e.strerror or str(e)) from e

        if len(content) == SECRET_KEY_LEN:
            return cls.from_bytes(content)

        try:
            numbers = json.loads(content)
        except (ValueError, UnicodeDecodeError) as e:
            raise SignerError.unreadable(path, "not a JSON byte array or 64-byte secret key") from e
        if not isinstance(numbers, list):
            raise SignerError.unreadable(path, "JSON content is not a byte array")

        try:
            secret = bytes(numbers)
        except (TypeError, ValueError) as e:
            raise SignerError.unreadable(path, f"array holds non-byte values ({e})") from e
        return cls.from_bytes(secret)


def create_signer(
    keypair: Optional[Keypair] = None,
    keypair_path: Optional[str] = None,
) -> LocalSigner:
    """
    Resolve the wallet signer

    An explicit keypair wins, then an explicit path, then SOLANA_KEYPAIR_PATH.

    Raises:
        SignerError: If none is available or the keypair cannot be read
    """
    if keypair is not None:
        return LocalSigner(keypair)

    path = keypair_path or global_config.signer.keypair_path
    if not path:
        raise SignerError.not_configured()
    return LocalSigner.from_file(path)


def generate_fee_nft_mint() -> Keypair:
    """Fresh keypair for a fee NFT mint; it must co-sign the lock"""
    keypair = Keypair()
    logger.info(f"Generated fee NFT mint {keypair.pubkey()}")
    return keypair
