"""Selecting keystore accounts and signing payloads with them off-chain."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class Account:
    """An account whose private key is held in the keystore."""

    index: int
    id: Any
    public: Any


def _payload_public(payload: Any) -> Any:
    public = payload.public
    return public() if callable(public) else public


@dataclass(frozen=True)
class Signer:
    """Signs with keystore keys: with all of them, or with the first that works.

    ``keystore`` holds the public keys available for signing. ``crypto`` must
    provide ``sign(message, public)`` returning a signature or ``None``, and
    may provide ``account_id(public)``; without it the public key is the
    account id.
    """

    keystore: tuple[Any, ...]
    crypto: Any
    use_all: bool = False
    filter_keys: tuple[Any, ...] | None = None

    @classmethod
    def all_accounts(cls, keystore: Iterable[Any], crypto: Any) -> "Signer":
        """Use every available key for signing."""
        return cls(keystore=tuple(keystore), crypto=crypto, use_all=True)

    @classmethod
    def any_account(cls, keystore: Iterable[Any], crypto: Any) -> "Signer":
        """Use the first key that succeeds for signing."""
        return cls(keystore=tuple(keystore), crypto=crypto, use_all=False)

    def with_filter(self, accounts: Iterable[Any]) -> "Signer":
        """Restrict signing to ``accounts`` that are also in the keystore.

        Account indices then refer to positions in ``accounts``.
        """
        return replace(self, filter_keys=tuple(accounts))

    def _account_id(self, public: Any) -> Any:
        convert = getattr(self.crypto, "account_id", None)
        return convert(public) if convert is not None else public

    def accounts(self) -> Iterator[Account]:
        """Accounts usable for signing, in keystore or filter order."""
        if self.filter_keys is None:
            for index, public in enumerate(self.keystore):
                yield Account(index=index, id=self._account_id(public), public=public)
            return
        available = set(self.keystore)
        for index, public in enumerate(self.filter_keys):
            if public in available:
                yield Account(index=index, id=self._account_id(public), public=public)

    def can_sign(self) -> bool:
        """Whether any key could be used for signing."""
        return any(True for _ in self.accounts())

    def _dispatch(self, action: Callable[[Account], Any]) -> Any:
        """Apply ``action`` to accounts, dropping ``None`` results.

        Returns a list of ``(account, result)`` pairs when signing with all
        accounts, otherwise the first such pair or ``None``.
        """
        if self.use_all:
            results = []
            for account in self.accounts():
                result = action(account)
                if result is not None:
                    results.append((account, result))
            return results
        for account in self.accounts():
            result = action(account)
            if result is not None:
                return account, result
        return None

    def _sign_payload(self, payload: Any) -> Any:
        return self.crypto.sign(bytes(payload.encode()), _payload_public(payload))

    def sign_message(self, message: bytes) -> Any:
        """Sign ``message`` with the selected account(s)."""
        message = bytes(message)
        return self._dispatch(lambda account: self.crypto.sign(message, account.public))

    def sign(self, make_payload: Callable[[Account], Any]) -> Any:
        """Build a payload per account and sign it with the payload's public key.

        A payload has an ``encode()`` method and a ``public`` key (attribute or
        method).
        """
        return self._dispatch(lambda account: self._sign_payload(make_payload(account)))