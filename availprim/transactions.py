"""Submitting signed and unsigned transactions to a local transaction pool."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field
from typing import Any

from availprim.extrinsic import AppUncheckedExtrinsic
from availprim.offchain import Account, Signer

SignaturePayload = tuple[Any, Any, Any]


@dataclass
class TransactionPool:
    """Local pool collecting submitted extrinsics, optionally bounded in size."""

    capacity: int | None = None
    transactions: list[AppUncheckedExtrinsic] = field(default_factory=list)

    def submit(self, extrinsic: AppUncheckedExtrinsic) -> None:
        """Add ``extrinsic`` to the pool; raises RuntimeError when the pool is full."""
        if self.capacity is not None and len(self.transactions) >= self.capacity:
            raise RuntimeError("transaction pool is full")
        self.transactions.append(extrinsic)


def submit_transaction(
    pool: TransactionPool, call: Any, signature: SignaturePayload | None
) -> AppUncheckedExtrinsic:
    """Wrap ``call`` in an extrinsic, signed when ``signature`` is given, and submit it.

    ``signature`` is an ``(address, signature, extra)`` tuple or ``None``.
    Returns the submitted extrinsic; raises when the pool rejects it.
    """
    if signature is None:
        extrinsic = AppUncheckedExtrinsic.new_unsigned(call)
    else:
        address, sig, extra = signature
        extrinsic = AppUncheckedExtrinsic.new_signed(call, address, sig, extra)
    pool.submit(extrinsic)
    return extrinsic


def submit_unsigned_transaction(pool: TransactionPool, call: Any) -> AppUncheckedExtrinsic:
    """Submit ``call`` as an unsigned extrinsic."""
    return submit_transaction(pool, call, None)


def _try_submit(pool: TransactionPool, call: Any, signature: SignaturePayload | None) -> bool:
    try:
        submit_transaction(pool, call, signature)
    except RuntimeError:
        return False
    return True


def _for_accounts(signer: Signer, action: Callable[[Account], bool | None]) -> Any:
    """Run ``action`` per account, skipping accounts where it returns ``None``.

    Returns a list of ``(account, submitted)`` pairs when the signer uses all
    accounts, otherwise the first such pair or ``None``.
    """
    if signer.use_all:
        results = []
        for account in signer.accounts():
            outcome = action(account)
            if outcome is not None:
                results.append((account, outcome))
        return results
    for account in signer.accounts():
        outcome = action(account)
        if outcome is not None:
            return account, outcome
    return None


def _payload_public(payload: Any) -> Any:
    public = payload.public
    return public() if callable(public) else public


def send_signed_transaction(
    signer: Signer,
    pool: TransactionPool,
    nonces: MutableMapping[Any, int],
    create_transaction: Callable[[Any, Any, Any, int], tuple[Any, SignaturePayload] | None],
    make_call: Callable[[Account], Any],
) -> Any:
    """Build, sign and submit a transaction for the signer's account(s).

    ``create_transaction(call, public, account_id, nonce)`` returns
    ``(call, (address, signature, extra))`` or ``None`` when the account cannot
    sign. After a successful submission the account's nonce in ``nonces`` is
    incremented. Each result pairs the account with whether the pool accepted
    the transaction.
    """

    def action(account: Account) -> bool | None:
        nonce = nonces.get(account.id, 0)
        created = create_transaction(make_call(account), account.public, account.id, nonce)
        if created is None:
            return None
        call, signature = created
        submitted = _try_submit(pool, call, signature)
        if submitted:
            nonces[account.id] = nonce + 1
        return submitted

    return _for_accounts(signer, action)


def send_unsigned_transaction(
    signer: Signer,
    pool: TransactionPool,
    make_payload: Callable[[Account], Any],
    make_call: Callable[[Any, Any], Any],
) -> Any:
    """Submit unsigned transactions carrying a payload signed by the account(s).

    ``make_payload(account)`` builds a payload with ``encode()`` and a
    ``public`` key; it is signed with that key and ``make_call(payload,
    signature)`` yields the call to submit. Accounts whose payload cannot be
    signed are skipped.
    """

    def action(account: Account) -> bool | None:
        payload = make_payload(account)
        signature = signer.crypto.sign(bytes(payload.encode()), _payload_public(payload))
        if signature is None:
            return None
        return _try_submit(pool, make_call(payload, signature), None)

    return _for_accounts(signer, action)