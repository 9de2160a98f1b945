"""
UniVault Backend - Vault Service

Fund-management operations for student organizations. Keys are passed in
by the caller (the deployment script holds them, the API signs custodially
with the creator key); this module never stores them.

Functions:
  - create_vault()              → compile the conditional-release vault
  - derive_multisig_address()   → shared-custody vault address (offline)
  - fund_vault()                → payment into a vault
  - create_ticket_asset()       → event ticket ASA, waits for the asset id
  - opt_in_ticket()             → receiver-side opt-in (zero self-transfer)
  - transfer_ticket()           → ticket transfer, requires a prior opt-in
  - verify_ticket()             → does an address hold tickets
  - get_vault_balance()         → microAlgo balance
  - get_account_summary()       → balance + asset holdings
"""

import logging

from algosdk import account, error, transaction

from errors import LedgerQueryError, OptInRequiredError, SubmissionError, ValidationError
from services.algorand_service import (
    TRANSACTION_BUILD_ERRORS,
    compile_program,
    get_account_info,
    get_suggested_params,
    submit_transaction,
)
from services.vault_program import build_vault_teal

logger = logging.getLogger(__name__)

MICROALGOS_PER_ALGO = 1_000_000

TICKET_UNIT_NAME = "TICKET"
TICKET_URL = "https://univault.io/events/{event_name}"


def create_vault(client, creator, goal_amount, deadline):
    """
    Build and compile the conditional-release program.

    The vault address is the logic signature address, so changing the
    creator, goal or deadline yields a different vault.
    """
    teal = build_vault_teal(creator, goal_amount, deadline)
    program = compile_program(client, teal)
    return {
        "program": program,
        "address": program["hash"],
        "teal": teal,
    }


def derive_multisig_address(addresses, threshold=2, version=1):
    """
    Derive a multisig vault address. Order of `addresses` matters.
    Raises ValidationError when the SDK rejects the threshold or an address.
    """
    try:
        msig = transaction.Multisig(version, threshold, list(addresses))
        msig.validate()
    except error.InvalidThresholdError as e:
        raise ValidationError(
            f"Invalid threshold {threshold} for {len(addresses)} participants"
        ) from e
    except (error.UnknownMsigVersionError, error.MultisigAccountSizeError,
            error.WrongKeyLengthError, error.WrongChecksumError,
            ValueError, TypeError) as e:
        raise ValidationError(f"Invalid multisig parameters: {e!r}") from e

    return {
        "address": msig.address(),
        "params": {
            "version": version,
            "threshold": threshold,
            "addrs": list(addresses),
        },
    }


def _sign(build, sk):
    """Build a transaction and sign it; local SDK rejections are SubmissionErrors."""
    try:
        return build().sign(sk)
    except TRANSACTION_BUILD_ERRORS as e:
        raise SubmissionError(f"Invalid transaction: {e!r}") from e


def fund_vault(client, vault_address, sender_sk, amount):
    """Pay `amount` microAlgos from the key's account into a vault."""
    sender = account.address_from_private_key(sender_sk)
    params = get_suggested_params(client)

    signed_txn = _sign(lambda: transaction.PaymentTxn(
        sender=sender,
        sp=params,
        receiver=vault_address,
        amt=amount,
    ), sender_sk)

    tx_id, _ = submit_transaction(client, signed_txn)
    return tx_id


def create_ticket_asset(client, creator_sk, event_name, total_supply=100):
    """
    Create the ticket ASA for an event. The creator holds every role and
    the whole supply. Returns {"assetId", "txId"} once confirmed.
    """
    creator = account.address_from_private_key(creator_sk)
    params = get_suggested_params(client)

    signed_txn = _sign(lambda: transaction.AssetConfigTxn(
        sender=creator,
        sp=params,
        total=total_supply,
        default_frozen=False,
        unit_name=TICKET_UNIT_NAME,
        asset_name=event_name,
        decimals=0,                    # 1 unit = 1 ticket
        manager=creator,
        reserve=creator,
        freeze=creator,
        clawback=creator,
        url=TICKET_URL.format(event_name=event_name),
    ), creator_sk)

    tx_id, result = submit_transaction(client, signed_txn)
    asset_id = result["asset-index"]
    logger.info("Ticket %r created, asset id %s", event_name, asset_id)
    return {"assetId": asset_id, "txId": tx_id}


def opt_in_ticket(client, holder_sk, asset_id):
    """
    Opt an account into a ticket asset. Returns once the opt-in is
    confirmed, so a transfer can follow.
    """
    holder = account.address_from_private_key(holder_sk)
    params = get_suggested_params(client)

    signed_txn = _sign(lambda: transaction.AssetTransferTxn(
        sender=holder,
        sp=params,
        receiver=holder,
        amt=0,
        index=asset_id,
    ), holder_sk)

    tx_id, _ = submit_transaction(client, signed_txn)
    return tx_id


def is_opted_in(client, address, asset_id):
    account_info = get_account_info(client, address)
    return any(a["asset-id"] == asset_id for a in account_info.get("assets", []))


def transfer_ticket(client, asset_id, sender_sk, receiver, amount=1):
    """
    Transfer tickets to a holder who has already opted in.
    Raises OptInRequiredError before submitting anything otherwise.
    """
    try:
        opted_in = is_opted_in(client, receiver, asset_id)
    except LedgerQueryError as e:
        raise SubmissionError(str(e)) from e
    if not opted_in:
        raise OptInRequiredError(receiver, asset_id)

    sender = account.address_from_private_key(sender_sk)
    params = get_suggested_params(client)

    signed_txn = _sign(lambda: transaction.AssetTransferTxn(
        sender=sender,
        sp=params,
        receiver=receiver,
        amt=amount,
        index=asset_id,
    ), sender_sk)

    tx_id, _ = submit_transaction(client, signed_txn)
    return tx_id


def verify_ticket(client, address, asset_id):
    """Report whether `address` currently holds units of `asset_id`."""
    account_info = get_account_info(client, address)
    amount = 0
    for asset in account_info.get("assets", []):
        if asset["asset-id"] == asset_id:
            amount = asset["amount"]
            break

    return {"hasTicket": amount > 0, "amount": amount}


def get_vault_balance(client, address):
    return get_account_info(client, address)["amount"]


def get_account_summary(client, address):
    account_info = get_account_info(client, address)
    balance = account_info["amount"]
    return {
        "address": account_info.get("address", address),
        "balance": balance,
        "balanceInAlgo": balance / MICROALGOS_PER_ALGO,
        "assets": account_info.get("assets", []),
    }
