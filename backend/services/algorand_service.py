"""
UniVault Backend - Algorand Service

Thin adapter around the algod client. Every network failure is re-raised
as a UniVault error with the node's message; nothing is retried.

Functions:
  - get_algod_client()       → algod client from config
  - keys_from_mnemonic()     → (private_key, address)
  - create_wallet()          → generate new Algorand account
  - compile_program()        → TEAL source → {result, hash, bytes}
  - get_suggested_params()   → fresh params for a new transaction
  - submit_transaction()     → send a signed txn and wait for confirmation
  - get_account_info()       → raw account state
"""

import base64
import logging

from algosdk import account, error, mnemonic, transaction
from algosdk.v2client import algod

from config import ALGOD_ADDRESS, ALGOD_TOKEN
from errors import CompilationError, ConfirmationTimeoutError, LedgerQueryError, SubmissionError

logger = logging.getLogger(__name__)

# Rounds to wait for a submitted transaction before giving up
CONFIRMATION_ROUNDS = 4

# Raised locally by algosdk while building or signing a transaction
# (bad receiver address, negative amount)
TRANSACTION_BUILD_ERRORS = (
    error.WrongKeyLengthError,
    error.WrongChecksumError,
    error.WrongAmountType,
    ValueError,
)


def get_algod_client():
    return algod.AlgodClient(ALGOD_TOKEN, ALGOD_ADDRESS)


def keys_from_mnemonic(phrase):
    """Return (private_key, address) for a 25-word mnemonic."""
    sk = mnemonic.to_private_key(phrase)
    addr = account.address_from_private_key(sk)
    return sk, addr


def create_wallet():
    """
    Generate a new Algorand account.
    Returns (address, private_key, mnemonic_phrase).
    """
    sk, addr = account.generate_account()
    mn = mnemonic.from_private_key(sk)
    return addr, sk, mn


def compile_program(client, source_code):
    """
    Compile TEAL source on the node.

    Returns {"result": base64 program, "hash": logic sig address, "bytes": program bytes}.
    Raises CompilationError when the node rejects the source.
    """
    try:
        response = client.compile(source_code)
    except error.AlgodHTTPError as e:
        raise CompilationError(str(e)) from e

    return {
        "result": response["result"],
        "hash": response["hash"],
        "bytes": base64.b64decode(response["result"]),
    }


def get_suggested_params(client):
    """Fresh transaction parameters; SubmissionError when the node can't supply them."""
    try:
        return client.suggested_params()
    except error.AlgodHTTPError as e:
        raise SubmissionError(str(e)) from e


def submit_transaction(client, signed_txn, wait_rounds=CONFIRMATION_ROUNDS):
    """
    Send a signed transaction and block until it is confirmed.
    Returns (tx_id, pending transaction info).
    """
    try:
        tx_id = client.send_transaction(signed_txn)
    except error.AlgodHTTPError as e:
        raise SubmissionError(str(e)) from e
    logger.info("Transaction sent: %s", tx_id)

    try:
        result = transaction.wait_for_confirmation(client, tx_id, wait_rounds)
    except error.ConfirmationTimeoutError as e:
        raise ConfirmationTimeoutError(str(e)) from e
    except error.TransactionRejectedError as e:
        raise SubmissionError(str(e)) from e
    except error.AlgodHTTPError as e:
        raise SubmissionError(str(e)) from e

    logger.info("Transaction %s confirmed in round %s", tx_id, result.get("confirmed-round"))
    return tx_id, result


def get_account_info(client, address):
    """Current account state as reported by the node."""
    try:
        return client.account_info(address)
    except error.AlgodHTTPError as e:
        raise LedgerQueryError(str(e)) from e
