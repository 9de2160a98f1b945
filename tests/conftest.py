import base64
import hashlib
from types import MappingProxyType

import pytest
from algosdk import account, encoding, mnemonic, transaction
from algosdk.error import AlgodHTTPError

from app import create_app

GENESIS_HASH = base64.b64encode(hashlib.sha256(b"univault-testnet").digest()).decode()

TEAL_INT_CONSTANTS = ("pay", "axfer", "acfg", "appl")


class FakeAlgod:
    """
    In-memory stand-in for an algod node: a tiny ledger that applies
    payments, asset creation, opt-ins and asset transfers, and confirms
    every accepted transaction in the next round.
    """

    def __init__(self, default_balance=0):
        self.round = 1000
        self.default_balance = default_balance
        self.balances = {}
        self.holdings = {}
        self.pending = {}
        self.sent = []
        self.next_asset_id = 5000
        self.confirm = True

    # ---------- params & compile ----------

    def suggested_params(self):
        return transaction.SuggestedParams(
            fee=1000,
            first=self.round,
            last=self.round + 1000,
            gh=GENESIS_HASH,
            gen="testnet-v1.0",
            flat_fee=True,
        )

    def compile(self, source, source_map=False):
        if "#pragma version" not in source:
            raise AlgodHTTPError("1 error: missing #pragma version", 400)
        for line in source.splitlines():
            parts = line.split()
            if len(parts) != 2:
                continue
            op, arg = parts
            if op == "addr" and not encoding.is_valid_address(arg):
                raise AlgodHTTPError(f"1 error: addr {arg} is not a valid address", 400)
            if op == "int" and not (arg.isdigit() or arg in TEAL_INT_CONSTANTS):
                raise AlgodHTTPError(f"1 error: unable to parse {arg} as integer", 400)

        program = source.encode()
        program_hash = encoding.encode_address(encoding.checksum(b"Program" + program))
        return {"hash": program_hash, "result": base64.b64encode(program).decode()}

    # ---------- ledger ----------

    def balance(self, address):
        return self.balances.get(address, self.default_balance)

    def send_transaction(self, txn, **kwargs):
        tx = txn.transaction
        tx_id = txn.get_txid()
        info = {"confirmed-round": 0, "pool-error": ""}

        if isinstance(tx, transaction.PaymentTxn):
            if self.balance(tx.sender) < tx.amt + tx.fee:
                raise AlgodHTTPError(f"TransactionPool.Remember: {tx.sender} overspend", 400)
            self.balances[tx.sender] = self.balance(tx.sender) - tx.amt - tx.fee
            self.balances[tx.receiver] = self.balance(tx.receiver) + tx.amt

        elif isinstance(tx, transaction.AssetConfigTxn) and not tx.index:
            asset_id = self.next_asset_id
            self.next_asset_id += 1
            self.holdings.setdefault(tx.sender, {})[asset_id] = tx.total
            info["asset-index"] = asset_id

        elif isinstance(tx, transaction.AssetTransferTxn):
            receiver_assets = self.holdings.setdefault(tx.receiver, {})
            if tx.amount == 0 and tx.receiver == tx.sender:
                receiver_assets.setdefault(tx.index, 0)
            else:
                if tx.index not in receiver_assets:
                    raise AlgodHTTPError(
                        f"TransactionPool.Remember: asset {tx.index} missing from {tx.receiver}", 400
                    )
                sender_assets = self.holdings.setdefault(tx.sender, {})
                if sender_assets.get(tx.index, 0) < tx.amount:
                    raise AlgodHTTPError(f"TransactionPool.Remember: asset {tx.index} overspend", 400)
                sender_assets[tx.index] -= tx.amount
                receiver_assets[tx.index] += tx.amount

        if self.confirm:
            info["confirmed-round"] = self.round + 1
        self.pending[tx_id] = info
        self.sent.append(tx)
        return tx_id

    def account_info(self, address, **kwargs):
        if not encoding.is_valid_address(address):
            raise AlgodHTTPError("failed to parse the address", 400)
        return {
            "address": address,
            "amount": self.balance(address),
            "assets": [
                {"asset-id": asset_id, "amount": amount, "is-frozen": False}
                for asset_id, amount in self.holdings.get(address, {}).items()
            ],
        }

    # ---------- confirmation ----------

    def status(self, **kwargs):
        return {"last-round": self.round}

    def status_after_block(self, block_num, **kwargs):
        self.round = max(self.round, block_num)
        return {"last-round": self.round}

    def pending_transaction_info(self, transaction_id, **kwargs):
        return self.pending[transaction_id]


def make_account(algod=None, balance=0):
    """Generate an account, optionally crediting it on the fake ledger."""
    sk, addr = account.generate_account()
    if algod is not None:
        algod.balances[addr] = balance
    return {"address": addr, "sk": sk, "mnemonic": mnemonic.from_private_key(sk)}


@pytest.fixture
def algod():
    return FakeAlgod()


@pytest.fixture
def creator(algod):
    return make_account(algod, balance=10_000_000)


@pytest.fixture
def deployment_info(creator):
    return MappingProxyType({
        "network": "testnet",
        "accounts": MappingProxyType({
            "creator": MappingProxyType({
                "address": creator["address"],
                "mnemonic": creator["mnemonic"],
            }),
        }),
    })


@pytest.fixture
def app(algod, deployment_info):
    app = create_app(deployment_info=deployment_info, algod_client=algod)
    app.config["TESTING"] = True
    app.config["CREATOR_MNEMONIC"] = ""
    return app


@pytest.fixture
def client(app):
    return app.test_client()
