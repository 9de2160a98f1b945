"""
Deploy Script for UniVault

Steps:
  1. Generate creator + two contributor accounts
  2. Wait for them to be funded from the testnet faucet
  3. Compile the conditional-release vault (goal + deadline)
  4. Derive the 2-of-3 multi-contributor vault address
  5. Create the event ticket ASA
  6. Contributors fund the conditional vault
  7. Contributor 1 opts into the ticket and receives one
  8. Save everything to deployment-info.json for the API
"""

import argparse
import json
import os
import sys
import time
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))
from config import DEPLOYMENT_INFO_PATH, NETWORK
from errors import UniVaultError
from services.algorand_service import create_wallet, get_algod_client
from services.vault_service import (
    MICROALGOS_PER_ALGO,
    create_ticket_asset,
    create_vault,
    derive_multisig_address,
    fund_vault,
    opt_in_ticket,
    transfer_ticket,
)

# ---------- Configuration ----------
GOAL_AMOUNT = 1_000_000              # 1 ALGO in microAlgos
DEADLINE_SECONDS = 7 * 24 * 60 * 60  # 7 days from now
MULTISIG_THRESHOLD = 2
EVENT_NAME = "Campus Fest 2025"
TICKET_SUPPLY = 100

ACCOUNT_NAMES = ("creator", "contributor1", "contributor2")


def create_test_accounts():
    """Generate fresh accounts. Returns {name: {address, sk, mnemonic}}."""
    accounts = {}
    for name in ACCOUNT_NAMES:
        addr, sk, mn = create_wallet()
        accounts[name] = {"address": addr, "sk": sk, "mnemonic": mn}
    return accounts


def print_accounts(accounts):
    print("=" * 60)
    print("Account details:")
    for name, acct in accounts.items():
        print(f"  {name}")
        print(f"    Address:  {acct['address']}")
        print(f"    Mnemonic: {acct['mnemonic']}")
    print()
    print("Fund these accounts on Algorand Testnet Faucet:")
    print("  https://bank.testnet.algorand.network/")
    print("=" * 60)


def deploy(client, accounts, contribution=100_000, now=None):
    """
    Run every deployment step against `client` and return the
    deployment info document. The accounts are always recorded; a ledger
    failure is reported and leaves the remaining steps out of the document.
    """
    now = int(now if now is not None else time.time())
    creator = accounts["creator"]
    contributors = [accounts["contributor1"], accounts["contributor2"]]

    info = {
        "timestamp": datetime.fromtimestamp(now, timezone.utc).isoformat(),
        "network": NETWORK,
        "accounts": {
            name: {"address": acct["address"], "mnemonic": acct["mnemonic"]}
            for name, acct in accounts.items()
        },
        "vaults": {},
    }

    try:
        deadline = now + DEADLINE_SECONDS
        vault = create_vault(client, creator["address"], GOAL_AMOUNT, deadline)
        print(f"Vault created! Address: {vault['address']}")
        print(f"  Goal:     {GOAL_AMOUNT / MICROALGOS_PER_ALGO} ALGO")
        print(f"  Deadline: {datetime.fromtimestamp(deadline, timezone.utc).isoformat()}")
        info["vaults"]["conditional"] = {
            "address": vault["address"],
            "goalAmount": GOAL_AMOUNT,
            "deadline": deadline,
        }

        participants = [creator["address"]] + [c["address"] for c in contributors]
        multi_vault = derive_multisig_address(participants, MULTISIG_THRESHOLD)
        print(f"Multi-sig vault address: {multi_vault['address']}")
        print(f"  Threshold: {MULTISIG_THRESHOLD} of {len(participants)} signatures required")
        info["vaults"]["multiSig"] = {
            "address": multi_vault["address"],
            "threshold": MULTISIG_THRESHOLD,
            "participants": len(participants),
        }

        ticket = create_ticket_asset(client, creator["sk"], EVENT_NAME, TICKET_SUPPLY)
        print(f"NFT ticket created! Asset ID: {ticket['assetId']} (txn {ticket['txId']})")
        print(f"  https://testnet.explorer.perawallet.app/asset/{ticket['assetId']}/")
        info["nftTicket"] = {
            "assetId": ticket["assetId"],
            "eventName": EVENT_NAME,
            "totalSupply": TICKET_SUPPLY,
        }

        if contribution > 0:
            info["contributions"] = []
            for contributor in contributors:
                tx_id = fund_vault(client, vault["address"], contributor["sk"], contribution)
                print(f"{contributor['address']} contributed {contribution} microAlgos")
                info["contributions"].append({
                    "from": contributor["address"],
                    "amount": contribution,
                    "txId": tx_id,
                })

        attendee = contributors[0]
        opt_in_tx = opt_in_ticket(client, attendee["sk"], ticket["assetId"])
        transfer_tx = transfer_ticket(client, ticket["assetId"], creator["sk"], attendee["address"])
        print(f"Transferred 1 ticket to {attendee['address']}")
        info["ticketTransfer"] = {
            "to": attendee["address"],
            "amount": 1,
            "optInTxId": opt_in_tx,
            "txId": transfer_tx,
        }
    except UniVaultError as e:
        print(f"Error during deployment: {e}")
        print("Make sure the creator and contributor accounts are funded!")

    return info


def save_deployment_info(info, path):
    with open(path, "w") as f:
        json.dump(info, f, indent=2)
    print(f"Deployment info saved to {path}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Deploy UniVault demo contracts to Algorand.")
    parser.add_argument("--wait", type=int, default=30,
                        help="Seconds to wait for faucet funding")
    parser.add_argument("--contribution", type=int, default=100_000,
                        help="microAlgos each contributor sends to the vault (0 skips)")
    parser.add_argument("--output", default=DEPLOYMENT_INFO_PATH)
    args = parser.parse_args(argv)

    print(f"Deploying UniVault to Algorand {NETWORK}...")
    accounts = create_test_accounts()
    print_accounts(accounts)

    if args.wait > 0:
        print(f"Waiting {args.wait} seconds for you to fund the accounts...")
        time.sleep(args.wait)

    client = get_algod_client()
    info = deploy(client, accounts, contribution=args.contribution)
    save_deployment_info(info, args.output)

    print("Deployment complete!")
    print("Next: save the mnemonics above, then run `python backend/app.py`")


if __name__ == "__main__":
    main()
