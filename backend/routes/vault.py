"""
Vault Routes - Conditional & Multi-Contributor Vaults

GET  /api/vault/<address>/balance  → vault balance in microAlgos and ALGO
POST /api/vault/create             → compile a conditional-release vault
POST /api/vault/multisig           → derive a multi-contributor vault address
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from services.vault_service import (
    MICROALGOS_PER_ALGO,
    create_vault,
    derive_multisig_address,
    get_vault_balance,
)

logger = logging.getLogger(__name__)

vault_bp = Blueprint("vault", __name__, url_prefix="/api/vault")


@vault_bp.route("/<address>/balance", methods=["GET"])
def balance(address):
    try:
        bal = get_vault_balance(current_app.config["ALGOD_CLIENT"], address)
        return jsonify({
            "success": True,
            "balance": bal,
            "balanceInAlgo": bal / MICROALGOS_PER_ALGO,
        })
    except Exception as e:
        logger.warning("Balance lookup failed for %s: %s", address, e)
        return jsonify({"success": False, "error": str(e)}), 500


@vault_bp.route("/create", methods=["POST"])
def create():
    """
    Compile a new conditional vault.
    Body: { creator, goalAmount, deadline }

    Values go into the program as given; bad ones surface as a compile error.
    """
    data = request.get_json(silent=True) or {}
    try:
        vault = create_vault(
            current_app.config["ALGOD_CLIENT"],
            data.get("creator"),
            data.get("goalAmount"),
            data.get("deadline"),
        )
        return jsonify({
            "success": True,
            "vault": {
                "address": vault["address"],
                "teal": vault["teal"],
                "program": {
                    "result": vault["program"]["result"],
                    "hash": vault["program"]["hash"],
                },
            },
        })
    except Exception as e:
        logger.warning("Vault creation failed: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500


@vault_bp.route("/multisig", methods=["POST"])
def multisig():
    """
    Derive a multi-contributor vault address.
    Body: { addresses: [...], threshold }
    """
    data = request.get_json(silent=True) or {}
    try:
        vault = derive_multisig_address(
            data.get("addresses") or [],
            data.get("threshold", 2),
        )
        return jsonify({"success": True, "vault": vault})
    except Exception as e:
        logger.warning("Multisig derivation failed: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500
