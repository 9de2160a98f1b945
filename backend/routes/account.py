"""
Account Routes - Balances & Holdings
"""

import logging

from flask import Blueprint, current_app, jsonify

from services.vault_service import get_account_summary

logger = logging.getLogger(__name__)

account_bp = Blueprint("account", __name__, url_prefix="/api/account")


@account_bp.route("/<address>", methods=["GET"])
def account_info(address):
    """Balance and asset holdings for any address."""
    try:
        summary = get_account_summary(current_app.config["ALGOD_CLIENT"], address)
        return jsonify({"success": True, "account": summary})
    except Exception as e:
        logger.warning("Account lookup failed for %s: %s", address, e)
        return jsonify({"success": False, "error": str(e)}), 500
