"""
Ticket Routes - Event Ticket ASAs (Custodial)

Ticket creation is signed by the backend with the creator account, taken
from CREATOR_MNEMONIC or from the deployment info written by deploy.py.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from errors import ValidationError
from services.algorand_service import keys_from_mnemonic
from services.vault_service import create_ticket_asset, verify_ticket

logger = logging.getLogger(__name__)

ticket_bp = Blueprint("ticket", __name__, url_prefix="/api/ticket")


def _creator_mnemonic():
    if current_app.config.get("CREATOR_MNEMONIC"):
        return current_app.config["CREATOR_MNEMONIC"]
    deployment = current_app.config["DEPLOYMENT_INFO"]
    creator = deployment.get("accounts", {}).get("creator", {})
    return creator.get("mnemonic", "")


@ticket_bp.route("/create", methods=["POST"])
def create():
    """
    Create a ticket asset for an event.
    Body: { eventName, totalSupply }
    """
    data = request.get_json(silent=True) or {}
    try:
        event_name = data.get("eventName")
        if not event_name:
            raise ValidationError("eventName is required")

        phrase = _creator_mnemonic()
        if not phrase:
            raise RuntimeError(
                "No creator account configured. Set CREATOR_MNEMONIC or run deploy.py first."
            )
        creator_sk, _ = keys_from_mnemonic(phrase)

        ticket = create_ticket_asset(
            current_app.config["ALGOD_CLIENT"],
            creator_sk,
            event_name,
            data.get("totalSupply", 100),
        )
        return jsonify({"success": True, "ticket": ticket})
    except Exception as e:
        logger.warning("Ticket creation failed: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500


@ticket_bp.route("/verify/<address>/<asset_id>", methods=["GET"])
def verify(address, asset_id):
    try:
        verification = verify_ticket(current_app.config["ALGOD_CLIENT"], address, int(asset_id))
        return jsonify({
            "success": True,
            "verified": verification["hasTicket"],
            "ticketCount": verification["amount"],
        })
    except Exception as e:
        logger.warning("Ticket verification failed for %s: %s", address, e)
        return jsonify({"success": False, "error": str(e)}), 500
