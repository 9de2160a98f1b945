"""
UniVault Backend - Flask Application Entry Point
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config import CREATOR_MNEMONIC, NETWORK, PORT, load_deployment_info, thaw
from routes.account import account_bp
from routes.ticket import ticket_bp
from routes.vault import vault_bp
from services.algorand_service import get_algod_client

logger = logging.getLogger(__name__)


def create_app(deployment_info=None, algod_client=None):
    """
    Build the API. Deployment info is loaded once here and treated as
    read-only; pass it (and an algod client) explicitly to override.
    """
    app = Flask(__name__)
    app.config["DEPLOYMENT_INFO"] = (
        deployment_info if deployment_info is not None else load_deployment_info()
    )
    app.config["ALGOD_CLIENT"] = algod_client or get_algod_client()
    app.config["CREATOR_MNEMONIC"] = CREATOR_MNEMONIC
    app.config["NETWORK"] = NETWORK

    if not app.config["DEPLOYMENT_INFO"]:
        logger.warning("No deployment info found. Run contracts/deploy.py first.")

    CORS(app)

    # Register blueprints
    app.register_blueprint(vault_bp)
    app.register_blueprint(ticket_bp)
    app.register_blueprint(account_bp)

    @app.route("/api/info")
    def info():
        return jsonify({"success": True, "data": thaw(app.config["DEPLOYMENT_INFO"])})

    @app.route("/api/health")
    def health():
        return jsonify({
            "success": True,
            "message": "UniVault API is running",
            "network": f"Algorand {app.config['NETWORK'].capitalize()}",
        })

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app()
    logger.info("UniVault API running on http://localhost:%s (%s)", PORT, NETWORK)
    app.run(debug=True, port=PORT)
