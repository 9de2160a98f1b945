"""
UniVault Backend - Configuration
"""

import json
import os
from types import MappingProxyType

from dotenv import load_dotenv

load_dotenv()

# Algorand
ALGOD_ADDRESS = os.getenv("ALGOD_ADDRESS", "https://testnet-api.algonode.cloud")
ALGOD_TOKEN = os.getenv("ALGOD_TOKEN", "")
NETWORK = os.getenv("NETWORK", "testnet")

# Custodial signer for ticket creation. Falls back to the creator account
# recorded by contracts/deploy.py when unset.
CREATOR_MNEMONIC = os.getenv("CREATOR_MNEMONIC", "")

# Flask
PORT = int(os.getenv("PORT", "3000"))

# Written by contracts/deploy.py
DEPLOYMENT_INFO_PATH = os.getenv("DEPLOYMENT_INFO_PATH", "deployment-info.json")


def _freeze(value):
    if isinstance(value, dict):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def thaw(value):
    """Turn a frozen deployment info back into plain JSON-serializable types."""
    if isinstance(value, MappingProxyType):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def load_deployment_info(path=None):
    """
    Read deployment-info.json once and return it as a read-only mapping.
    Returns an empty mapping when the file does not exist yet.
    """
    path = path or DEPLOYMENT_INFO_PATH
    if not os.path.exists(path):
        return MappingProxyType({})
    with open(path) as f:
        return _freeze(json.load(f))
