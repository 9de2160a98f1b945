"""
UniVault Backend - Error Types

Every failure coming back from the algod node is re-raised as one of these,
carrying the node's message unchanged. Nothing here is retried.
"""


class UniVaultError(Exception):
    """Base class for all UniVault failures."""


class CompilationError(UniVaultError):
    """The node rejected a TEAL program (syntax, opcode, version)."""


class SubmissionError(UniVaultError):
    """The ledger rejected a transaction."""


class OptInRequiredError(SubmissionError):
    """The receiver has not opted into the asset being transferred."""

    def __init__(self, address, asset_id):
        super().__init__(f"{address} has not opted into asset {asset_id}")
        self.address = address
        self.asset_id = asset_id


class ConfirmationTimeoutError(UniVaultError):
    """A transaction was accepted but not confirmed within the wait bound."""


class ValidationError(UniVaultError):
    """Malformed caller input, e.g. a multisig threshold out of bounds."""


class LedgerQueryError(UniVaultError):
    """The node could not answer a read-only account query."""
