"""
UniVault - Conditional Release Logic Signature

TEAL template for the vault that releases funds to its creator. The
program approves a transaction only when all four checks hold:

  - it is a payment
  - the amount reaches the funding goal
  - its FirstValid round is at most the deadline
  - the receiver is the creator

Inputs are substituted verbatim; a bad address or number shows up as a
compile error on the node, not here.
"""

TEAL_VERSION = 8

VAULT_TEAL_TEMPLATE = """#pragma version {version}
// UniVault - conditional fund release

// payment only
txn TypeEnum
int pay
==

// amount meets goal
txn Amount
int {goal_amount}
>=
&&

// before deadline
txn FirstValid
int {deadline}
<=
&&

// receiver is creator
txn Receiver
addr {creator}
==
&&
"""


def build_vault_teal(creator, goal_amount, deadline):
    """Return the vault program source for one creator/goal/deadline."""
    return VAULT_TEAL_TEMPLATE.format(
        version=TEAL_VERSION,
        goal_amount=goal_amount,
        deadline=deadline,
        creator=creator,
    )


if __name__ == "__main__":
    # Write a TEAL file for inspection:
    #   python vault_program.py <creator> <goal_microalgos> <deadline_unix>
    import os
    import sys

    if len(sys.argv) != 4:
        print("Usage: python vault_program.py <creator> <goal_microalgos> <deadline_unix>")
        sys.exit(1)

    output_dir = os.path.join(os.path.dirname(__file__), "build")
    os.makedirs(output_dir, exist_ok=True)

    teal = build_vault_teal(sys.argv[1], int(sys.argv[2]), int(sys.argv[3]))
    teal_path = os.path.join(output_dir, "univault_vault.teal")
    with open(teal_path, "w") as f:
        f.write(teal)
    print(f"Vault program written to {teal_path}")
