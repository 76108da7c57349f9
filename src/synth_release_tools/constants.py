"""Configuration constants for synth-release-tools."""

# Manifest written inside each releases/<version>/ directory
RELEASE_FILE_NAME = "contracts.json"

# Pending calls waiting to be proposed as one multisig batch
MULTISIG_BATCH_FILE_NAME = "multisig.batch.tmp.json"

# Safe v1.3.0 canonical MultiSendCallOnly deployment (same address on every supported chain)
MULTISEND_CALL_ONLY_ADDRESS = "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D"

# multiSend(bytes)
MULTISEND_SELECTOR = "0x8d80ff0a"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Proposals are tagged with this origin in the Safe transaction service
PROPOSAL_ORIGIN = "synth-release-tools"

HTTP_TIMEOUT = 30

# Networks that can receive multisig proposals.
# tx_service_url follows the Safe hosted service naming scheme.
NETWORK_CONFIG = {
    "mainnet": {
        "chain_id": 1,
        "tx_service_url": "https://safe-transaction-mainnet.safe.global",
        "multisend_address": MULTISEND_CALL_ONLY_ADDRESS,
    },
    "optimism": {
        "chain_id": 10,
        "tx_service_url": "https://safe-transaction-optimism.safe.global",
        "multisend_address": MULTISEND_CALL_ONLY_ADDRESS,
    },
    "bsc": {
        "chain_id": 56,
        "tx_service_url": "https://safe-transaction-bsc.safe.global",
        "multisend_address": MULTISEND_CALL_ONLY_ADDRESS,
    },
    "base": {
        "chain_id": 8453,
        "tx_service_url": "https://safe-transaction-base.safe.global",
        "multisend_address": MULTISEND_CALL_ONLY_ADDRESS,
    },
    "avalanche": {
        "chain_id": 43114,
        "tx_service_url": "https://safe-transaction-avalanche.safe.global",
        "multisend_address": MULTISEND_CALL_ONLY_ADDRESS,
    },
}

# Dev networks never receive proposals
LOCAL_NETWORKS = ("hardhat", "localhost")
