"""
Chain - on-chain interaction layer for chainctl.

Provides the JSON-RPC client, wallet, ABI helpers and contract binding
used by the commands.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
