"""
Commands - implementations of the chainctl subcommands.

Each module corresponds to a top-level CLI command:
- balance: Show the configured wallet's ETH balance
- send:    Transfer ETH to an address
- deploy:  Deploy a Solidity contract through `forge create`
- call:    Call a function on a deployed contract
"""
