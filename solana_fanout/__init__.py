"""
solana-fanout
Concurrent batch lamport transfers against a Solana JSON-RPC node.
"""

__version__ = "0.1.0"
