"""Find pump.fun token launches in Solana transaction logs and record them as JSON."""

__version__ = "0.1.0"

__all__ = ["__version__"]