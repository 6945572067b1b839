"""FrodoKEM building blocks: parameter sets, noise sampling, packing, matrix generation and arithmetic."""

__version__ = "0.1.0"
__all__ = ["arith", "generate", "noise", "packing", "params"]