"""
Command package.

Submodules are imported explicitly by sra2otu.cli to avoid circular imports.
Do NOT import submodules here.
"""
__all__ = [
    "init",
    "doctor",
    "single_step",
    "run",
]
