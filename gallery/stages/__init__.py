"""Pipeline stages: canonicalization, resolution preference, dedup, validity.

Each stage exposes a small, pure function API; the assembler chains them and
configuration only ever swaps the tables they consult.
"""
