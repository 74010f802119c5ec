"""Core Layer — domain records, error taxonomy, validation and capability ports.

Invariants:
    - core/ never imports from infrastructure/, repositories/ or api/
    - No I/O happens here; stores and clients are reached through ports.py
"""
