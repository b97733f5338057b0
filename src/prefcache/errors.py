"""Exceptions raised for misuse of the preferences API.

Store failures are never raised: reads degrade to defaults and writes
report False. The classes below cover contract violations only, the kind
of mistake that should surface while declaring settings or opening scopes.

Exception Hierarchy
-------------------
PreferencesError (base)
├── TransactionActiveError (a scope is already open)
└── SymbolTableError (inconsistent choice/enum tables)
"""


class PreferencesError(Exception):
    """Base exception for all preferences errors."""

    pass


class TransactionActiveError(PreferencesError, RuntimeError):
    """Raised when a scope is opened while another one is still active.

    Nesting of scopes is not supported.
    """

    pass


class SymbolTableError(PreferencesError, ValueError):
    """Raised when a choice or enum table is declared inconsistently.

    This happens when:
    - the default row index does not address a row of the table
    - column-wise construction gets columns of different lengths
    - the integer codes of an enum do not pair up with its symbols
    """

    pass


__all__ = [
    "PreferencesError",
    "TransactionActiveError",
    "SymbolTableError",
]
