# errors.py
"""Exceptions raised while building puzzle encodings."""


class GridLogicError(Exception):
    """Base class for all gridlogic errors."""


class SymbolSpecError(GridLogicError, ValueError):
    """A symbol specification is malformed or reuses an index."""


class ShapeSpecError(GridLogicError, ValueError):
    """A shape offset specification is malformed."""


class PayloadSortError(GridLogicError, TypeError):
    """A shape payload has no corresponding z3 sort."""


class LatticeError(GridLogicError, LookupError):
    """A point is missing from the lattice it was expected in."""


class EngineError(GridLogicError):
    """The z3 engine rejected an expression."""


class PuzzleError(GridLogicError, ValueError):
    """A puzzle definition cannot be encoded."""
