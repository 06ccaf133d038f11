# symbols.py
"""
Symbols that may be filled into grid cells.

A SymbolSet maps integer indices to symbols; the indices are the values the
per-cell z3 constants of a SymbolGrid range over. Symbol indices are exposed
as attributes, so a set built with ``["EMPTY", "WALL"]`` answers
``sym.EMPTY == 0`` and ``sym.WALL == 1``.
"""

from .errors import SymbolSpecError


class Symbol:
    """
    A marking that may be filled into a grid cell.

    :param index: the index value assigned to the symbol
    :param name: a code-safe name
    :param label: a printable label
    """

    def __init__(self, index, name=None, label=None):
        self._index = index
        self._name = name
        self._label = label

    @property
    def index(self):
        return self._index

    @property
    def name(self):
        if self._name is not None:
            return self._name
        if self._label is not None:
            return self._label
        return str(self._index)

    @property
    def label(self):
        if self._label is not None:
            return self._label
        if self._name is not None:
            return self._name
        return str(self._index)

    def __repr__(self):
        return self.label


class SymbolSet:
    """
    A set of markings that may be filled into a SymbolGrid.

    :param symbols: a list of specs; each is a name, a (name, label) tuple, or
        a (name, label, index) tuple. Specs without an index take the next
        index after the largest one used so far.
    """

    def __init__(self, symbols):
        self._index_to_symbol = {}
        self.indices = {}
        for spec in symbols:
            if isinstance(spec, str):
                self._add(Symbol(self._next_unused_index(), spec))
            elif isinstance(spec, (tuple, list)) and len(spec) == 2:
                name, label = spec
                self._add(Symbol(self._next_unused_index(), name, label))
            elif isinstance(spec, (tuple, list)) and len(spec) == 3:
                name, label, index = spec
                if not isinstance(index, int) or isinstance(index, bool):
                    raise SymbolSpecError(f"Invalid symbol index in {spec!r}")
                if index in self._index_to_symbol:
                    raise SymbolSpecError(
                        f"Index of {spec!r} already used by {self._index_to_symbol[index]!r}"
                    )
                self._add(Symbol(index, name, label))
            else:
                raise SymbolSpecError(f"Invalid symbol spec: {spec!r}")

    def _next_unused_index(self):
        if not self._index_to_symbol:
            return 0
        return max(self._index_to_symbol) + 1

    def _add(self, symbol):
        if symbol.name in self.indices:
            raise SymbolSpecError(
                f"Name {symbol.name!r} already used by index {self.indices[symbol.name]}"
            )
        self._index_to_symbol[symbol.index] = symbol
        self.indices[symbol.name] = symbol.index

    def __getattr__(self, name):
        # only reached when normal lookup fails
        indices = self.__dict__.get("indices")
        if indices is not None and name in indices:
            return indices[name]
        raise AttributeError(name)

    def append(self, name=None, label=None):
        """Appends a symbol at the next unused index and returns that index."""
        index = self._next_unused_index()
        self._add(Symbol(index, name, label))
        return index

    def min_index(self):
        return min(self._index_to_symbol)

    def max_index(self):
        return max(self._index_to_symbol)

    @property
    def symbols(self):
        """The dict of index to Symbol."""
        return self._index_to_symbol

    def __repr__(self):
        return f"SymbolSet({', '.join(repr(s) for s in self._index_to_symbol.values())})"


def make_letter_range_symbol_set(min_letter, max_letter):
    """Returns a SymbolSet of the consecutive letters from min_letter to max_letter."""
    return SymbolSet([chr(i) for i in range(ord(min_letter), ord(max_letter) + 1)])


def make_number_range_symbol_set(min_number, max_number, prefix="S"):
    """
    Returns a SymbolSet of consecutive numbers, each symbol's index being its number.

    Names are prefixed (``S1``, ``S2``, ...) so they stay valid attribute names.
    """
    return SymbolSet(
        [(f"{prefix}{i}", str(i), i) for i in range(min_number, max_number + 1)]
    )
