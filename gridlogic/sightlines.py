# sightlines.py
"""
Sightlines: straight lines through a symbol grid.

A sightline starts at a cell and advances one direction at a time. An
accumulator is folded over the cells it passes; a stop condition, checked at
each cell, ends the line before that cell is counted. A sightline always ends
at the first point outside the grid, so holes in a non-convex grid stop it
too; treat such holes as cells (e.g. black cells) to see through them.
"""

from z3 import BoolVal, If, IntVal


def _never_stop(*_):
    return BoolVal(False)


def _count_one(_):
    return IntVal(1)


def reduce_cells(symbol_grid, start, direction, initializer, accumulate, stop=_never_stop):
    """
    Returns an expression for the value accumulated along a sightline.

    The accumulated value is folded forward one cell at a time. At each cell
    the stop function is evaluated against the value that includes that
    cell; if it holds, the result is the value from before that cell. If
    the line reaches the edge without stopping, every cell is included.

    :param symbol_grid: the SymbolGrid to check against
    :param start: the Point of the first cell checked
    :param direction: the Direction to advance in
    :param initializer: the initial accumulator value
    :param accumulate: called with (accumulated value, cell symbol, Point);
        returns the new accumulated value
    :param stop: called with (accumulated value, cell symbol, Point); returns
        a BoolRef that is true where the line should stop
    """
    stop_terms = []
    acc_terms = [initializer]
    p = start
    while p in symbol_grid.grid:
        cell = symbol_grid.grid[p]
        acc_term = accumulate(acc_terms[-1], cell, p)
        acc_terms.append(acc_term)
        stop_terms.append(stop(acc_term, cell, p))
        p = p.translate(direction)

    # unwind from the far end: the first stop that holds wins
    expr = acc_terms.pop()
    for stop_term, acc_term in zip(reversed(stop_terms), reversed(acc_terms)):
        expr = If(stop_term, acc_term, expr)
    return expr


def count_cells(symbol_grid, start, direction, count=None, stop=None):
    """
    Returns an expression for the count of cells along a sightline.

    :param symbol_grid: the SymbolGrid to check against
    :param start: the Point of the first cell checked
    :param direction: the Direction to advance in
    :param count: called with a cell symbol; returns the amount to add for it.
        Defaults to one per cell.
    :param stop: called with a cell symbol; returns a BoolRef that is true
        when the line should stop before this cell. Defaults to never.
    """
    count = count or _count_one
    stop = stop or _never_stop
    return reduce_cells(
        symbol_grid,
        start,
        direction,
        IntVal(0),
        lambda a, c, p: a + count(c),
        lambda a, c, p: stop(c),
    )
