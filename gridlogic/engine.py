# engine.py
"""
The small slice of z3 that the constrainers rely on.

Constrainers accept any object with ``add``, ``check`` and ``model``, so a
``z3.Solver`` and a ``z3.Optimize`` are interchangeable everywhere.
"""

import logging

from z3 import PbEq, Solver, Z3Exception, sat

from .errors import EngineError

logger = logging.getLogger(__name__)


def new_solver(solver=None):
    """Returns ``solver`` if given, otherwise a fresh ``z3.Solver``."""
    if solver is not None:
        return solver
    return Solver()


def add_constraint(solver, *exprs):
    """
    Asserts expressions, re-raising engine failures as ``EngineError``.

    :param solver: a Solver or Optimize
    :param exprs: boolean z3 expressions
    """
    try:
        solver.add(*exprs)
    except Z3Exception as e:
        raise EngineError(str(e)) from e


def pb_eq(terms, k):
    """
    Pseudo-boolean equality: the weighted sum of true terms equals ``k``.

    :param terms: list of (BoolRef, weight) pairs
    :param k: the target sum
    """
    try:
        return PbEq(list(terms), k)
    except Z3Exception as e:
        raise EngineError(str(e)) from e


def is_sat(solver):
    result = solver.check()
    logger.debug("check() -> %s", result)
    return result == sat


def eval_int(model, expr):
    """Evaluates an integer expression in a model, completing unassigned constants."""
    return model.eval(expr, model_completion=True).as_long()
