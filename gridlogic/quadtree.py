# quadtree.py
"""
Quadtree for caching and aggregating z3 expressions over areas of points.

Expressions are registered per key as a function of a Point. Leaves build
and cache their point's expression on first use. Internal nodes cache the
conjunction over everything they cover, so "every point except these few"
is assembled from a handful of cached quadrant conjunctions rather than one
term per point.
"""

from z3 import And

from .errors import LatticeError


class ExpressionQuadTree:
    """
    :param points: the points covered by this node; must not be empty
    :param expr_funcs: dict of key to Point -> BoolRef, shared by the whole tree
    """

    def __init__(self, points, expr_funcs=None):
        points = list(points)
        if not points:
            raise LatticeError("A quadtree node must cover at least one point")
        self._expr_funcs = expr_funcs if expr_funcs is not None else {}
        self._exprs = {}
        self._point = points[0] if len(points) == 1 else None
        self._quads = []
        if self._point is not None:
            return

        self._y_min = min(p.y for p in points)
        self._y_max = max(p.y for p in points)
        self._x_min = min(p.x for p in points)
        self._x_max = max(p.x for p in points)
        self._y_mid = (self._y_min + self._y_max) / 2.0
        self._x_mid = (self._x_min + self._x_max) / 2.0

        buckets = [[], [], [], []]
        for p in points:
            buckets[self._quadrant(p)].append(p)
        self._children = [
            ExpressionQuadTree(b, self._expr_funcs) if b else None for b in buckets
        ]
        self._quads = [c for c in self._children if c is not None]

    def _quadrant(self, p):
        # 0: top left, 1: top right, 2: bottom left, 3: bottom right
        return (2 if p.y >= self._y_mid else 0) + (1 if p.x >= self._x_mid else 0)

    def covers_point(self, p):
        """Returns True if p lies within this node's bounds."""
        if self._point is not None:
            return self._point == p
        return self._y_min <= p.y <= self._y_max and self._x_min <= p.x <= self._x_max

    def add_expr(self, key, expr_func):
        """Registers an expression constructor, called lazily once per point."""
        self._expr_funcs[key] = expr_func

    def _leaf_expr(self, key):
        expr = self._exprs.get(key)
        if expr is None:
            expr = self._expr_funcs[key](self._point)
            self._exprs[key] = expr
        return expr

    def get_exprs(self, key):
        """Returns the expressions for every point covered by this node."""
        if self._point is not None:
            return [self._leaf_expr(key)]
        exprs = []
        for q in self._quads:
            exprs.extend(q.get_exprs(key))
        return exprs

    def get_point_expr(self, key, p):
        """Returns the expression for one point."""
        if self._point is not None:
            if self._point == p:
                return self._leaf_expr(key)
            raise LatticeError(f"{p} not in quadtree")
        child = self._children[self._quadrant(p)] if self.covers_point(p) else None
        if child is None:
            raise LatticeError(f"{p} not in quadtree")
        return child.get_point_expr(key, p)

    def get_other_points_expr(self, key, points):
        """
        Returns the conjunction of the expressions of every covered point not in points.

        Returns None when every covered point is excluded.
        """
        if self._point is not None:
            if self._point in points:
                return None
            return self._leaf_expr(key)

        covered = [p for p in points if self.covers_point(p)]
        if covered:
            terms = []
            for q in self._quads:
                term = q.get_other_points_expr(key, covered)
                if term is not None:
                    terms.append(term)
            if not terms:
                return None
            if len(terms) == 1:
                return terms[0]
            return And(terms)

        expr = self._exprs.get(key)
        if expr is None:
            expr = And(self.get_exprs(key))
            self._exprs[key] = expr
        return expr
