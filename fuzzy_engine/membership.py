"""
Trapezoidal membership functions.

A membership function is described by four ordered x-coordinates: it rises
from 0 at x0 to 1 at x1, holds 1 until x2 and falls back to 0 at x3. Setting
x1 == x2 gives a triangle. Besides its shape, each function carries an
`activation` level which the engine raises during an inference pass and which
the defuzzifier uses to clip the shape.
"""

from typing import Tuple

from fuzzy_engine.fuzzifier import trapezoid


class MembershipFunction:
    """
    A named trapezoid with a transient activation level.

    Attributes:
        name (str): Term name, unique within its linguistic variable.
        x0, x1, x2, x3 (float): Trapezoid corners, x0 <= x1 <= x2 <= x3.
        activation (float): Clipping height set by the last inference pass.
    """

    def __init__(
        self,
        name: str,
        x0: float,
        x1: float,
        x2: float,
        x3: float,
        activation: float = 0.0,
    ) -> None:
        x0, x1, x2, x3 = float(x0), float(x1), float(x2), float(x3)
        if not (x0 <= x1 <= x2 <= x3):
            raise ValueError(
                f"Invalid trapezoid params for '{name}': [{x0}, {x1}, {x2}, {x3}]"
            )
        self.name = name
        self.x0 = x0
        self.x1 = x1
        self.x2 = x2
        self.x3 = x3
        self.activation = float(activation)

    def __repr__(self) -> str:
        return (
            f"MembershipFunction({self.name!r}, {self.x0}, {self.x1}, "
            f"{self.x2}, {self.x3}, activation={self.activation})"
        )

    @property
    def points(self) -> Tuple[float, float, float, float]:
        return (self.x0, self.x1, self.x2, self.x3)

    def degree(self, x: float) -> float:
        """Degree of membership of the crisp value `x` in this term."""
        return trapezoid(x, self.points)

    def centroid(self) -> float:
        """
        Closed-form centroid of the unclipped trapezoid.

        With a = x2 - x1 (top width), b = x3 - x0 (base width) and
        c = x1 - x0 (rising edge width):

            centroid = (2ac + a^2 + cb + ab + b^2) / (3(a + b)) + x0

        A zero-width shape has its centroid at x0.
        """
        a = self.x2 - self.x1
        b = self.x3 - self.x0
        c = self.x1 - self.x0

        if a + b == 0:
            return self.x0
        return ((2 * a * c) + (a * a) + (c * b) + (a * b) + (b * b)) / (3 * (a + b)) + self.x0

    def area(self) -> float:
        """
        Area of the shape clipped at the current activation height.

            area = activation * (b + (b - offset * activation)) / 2

        where b = x3 - x0 and offset = centroid - x0. Zero when the term is
        not activated.
        """
        offset = self.centroid() - self.x0
        b = self.x3 - self.x0

        return (self.activation * (b + (b - (offset * self.activation)))) / 2
