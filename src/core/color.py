# core/color.py

class Color:
    """
    An RGB triple of unclamped floats. Clamping to a displayable range only
    happens when the image is encoded (see renderer.tone_mapping).
    """
    __slots__ = ("r", "g", "b")

    def __init__(self, r: float = 0.0, g: float = 0.0, b: float = 0.0):
        self.r = r
        self.g = g
        self.b = b

    def __add__(self, other: "Color") -> "Color":
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return Color(self.r * other, self.g * other, self.b * other)
        # Component-wise combination, e.g. filtering light through a surface.
        return Color(self.r * other.r, self.g * other.g, self.b * other.b)

    def __rmul__(self, other: float) -> "Color":
        return self.__mul__(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.r == other.r and self.g == other.g and self.b == other.b

    def as_tuple(self) -> tuple:
        return (self.r, self.g, self.b)

    def __repr__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"
