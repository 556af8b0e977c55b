# core/ray.py
from core.vector import Vector3

class Ray:
    """
    Represents a ray in 3D space with an origin and a unit direction.

    Besides the geometry a ray carries how many reflective/refractive bounces
    its lineage may still spawn, and the refractive index of the medium it
    is currently travelling through.
    """
    __slots__ = ("origin", "direction", "reflections_remaining", "refractive_index")

    def __init__(self, origin: Vector3, direction: Vector3,
                 reflections_remaining: int = 0, refractive_index: float = 1.0):
        self.origin = origin
        self.direction = direction
        self.reflections_remaining = reflections_remaining
        self.refractive_index = refractive_index

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return (f"Ray(origin={self.origin}, direction={self.direction}, "
                f"reflections_remaining={self.reflections_remaining}, "
                f"refractive_index={self.refractive_index})")
