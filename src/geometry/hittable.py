# geometry/hittable.py
import math
from typing import Optional, Protocol, runtime_checkable
from core.color import Color
from core.vector import Vector3
from core.ray import Ray

class Intersection:
    """
    Records details of a ray-object intersection.

    A miss keeps ``did_intersect`` False and an infinite distance so that
    nearest-hit comparisons across primitives need no special casing.
    """
    __slots__ = ("did_intersect", "distance", "point", "normal", "material", "ray", "obj", "color")

    def __init__(self, did_intersect: bool = False, distance: float = math.inf,
                 point: Optional[Vector3] = None, normal: Optional[Vector3] = None,
                 material=None, ray: Optional[Ray] = None, obj=None):
        self.did_intersect = did_intersect
        self.distance = distance
        self.point = point            # World-space intersection point
        self.normal = normal          # Unit surface normal at the point
        self.material = material
        self.ray = ray                # Ray that produced the hit
        self.obj = obj                # Primitive that was hit
        self.color = material.color_at(point) if did_intersect and material is not None else Color()

    @classmethod
    def miss(cls, ray: Optional[Ray] = None) -> "Intersection":
        return cls(False, math.inf, ray=ray)

    def __bool__(self) -> bool:
        return self.did_intersect

    def __repr__(self) -> str:
        if not self.did_intersect:
            return "Intersection(miss)"
        return f"Intersection(distance={self.distance}, point={self.point}, normal={self.normal})"

@runtime_checkable
class Primitive(Protocol):
    """
    Anything a ray can be intersected with. Shapes implement this interface
    directly; sphere is the only shape so far.
    """
    material: object

    def intersect(self, ray: Ray) -> Intersection:
        ...
