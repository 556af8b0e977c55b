# geometry/sphere.py
import math
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Intersection

# Roots closer than this to the ray origin are treated as the surface the
# ray starts on, which keeps shadow and bounce rays from hitting themselves.
MIN_DISTANCE = 1e-6

class Sphere:
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def intersect(self, ray: Ray) -> Intersection:
        oc = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        half_b = oc.dot(ray.direction)
        c = oc.dot(oc) - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if discriminant < 0 or a == 0:
            return Intersection.miss(ray)

        sqrt_disc = math.sqrt(discriminant)
        # Prefer the nearer root, fall back to the far one when the origin
        # is on or inside the surface.
        root = (-half_b - sqrt_disc) / a
        if root <= MIN_DISTANCE:
            root = (-half_b + sqrt_disc) / a
            if root <= MIN_DISTANCE:
                return Intersection.miss(ray)

        point = ray.at(root)
        normal = (point - self.center).normalize()
        return Intersection(True, root, point, normal, self.material, ray, self)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius}, material={self.material!r})"
