# geometry/world.py
from typing import List
from core.ray import Ray
from geometry.hittable import Intersection

class World:
    """
    The list of primitives in a scene. Every query tests every object; scenes
    are small enough that no acceleration structure is kept.
    """
    def __init__(self):
        self.objects: List = []

    def add(self, obj):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self):
        return iter(self.objects)

    def closest_intersection(self, ray: Ray) -> Intersection:
        closest = Intersection.miss(ray)
        for obj in self.objects:
            intersection = obj.intersect(ray)
            if intersection.did_intersect and intersection.distance < closest.distance:
                closest = intersection
        return closest

    def is_in_shadow(self, ray: Ray, light_distance: float) -> bool:
        """
        Same search as closest_intersection, but stops at the first object
        hit strictly closer than the light.
        """
        for obj in self.objects:
            intersection = obj.intersect(ray)
            if intersection.did_intersect and intersection.distance < light_distance:
                return True
        return False
