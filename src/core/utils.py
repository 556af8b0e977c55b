# core/utils.py
import math
from typing import Optional
from core.vector import Vector3

AIR_REFRACTIVE_INDEX = 1.0
AMBIENT_COEFFICIENT = 0.2

def reflect_vector(vector: Vector3, normal: Vector3) -> Vector3:
    """
    Mirrors vector about the normal: normal * 2 * (vector . normal) - vector.

    Both arguments point away from the surface, so the light direction is
    passed as-is for highlights and the negated ray direction is passed when
    spawning a reflection ray.
    """
    return normal * (2 * vector.dot(normal)) - vector

def reflectance(normal: Vector3, incident: Vector3, n1: float, n2: float) -> float:
    """
    Fraction of energy reflected at an interface going from index n1 to n2,
    averaged over the s- and p-polarized Fresnel terms. Returns exactly 1.0
    on total internal reflection.
    """
    n = n1 / n2
    cos_i = -normal.dot(incident)
    sin_t2 = n * n * (1.0 - cos_i * cos_i)

    if sin_t2 > 1.0:
        return 1.0

    cos_t = math.sqrt(1.0 - sin_t2)
    r_orth = (n1 * cos_i - n2 * cos_t) / (n1 * cos_i + n2 * cos_t)
    r_par = (n2 * cos_i - n1 * cos_t) / (n2 * cos_i + n1 * cos_t)
    return (r_orth * r_orth + r_par * r_par) / 2.0

def refract_vector(normal: Vector3, incident: Vector3, n1: float, n2: float) -> Optional[Vector3]:
    """
    Bends incident across an interface from index n1 to n2 (Snell's law).
    The normal must face the incoming ray. Returns None on total internal
    reflection.
    """
    n = n1 / n2
    cos_i = -normal.dot(incident)
    sin_t2 = n * n * (1.0 - cos_i * cos_i)

    if sin_t2 > 1.0:
        return None

    cos_t = math.sqrt(1.0 - sin_t2)
    return incident * n + normal * (n * cos_i - cos_t)

def random_in_unit_disk(rng) -> Vector3:
    """
    Returns a uniformly distributed point inside the unit disk (z = 0).
    rng is a numpy Generator so callers control the seed.
    """
    while True:
        p = Vector3(rng.uniform(-1.0, 1.0), rng.uniform(-1.0, 1.0), 0.0)
        if p.dot(p) < 1.0:
            return p
