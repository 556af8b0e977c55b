# renderer/tracer.py
"""
Whitted-style illumination: ambient + direct (diffuse, specular, hard
shadows) + recursive mirror reflection and refraction.
"""
import logging
import math
from core.color import Color
from core.ray import Ray
from core.utils import AMBIENT_COEFFICIENT, reflect_vector, reflectance, refract_vector
from geometry.hittable import Intersection
from materials.material import NOT_SHINY, NOT_REFLECTIVE, NOT_REFRACTIVE

logger = logging.getLogger(__name__)

class RayTracer:
    """
    Computes the color seen along a ray in a scene.

    Each instance keeps its own `rays_cast` counter; parallel renders use one
    tracer per worker and add the counters up afterwards.
    """
    def __init__(self, scene):
        self.scene = scene
        self.rays_cast = 0

    def cast_ray(self, ray: Ray) -> Color:
        self.rays_cast += 1
        intersection = self.scene.closest_intersection(ray)

        if intersection.did_intersect:
            return self.perform_lighting(intersection)
        return Color()

    def perform_lighting(self, intersection: Intersection) -> Color:
        color = intersection.color
        ambient_color = self.ambient_lighting(color)
        diffuse_and_specular_color = self.diffuse_and_specular_lighting(intersection, color)
        reflected_color = self.reflective_refractive_lighting(intersection)

        return ambient_color + diffuse_and_specular_color + reflected_color

    def ambient_lighting(self, color: Color) -> Color:
        return color * AMBIENT_COEFFICIENT

    def diffuse_and_specular_lighting(self, intersection: Intersection, color: Color) -> Color:
        diffuse_color = Color()
        specular_color = Color()

        for light in self.scene.lights:
            light_offset = light.position - intersection.point
            light_distance = light_offset.length()
            light_direction = light_offset.normalize()
            dot_product = intersection.normal.dot(light_direction)

            # Surface faces away from the light.
            if dot_product < 0.0:
                continue

            shadow_ray = Ray(intersection.point, light_direction, 1,
                             intersection.ray.refractive_index)
            if self.scene.is_in_shadow(shadow_ray, light_distance):
                continue

            diffuse_color = diffuse_color + color * (dot_product * light.intensity)
            specular_color = specular_color + self.specular_lighting(intersection, light_direction, light)

        return diffuse_color + specular_color

    def specular_lighting(self, intersection: Intersection, light_direction, light) -> Color:
        shininess = intersection.material.shininess

        if shininess == NOT_SHINY:
            return Color()

        view = (intersection.ray.origin - intersection.point).normalize()
        reflected = reflect_vector(light_direction, intersection.normal)

        dot = view.dot(reflected)
        if dot <= 0:
            return Color()

        specular_amount = math.pow(dot, shininess) * light.intensity
        return Color(specular_amount, specular_amount, specular_amount)

    def reflective_refractive_lighting(self, intersection: Intersection) -> Color:
        material = intersection.material
        reflectivity = material.reflectivity
        refractive_index = material.refractive_index
        reflections_remaining = intersection.ray.reflections_remaining

        if (reflectivity == NOT_REFLECTIVE and refractive_index == NOT_REFRACTIVE) or \
                reflections_remaining <= 0:
            return Color()

        reflective_percentage = reflectivity
        refractive_percentage = 0.0

        # A refractive index overrides the fixed reflectivity.
        if refractive_index != NOT_REFRACTIVE:
            reflective_percentage = reflectance(intersection.normal, intersection.ray.direction,
                                                intersection.ray.refractive_index, refractive_index)
            refractive_percentage = 1.0 - reflective_percentage

        if reflective_percentage <= 0 and refractive_percentage <= 0:
            return Color()

        color = Color()
        if reflective_percentage > 0:
            color = color + self.reflected_lighting(intersection) * reflective_percentage
        if refractive_percentage > 0:
            color = color + self.refracted_lighting(intersection) * refractive_percentage
        return color

    def reflected_lighting(self, intersection: Intersection) -> Color:
        ray = intersection.ray
        reflected = reflect_vector(-ray.direction, intersection.normal)
        reflected_ray = Ray(intersection.point, reflected, ray.reflections_remaining - 1,
                            ray.refractive_index)
        return self.cast_ray(reflected_ray)

    def refracted_lighting(self, intersection: Intersection) -> Color:
        """
        Follows light through the primitive: bend in at the hit point, find
        the far side of the same primitive, bend out and trace from there.
        The crossing counts as a single bounce.
        """
        ray = intersection.ray
        outside_index = ray.refractive_index
        inside_index = intersection.material.refractive_index

        inside_direction = refract_vector(intersection.normal, ray.direction,
                                          outside_index, inside_index)
        if inside_direction is None:
            return Color()

        inside_ray = Ray(intersection.point, inside_direction, ray.reflections_remaining,
                         inside_index)
        exit_intersection = intersection.obj.intersect(inside_ray)
        if not exit_intersection.did_intersect:
            return Color()

        exit_direction = refract_vector(-exit_intersection.normal, inside_direction,
                                        inside_index, outside_index)
        if exit_direction is None:
            logger.debug("Total internal reflection leaving %r, dropping refracted light",
                         intersection.obj)
            return Color()

        exit_ray = Ray(exit_intersection.point, exit_direction, ray.reflections_remaining - 1,
                       outside_index)
        return self.cast_ray(exit_ray)
