import pytest

from core.color import Color
from core.ray import Ray
from core.vector import Vector3
from geometry.sphere import Sphere
from materials.flat_color import FlatColor
from renderer.tracer import RayTracer
from scene.scene import Scene

WHITE = Color(1.0, 1.0, 1.0)


def head_on_ray(reflections=10):
    return Ray(Vector3(0.0, 0.0, 100.0), Vector3(0.0, 0.0, -1.0), reflections)


def test_miss_is_black():
    tracer = RayTracer(Scene())
    assert tracer.cast_ray(head_on_ray()) == Color()
    assert tracer.rays_cast == 1


def test_white_sphere_lit_head_on(white_sphere_scene):
    color = RayTracer(white_sphere_scene).cast_ray(head_on_ray())
    assert color.as_tuple() == pytest.approx((1.2, 1.2, 1.2))


def test_light_behind_surface_leaves_ambient(white_sphere_scene):
    white_sphere_scene.lights[0].position = Vector3(0.0, 0.0, -10.0)
    color = RayTracer(white_sphere_scene).cast_ray(head_on_ray())
    assert color.as_tuple() == pytest.approx((0.2, 0.2, 0.2))


def test_blocked_light_leaves_ambient(white_sphere_scene, white):
    ray = Ray(Vector3(0.0, -0.6, 100.0), Vector3(0.0, 0.0, -1.0), 10)
    unblocked = RayTracer(white_sphere_scene).cast_ray(ray)
    assert unblocked.r > 0.2

    # Small sphere between the hit point and the light, clear of the view ray
    white_sphere_scene.add_object(Sphere(Vector3(0.0, 0.0, 5.0), 0.4, white))
    blocked = RayTracer(white_sphere_scene).cast_ray(ray)
    assert blocked.as_tuple() == pytest.approx((0.2, 0.2, 0.2))


def test_diffuse_grows_with_light_intensity(white_sphere_scene):
    light = white_sphere_scene.lights[0]
    light.position = Vector3(5.0, 5.0, 10.0)
    results = []
    for intensity in (0.0, 0.25, 0.5, 1.0):
        light.intensity = intensity
        results.append(RayTracer(white_sphere_scene).cast_ray(head_on_ray()).r)
    assert results == sorted(results)
    assert results[0] == pytest.approx(0.2)


def test_specular_highlight(white_sphere_scene):
    white_sphere_scene.objects[0].material = FlatColor(WHITE, shininess=10.0)
    color = RayTracer(white_sphere_scene).cast_ray(head_on_ray())
    assert color.as_tuple() == pytest.approx((2.2, 2.2, 2.2))


@pytest.mark.parametrize("reflectivity", [-1.0, 0.0])
def test_non_reflective_material_spawns_no_rays(white_sphere_scene, reflectivity):
    white_sphere_scene.objects[0].material = FlatColor(WHITE, reflectivity=reflectivity)
    tracer = RayTracer(white_sphere_scene)
    tracer.cast_ray(head_on_ray())
    assert tracer.rays_cast == 1


def mirror_corridor():
    """Two mirrors facing each other along z; a ray between them bounces forever."""
    scene = Scene()
    mirror = FlatColor(Color(0.1, 0.1, 0.1), reflectivity=0.5)
    scene.add_object(Sphere(Vector3(0.0, 0.0, -10.0), 5.0, mirror))
    scene.add_object(Sphere(Vector3(0.0, 0.0, 10.0), 5.0, mirror))
    return scene


@pytest.mark.parametrize("bounces", [0, 1, 3, 7])
def test_each_reflection_consumes_one_bounce(bounces):
    tracer = RayTracer(mirror_corridor())
    tracer.cast_ray(Ray(Vector3(), Vector3(0.0, 0.0, -1.0), bounces))
    assert tracer.rays_cast == bounces + 1


def test_mirror_contribution_is_scaled_by_reflectivity():
    tracer = RayTracer(mirror_corridor())
    color = tracer.cast_ray(Ray(Vector3(), Vector3(0.0, 0.0, -1.0), 1))
    # ambient of the first mirror + half of the ambient seen in the second
    assert color.r == pytest.approx(0.02 + 0.5 * 0.02)


def glass_scene():
    scene = Scene()
    glass = FlatColor(Color(), refractive_index=1.5)
    scene.add_object(Sphere(Vector3(0.0, 0.0, 0.0), 1.0, glass))
    scene.add_object(Sphere(Vector3(0.0, 0.0, -10.0), 2.0, FlatColor(WHITE)))
    return scene


def test_refraction_passes_light_through_glass():
    tracer = RayTracer(glass_scene())
    color = tracer.cast_ray(Ray(Vector3(0.0, 0.0, 10.0), Vector3(0.0, 0.0, -1.0), 1))
    # Fresnel at normal incidence reflects 4%, the rest reaches the white sphere
    assert color.as_tuple() == pytest.approx((0.96 * 0.2,) * 3)
    # primary, reflected (misses) and the ray leaving the glass
    assert tracer.rays_cast == 3


def test_refraction_needs_a_bounce():
    tracer = RayTracer(glass_scene())
    color = tracer.cast_ray(Ray(Vector3(0.0, 0.0, 10.0), Vector3(0.0, 0.0, -1.0), 0))
    assert color == Color()
    assert tracer.rays_cast == 1
