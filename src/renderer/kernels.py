# renderer/kernels.py
"""
Compiled CPU version of the tracer.

Mirrors renderer.tracer and renderer.sampler operation by operation on the
flattened arrays of renderer.scene_data, so that without dispersion both
produce the same image. Recursion is replaced by an explicit stack of
pending rays; pixel columns run in parallel through prange.
"""
import math
import numpy as np
from numba import njit, prange
from core.utils import AIR_REFRACTIVE_INDEX, AMBIENT_COEFFICIENT
from geometry.sphere import MIN_DISTANCE
from materials.material import MATERIAL_CHECKERBOARD, NOT_SHINY, NOT_REFLECTIVE, NOT_REFRACTIVE
from renderer.sampler import PIXEL_SIZE
from renderer.scene_data import PARAM_SCALE, PARAM_SHININESS, PARAM_REFLECTIVITY, PARAM_REFRACTIVE_INDEX

INFINITY = np.inf
RNG_MODULUS = 2147483648  # 2**31

# Stack row layout: origin (3), direction (3), weight, medium refractive index
STACK_WIDTH = 8

@njit
def dot(ax, ay, az, bx, by, bz):
    return ax * bx + ay * by + az * bz

@njit
def normalize(x, y, z):
    l = math.sqrt(dot(x, y, z, x, y, z))
    if l == 0.0:
        return 0.0, 0.0, 0.0
    return x / l, y / l, z / l

@njit
def reflect(vx, vy, vz, nx, ny, nz):
    d = 2 * dot(vx, vy, vz, nx, ny, nz)
    return nx * d - vx, ny * d - vy, nz * d - vz

@njit
def reflectance(nx, ny, nz, ix, iy, iz, n1, n2):
    n = n1 / n2
    cos_i = -dot(nx, ny, nz, ix, iy, iz)
    sin_t2 = n * n * (1.0 - cos_i * cos_i)

    if sin_t2 > 1.0:
        return 1.0

    cos_t = math.sqrt(1.0 - sin_t2)
    r_orth = (n1 * cos_i - n2 * cos_t) / (n1 * cos_i + n2 * cos_t)
    r_par = (n2 * cos_i - n1 * cos_t) / (n2 * cos_i + n1 * cos_t)
    return (r_orth * r_orth + r_par * r_par) / 2.0

@njit
def refract(nx, ny, nz, ix, iy, iz, n1, n2):
    """Returns (ok, x, y, z); ok is False on total internal reflection."""
    n = n1 / n2
    cos_i = -dot(nx, ny, nz, ix, iy, iz)
    sin_t2 = n * n * (1.0 - cos_i * cos_i)

    if sin_t2 > 1.0:
        return False, 0.0, 0.0, 0.0

    cos_t = math.sqrt(1.0 - sin_t2)
    k = n * cos_i - cos_t
    return True, ix * n + nx * k, iy * n + ny * k, iz * n + nz * k

@njit
def ray_sphere_intersect(ox, oy, oz, dx, dy, dz, center, radius):
    """Distance to the nearest hit beyond MIN_DISTANCE, or -1.0 on a miss."""
    ocx = ox - center[0]
    ocy = oy - center[1]
    ocz = oz - center[2]
    a = dot(dx, dy, dz, dx, dy, dz)
    half_b = dot(ocx, ocy, ocz, dx, dy, dz)
    c = dot(ocx, ocy, ocz, ocx, ocy, ocz) - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0.0 or a == 0.0:
        return -1.0

    sqrt_disc = math.sqrt(discriminant)
    root = (-half_b - sqrt_disc) / a
    if root <= MIN_DISTANCE:
        root = (-half_b + sqrt_disc) / a
        if root <= MIN_DISTANCE:
            return -1.0
    return root

@njit
def closest_intersection(ox, oy, oz, dx, dy, dz, sphere_centers, sphere_radii):
    """Returns (sphere index, distance); index is -1 when nothing is hit."""
    closest = -1
    closest_t = INFINITY
    for i in range(sphere_radii.shape[0]):
        t = ray_sphere_intersect(ox, oy, oz, dx, dy, dz, sphere_centers[i], sphere_radii[i])
        if t > 0.0 and t < closest_t:
            closest = i
            closest_t = t
    return closest, closest_t

@njit
def is_in_shadow(ox, oy, oz, dx, dy, dz, light_distance, sphere_centers, sphere_radii):
    for i in range(sphere_radii.shape[0]):
        t = ray_sphere_intersect(ox, oy, oz, dx, dy, dz, sphere_centers[i], sphere_radii[i])
        if t > 0.0 and t < light_distance:
            return True
    return False

@njit
def material_color(material, px, py, pz, material_types, material_colors, material_params):
    if material_types[material] == MATERIAL_CHECKERBOARD:
        scale = material_params[material, PARAM_SCALE]
        x = math.floor(px / scale)
        z = math.floor(pz / scale)
        if (x + z) % 2 != 0:
            return (material_colors[material, 3], material_colors[material, 4],
                    material_colors[material, 5])
    return material_colors[material, 0], material_colors[material, 1], material_colors[material, 2]

@njit
def local_lighting(px, py, pz, nx, ny, nz, ox, oy, oz, cr, cg, cb, shininess,
                   sphere_centers, sphere_radii, light_positions, light_intensities):
    """Ambient + diffuse + specular at a hit point, with hard shadows."""
    diffuse_r = 0.0
    diffuse_g = 0.0
    diffuse_b = 0.0
    specular_r = 0.0
    specular_g = 0.0
    specular_b = 0.0

    for l in range(light_intensities.shape[0]):
        intensity = light_intensities[l]
        lox = light_positions[l, 0] - px
        loy = light_positions[l, 1] - py
        loz = light_positions[l, 2] - pz
        light_distance = math.sqrt(dot(lox, loy, loz, lox, loy, loz))
        ldx, ldy, ldz = normalize(lox, loy, loz)
        dot_product = dot(nx, ny, nz, ldx, ldy, ldz)

        if dot_product < 0.0:
            continue
        if is_in_shadow(px, py, pz, ldx, ldy, ldz, light_distance, sphere_centers, sphere_radii):
            continue

        k = dot_product * intensity
        diffuse_r = diffuse_r + cr * k
        diffuse_g = diffuse_g + cg * k
        diffuse_b = diffuse_b + cb * k

        if shininess != NOT_SHINY:
            vx, vy, vz = normalize(ox - px, oy - py, oz - pz)
            rx, ry, rz = reflect(ldx, ldy, ldz, nx, ny, nz)
            view_dot = dot(vx, vy, vz, rx, ry, rz)
            if view_dot > 0:
                amount = math.pow(view_dot, shininess) * intensity
                specular_r = specular_r + amount
                specular_g = specular_g + amount
                specular_b = specular_b + amount

    return (cr * AMBIENT_COEFFICIENT + (diffuse_r + specular_r),
            cg * AMBIENT_COEFFICIENT + (diffuse_g + specular_g),
            cb * AMBIENT_COEFFICIENT + (diffuse_b + specular_b))

@njit
def push_ray(stack, stack_remaining, sp, ox, oy, oz, dx, dy, dz, weight, medium, remaining):
    stack[sp, 0] = ox
    stack[sp, 1] = oy
    stack[sp, 2] = oz
    stack[sp, 3] = dx
    stack[sp, 4] = dy
    stack[sp, 5] = dz
    stack[sp, 6] = weight
    stack[sp, 7] = medium
    stack_remaining[sp] = remaining
    return sp + 1

@njit
def trace_ray(ox, oy, oz, dx, dy, dz, reflections_remaining, stack, stack_remaining,
              sphere_centers, sphere_radii, sphere_materials,
              material_types, material_colors, material_params,
              light_positions, light_intensities):
    """
    Color along one primary ray. Returns (r, g, b, rays cast).

    Every popped entry is one cast ray; reflected and refracted children are
    pushed with their share of the parent's weight and one bounce less.
    """
    r = 0.0
    g = 0.0
    b = 0.0
    rays = 0
    sp = push_ray(stack, stack_remaining, 0, ox, oy, oz, dx, dy, dz,
                  1.0, AIR_REFRACTIVE_INDEX, reflections_remaining)

    while sp > 0:
        sp -= 1
        ox = stack[sp, 0]
        oy = stack[sp, 1]
        oz = stack[sp, 2]
        dx = stack[sp, 3]
        dy = stack[sp, 4]
        dz = stack[sp, 5]
        weight = stack[sp, 6]
        medium = stack[sp, 7]
        remaining = stack_remaining[sp]
        rays += 1

        hit, t = closest_intersection(ox, oy, oz, dx, dy, dz, sphere_centers, sphere_radii)
        if hit < 0:
            continue

        px = ox + dx * t
        py = oy + dy * t
        pz = oz + dz * t
        center = sphere_centers[hit]
        nx, ny, nz = normalize(px - center[0], py - center[1], pz - center[2])

        material = sphere_materials[hit]
        cr, cg, cb = material_color(material, px, py, pz,
                                    material_types, material_colors, material_params)
        lr, lg, lb = local_lighting(px, py, pz, nx, ny, nz, ox, oy, oz, cr, cg, cb,
                                    material_params[material, PARAM_SHININESS],
                                    sphere_centers, sphere_radii, light_positions, light_intensities)
        r += weight * lr
        g += weight * lg
        b += weight * lb

        reflectivity = material_params[material, PARAM_REFLECTIVITY]
        refractive_index = material_params[material, PARAM_REFRACTIVE_INDEX]
        if (reflectivity == NOT_REFLECTIVE and refractive_index == NOT_REFRACTIVE) or remaining <= 0:
            continue

        reflective_percentage = reflectivity
        refractive_percentage = 0.0
        if refractive_index != NOT_REFRACTIVE:
            reflective_percentage = reflectance(nx, ny, nz, dx, dy, dz, medium, refractive_index)
            refractive_percentage = 1.0 - reflective_percentage

        if reflective_percentage > 0:
            rx, ry, rz = reflect(-dx, -dy, -dz, nx, ny, nz)
            sp = push_ray(stack, stack_remaining, sp, px, py, pz, rx, ry, rz,
                          weight * reflective_percentage, medium, remaining - 1)

        if refractive_percentage > 0:
            ok, ix, iy, iz = refract(nx, ny, nz, dx, dy, dz, medium, refractive_index)
            if not ok:
                continue
            exit_t = ray_sphere_intersect(px, py, pz, ix, iy, iz, center, sphere_radii[hit])
            if exit_t <= 0.0:
                continue
            qx = px + ix * exit_t
            qy = py + iy * exit_t
            qz = pz + iz * exit_t
            enx, eny, enz = normalize(qx - center[0], qy - center[1], qz - center[2])
            ok, ex, ey, ez = refract(-enx, -eny, -enz, ix, iy, iz, refractive_index, medium)
            if not ok:
                continue
            sp = push_ray(stack, stack_remaining, sp, qx, qy, qz, ex, ey, ez,
                          weight * refractive_percentage, medium, remaining - 1)

    return r, g, b, rays

@njit
def lcg_next(state):
    state = (state * 1103515245 + 12345) % RNG_MODULUS
    return state, state / RNG_MODULUS

@njit
def random_in_unit_disk(state):
    while True:
        state, u = lcg_next(state)
        state, v = lcg_next(state)
        x = 2.0 * u - 1.0
        y = 2.0 * v - 1.0
        if x * x + y * y < 1.0:
            return state, x, y

@njit
def column_seed(seed, column):
    state = (seed * 1000003 + column * 7919 + 1) % RNG_MODULUS
    for _ in range(4):
        state, _u = lcg_next(state)
    return state

@njit(parallel=True)
def render_kernel(width, height, super_samples, depth_complexity, max_reflections,
                  dispersion, image_scale, seed,
                  camera_position, camera_look_at, camera_right, camera_up,
                  sphere_centers, sphere_radii, sphere_materials,
                  material_types, material_colors, material_params,
                  light_positions, light_intensities):
    """
    Renders a (width, height, 3) frame, y pointing up. Returns the frame and
    the number of rays cast per column.
    """
    frame = np.zeros((width, height, 3), dtype=np.float64)
    ray_counts = np.zeros(width, dtype=np.int64)
    stack_size = 2 * max(max_reflections, 0) + 4

    for column in prange(width):
        x = np.int64(column)
        stack = np.empty((stack_size, STACK_WIDTH), dtype=np.float64)
        stack_remaining = np.empty(stack_size, dtype=np.int64)
        state = column_seed(seed, x)
        rays = 0

        step = PIXEL_SIZE / super_samples
        sample_weight = 1.0 / (super_samples * super_samples)
        start_x = (x - width // 2) * PIXEL_SIZE - PIXEL_SIZE / 2.0 + step / 2.0

        for y in range(height):
            start_y = (y - height // 2) * PIXEL_SIZE - PIXEL_SIZE / 2.0 + step / 2.0
            pr = 0.0
            pg = 0.0
            pb = 0.0

            for i in range(super_samples):
                for j in range(super_samples):
                    sx = (start_x + i * step) * image_scale
                    sy = (start_y + j * step) * image_scale
                    tx = camera_look_at[0] + camera_right[0] * sx + camera_up[0] * sy
                    ty = camera_look_at[1] + camera_right[1] * sx + camera_up[1] * sy
                    tz = camera_look_at[2] + camera_right[2] * sx + camera_up[2] * sy

                    if depth_complexity == 1:
                        ox = camera_position[0]
                        oy = camera_position[1]
                        oz = camera_position[2]
                        dx, dy, dz = normalize(tx - ox, ty - oy, tz - oz)
                        cr, cg, cb, n = trace_ray(ox, oy, oz, dx, dy, dz, max_reflections,
                                                  stack, stack_remaining,
                                                  sphere_centers, sphere_radii, sphere_materials,
                                                  material_types, material_colors, material_params,
                                                  light_positions, light_intensities)
                        rays += n
                    else:
                        cr = 0.0
                        cg = 0.0
                        cb = 0.0
                        weight = 1.0 / depth_complexity
                        for _ in range(depth_complexity):
                            state, lx, ly = random_in_unit_disk(state)
                            lx = lx * dispersion
                            ly = ly * dispersion
                            ox = camera_position[0] + camera_right[0] * lx + camera_up[0] * ly
                            oy = camera_position[1] + camera_right[1] * lx + camera_up[1] * ly
                            oz = camera_position[2] + camera_right[2] * lx + camera_up[2] * ly
                            dx, dy, dz = normalize(tx - ox, ty - oy, tz - oz)
                            sr, sg, sb, n = trace_ray(ox, oy, oz, dx, dy, dz, max_reflections,
                                                      stack, stack_remaining,
                                                      sphere_centers, sphere_radii, sphere_materials,
                                                      material_types, material_colors, material_params,
                                                      light_positions, light_intensities)
                            rays += n
                            cr = cr + sr * weight
                            cg = cg + sg * weight
                            cb = cb + sb * weight

                    pr = pr + cr * sample_weight
                    pg = pg + cg * sample_weight
                    pb = pb + cb * sample_weight

            frame[x, y, 0] = pr
            frame[x, y, 1] = pg
            frame[x, y, 2] = pb

        ray_counts[x] = rays

    return frame, ray_counts

def render_scene_data(data, width, height, super_samples, depth_complexity, max_reflections,
                      dispersion, image_scale, seed=0):
    """Runs render_kernel on a SceneData. Returns (frame, total rays cast)."""
    frame, ray_counts = render_kernel(
        width, height, super_samples, depth_complexity, max_reflections,
        float(dispersion), float(image_scale), int(seed) % RNG_MODULUS,
        data.camera_position, data.camera_look_at, data.camera_right, data.camera_up,
        data.sphere_centers, data.sphere_radii, data.sphere_materials,
        data.material_types, data.material_colors, data.material_params,
        data.light_positions, data.light_intensities,
    )
    return frame, int(ray_counts.sum())
