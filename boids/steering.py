"""Per-agent steering and integration - Numba JIT kernels over the flock's arrays."""

import math
import numpy as np
from numba import njit


# ============================================================================
# SCALAR VECTOR HELPERS
# ============================================================================

@njit(cache=True)
def clamp_length(x: float, y: float, z: float, max_length: float):
    """Scale (x, y, z) down so its magnitude is at most max_length."""
    mag = math.sqrt(x * x + y * y + z * z)
    if mag > max_length and mag > 0.0:
        scale = max_length / mag
        return x * scale, y * scale, z * scale
    return x, y, z


@njit(cache=True)
def steer_towards(tx: float, ty: float, tz: float,
                  vx: float, vy: float, vz: float,
                  max_speed: float, max_force: float):
    """
    Reynolds steering: desired = target rescaled to max_speed, steer = desired - velocity.

    A zero-length target has no direction and contributes no force.
    """
    mag = math.sqrt(tx * tx + ty * ty + tz * tz)
    if mag == 0.0:
        return 0.0, 0.0, 0.0
    scale = max_speed / mag
    return clamp_length(tx * scale - vx, ty * scale - vy, tz * scale - vz, max_force)


# ============================================================================
# NEIGHBOURS AND BEHAVIOURS
# ============================================================================

@njit(cache=True)
def gather_neighbors(i: int, kinds: np.ndarray, active: np.ndarray,
                     count: int, out: np.ndarray) -> int:
    """Write the indices of active same-kind agents (excluding i) into out; return how many."""
    n = 0
    kind = kinds[i]
    for j in range(count):
        if j != i and active[j] and kinds[j] == kind:
            out[n] = j
            n += 1
    return n


@njit(cache=True)
def separation(i: int, positions: np.ndarray, velocities: np.ndarray,
               neighbors: np.ndarray, n: int, separation_distance: float,
               max_speed: float, max_force: float):
    """Steer away from close neighbours, weighted by inverse squared distance."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    sx, sy, sz = 0.0, 0.0, 0.0
    total = 0

    for k in range(n):
        j = neighbors[k]
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        if d > 0.0 and d < separation_distance:
            inv_sq = 1.0 / (d * d)
            sx += dx * inv_sq
            sy += dy * inv_sq
            sz += dz * inv_sq
            total += 1

    if total == 0:
        return 0.0, 0.0, 0.0
    return steer_towards(
        sx / total, sy / total, sz / total,
        velocities[i, 0], velocities[i, 1], velocities[i, 2],
        max_speed, max_force
    )


@njit(cache=True)
def alignment(i: int, positions: np.ndarray, velocities: np.ndarray,
              neighbors: np.ndarray, n: int, perception_radius: float,
              max_speed: float, max_force: float):
    """Steer towards the average velocity of perceived neighbours."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    ax, ay, az = 0.0, 0.0, 0.0
    total = 0

    for k in range(n):
        j = neighbors[k]
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        if d > 0.0 and d < perception_radius:
            ax += velocities[j, 0]
            ay += velocities[j, 1]
            az += velocities[j, 2]
            total += 1

    if total == 0:
        return 0.0, 0.0, 0.0
    return steer_towards(
        ax / total, ay / total, az / total,
        velocities[i, 0], velocities[i, 1], velocities[i, 2],
        max_speed, max_force
    )


@njit(cache=True)
def cohesion(i: int, positions: np.ndarray, velocities: np.ndarray,
             neighbors: np.ndarray, n: int, perception_radius: float,
             max_speed: float, max_force: float):
    """Steer towards the centre of perceived neighbours."""
    px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
    cx, cy, cz = 0.0, 0.0, 0.0
    total = 0

    for k in range(n):
        j = neighbors[k]
        dx = px - positions[j, 0]
        dy = py - positions[j, 1]
        dz = pz - positions[j, 2]
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        if d > 0.0 and d < perception_radius:
            cx += positions[j, 0]
            cy += positions[j, 1]
            cz += positions[j, 2]
            total += 1

    if total == 0:
        return 0.0, 0.0, 0.0
    return steer_towards(
        cx / total - px, cy / total - py, cz / total - pz,
        velocities[i, 0], velocities[i, 1], velocities[i, 2],
        max_speed, max_force
    )


@njit(cache=True)
def compute_steering(i: int, positions: np.ndarray, velocities: np.ndarray,
                     neighbors: np.ndarray, n: int, separation_distance: float,
                     perception_radius: float, max_speed: float, max_force: float,
                     out: np.ndarray):
    """Fill out[0..2] with the separation, alignment and cohesion forces for agent i."""
    fx, fy, fz = separation(i, positions, velocities, neighbors, n,
                            separation_distance, max_speed, max_force)
    out[0, 0] = fx
    out[0, 1] = fy
    out[0, 2] = fz

    fx, fy, fz = alignment(i, positions, velocities, neighbors, n,
                           perception_radius, max_speed, max_force)
    out[1, 0] = fx
    out[1, 1] = fy
    out[1, 2] = fz

    fx, fy, fz = cohesion(i, positions, velocities, neighbors, n,
                          perception_radius, max_speed, max_force)
    out[2, 0] = fx
    out[2, 1] = fy
    out[2, 2] = fz


@njit(cache=True)
def boundary_turn(i: int, positions: np.ndarray, velocities: np.ndarray,
                  half_extent: float, margin: float, turn_factor: float):
    """Nudge velocity away from any face closer than margin, one check per face."""
    lo = -half_extent + margin
    hi = half_extent - margin
    for axis in range(3):
        p = positions[i, axis]
        if p < lo:
            velocities[i, axis] += turn_factor
        if p > hi:
            velocities[i, axis] -= turn_factor


# ============================================================================
# INTEGRATION AND CORRECTION
# ============================================================================

@njit(cache=True)
def integrate(i: int, positions: np.ndarray, velocities: np.ndarray,
              accelerations: np.ndarray, max_speed: float, scale: float):
    vx = velocities[i, 0] + accelerations[i, 0] * scale
    vy = velocities[i, 1] + accelerations[i, 1] * scale
    vz = velocities[i, 2] + accelerations[i, 2] * scale
    vx, vy, vz = clamp_length(vx, vy, vz, max_speed)

    velocities[i, 0] = vx
    velocities[i, 1] = vy
    velocities[i, 2] = vz

    positions[i, 0] += vx * scale
    positions[i, 1] += vy * scale
    positions[i, 2] += vz * scale

    accelerations[i, 0] = 0.0
    accelerations[i, 1] = 0.0
    accelerations[i, 2] = 0.0


@njit(cache=True)
def clamp_into(i: int, positions: np.ndarray, half_extent: float):
    for axis in range(3):
        positions[i, axis] = max(-half_extent, min(half_extent, positions[i, axis]))


@njit(cache=True)
def resolve_collisions(i: int, positions: np.ndarray, velocities: np.ndarray,
                       active: np.ndarray, count: int, min_distance: float):
    """
    Push agent i directly away from every agent (any kind) closer than min_distance.

    Each push is applied before the next comparison, so later checks see the
    corrected position. Coincident agents are pushed along i's own velocity,
    or +Z when it is stationary.
    """
    for j in range(count):
        if j == i or not active[j]:
            continue
        dx = positions[i, 0] - positions[j, 0]
        dy = positions[i, 1] - positions[j, 1]
        dz = positions[i, 2] - positions[j, 2]
        d = math.sqrt(dx * dx + dy * dy + dz * dz)
        if d >= min_distance:
            continue

        if d > 0.0:
            ux, uy, uz = dx / d, dy / d, dz / d
        else:
            vx, vy, vz = velocities[i, 0], velocities[i, 1], velocities[i, 2]
            speed = math.sqrt(vx * vx + vy * vy + vz * vz)
            if speed > 0.0:
                ux, uy, uz = vx / speed, vy / speed, vz / speed
            else:
                ux, uy, uz = 0.0, 0.0, 1.0

        push = min_distance - d
        positions[i, 0] += ux * push
        positions[i, 1] += uy * push
        positions[i, 2] += uz * push


@njit(cache=True)
def update_orientation(i: int, velocities: np.ndarray, headings: np.ndarray,
                       orientations: np.ndarray):
    """
    Point heading along velocity and store the +Z -> heading rotation as (x, y, z, w).

    Zero velocity has no direction; the previous heading is kept.
    """
    vx, vy, vz = velocities[i, 0], velocities[i, 1], velocities[i, 2]
    speed = math.sqrt(vx * vx + vy * vy + vz * vz)
    if speed == 0.0:
        return

    fx, fy, fz = vx / speed, vy / speed, vz / speed
    headings[i, 0] = fx
    headings[i, 1] = fy
    headings[i, 2] = fz

    # Half-way quaternion between +Z and forward: axis = Z x f, w = 1 + Z . f
    r = fz + 1.0
    if r < 1e-6:
        qx, qy, qz, qw = 0.0, -1.0, 0.0, 0.0
    else:
        qx, qy, qz, qw = -fy, fx, 0.0, r

    norm = math.sqrt(qx * qx + qy * qy + qz * qz + qw * qw)
    orientations[i, 0] = qx / norm
    orientations[i, 1] = qy / norm
    orientations[i, 2] = qz / norm
    orientations[i, 3] = qw / norm


# ============================================================================
# TICK
# ============================================================================

@njit(cache=True)
def step_agent(i: int, positions: np.ndarray, velocities: np.ndarray,
               accelerations: np.ndarray, headings: np.ndarray,
               orientations: np.ndarray, kinds: np.ndarray, active: np.ndarray,
               count: int, neighbors: np.ndarray, forces: np.ndarray,
               half_extent: float, max_speed: float, max_force: float,
               perception_radius: float, separation_distance: float,
               turn_factor: float, wall_margin: float, min_distance: float,
               clamp_after_collision: bool, scale: float):
    """Advance agent i by one tick against the live population arrays."""
    n = gather_neighbors(i, kinds, active, count, neighbors)

    compute_steering(i, positions, velocities, neighbors, n, separation_distance,
                     perception_radius, max_speed, max_force, forces)
    for axis in range(3):
        accelerations[i, axis] += forces[0, axis] + forces[1, axis] + forces[2, axis]

    boundary_turn(i, positions, velocities, half_extent, wall_margin, turn_factor)

    integrate(i, positions, velocities, accelerations, max_speed, scale)
    clamp_into(i, positions, half_extent)

    if min_distance > 0.0:
        resolve_collisions(i, positions, velocities, active, count, min_distance)
        if clamp_after_collision:
            clamp_into(i, positions, half_extent)

    update_orientation(i, velocities, headings, orientations)


@njit(cache=True)
def step_flock(positions: np.ndarray, velocities: np.ndarray,
               accelerations: np.ndarray, headings: np.ndarray,
               orientations: np.ndarray, kinds: np.ndarray, active: np.ndarray,
               count: int, neighbors: np.ndarray, forces: np.ndarray,
               half_extent: float, max_speed: float, max_force: float,
               perception_radius: float, separation_distance: float,
               turn_factor: float, wall_margin: float, min_distance: float,
               clamp_after_collision: bool, scale: float):
    """Sequential in-place tick: later agents see earlier agents' updated state."""
    for i in range(count):
        if active[i]:
            step_agent(
                i, positions, velocities, accelerations, headings, orientations,
                kinds, active, count, neighbors, forces, half_extent,
                max_speed, max_force, perception_radius, separation_distance,
                turn_factor, wall_margin, min_distance, clamp_after_collision, scale
            )
