"""Steering behaviours, integration and heading of individual agents."""

import numpy as np
import pytest

from boids import AgentKind, BoundedVolume, Flock, SteeringParams

GOLDFISH = AgentKind.BLUE_GOLDFISH
PIRANHA = AgentKind.PIRANHA
EPS = 1e-12


def test_separation_pushes_away_from_close_neighbour(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    flock.add(GOLDFISH, position=(4, 0, 0), velocity=(0, 0, 0))

    forces = a.steering()
    np.testing.assert_allclose(forces.separation, [-0.005, 0.0, 0.0], atol=EPS)


def test_separation_is_symmetric(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(1, 2, 3), velocity=(0.01, 0, 0)))
    b = flock.agent(flock.add(GOLDFISH, position=(4, 6, 3), velocity=(0, -0.02, 0.01)))

    line = b.position - a.position
    assert np.linalg.norm(line) < a.separation_distance
    assert np.dot(a.steering().separation, line) < 0
    assert np.dot(b.steering().separation, line) > 0


def test_cohesion_steers_towards_neighbour_centre(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    flock.add(GOLDFISH, position=(0, 9, 0), velocity=(0, 0, 0))

    forces = a.steering()
    np.testing.assert_allclose(forces.cohesion, [0.0, 0.005, 0.0], atol=EPS)
    # 9 units is outside the separation distance
    np.testing.assert_allclose(forces.separation, [0.0, 0.0, 0.0])


def test_alignment_matches_neighbour_velocity(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    flock.add(GOLDFISH, position=(0, 9, 0), velocity=(0.05, 0, 0))

    np.testing.assert_allclose(a.steering().alignment, [0.005, 0.0, 0.0], atol=EPS)


def test_alignment_with_stationary_neighbours_is_zero(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0.05, 0, 0)))
    flock.add(GOLDFISH, position=(0, 9, 0), velocity=(0, 0, 0))

    np.testing.assert_allclose(a.steering().alignment, [0.0, 0.0, 0.0])


def test_no_same_kind_neighbours_means_no_force(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0.03, 0, 0)))
    flock.add(PIRANHA, position=(3, 0, 0), velocity=(0, 0.05, 0))
    flock.add(GOLDFISH, position=(20, 0, 0), velocity=(0, 0, 0.05))

    forces = a.steering()
    for force in forces:
        np.testing.assert_allclose(force, [0.0, 0.0, 0.0])


def test_coincident_neighbour_is_ignored_by_behaviours(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(5, 5, 5), velocity=(0.02, 0, 0)))
    flock.add(GOLDFISH, position=(5, 5, 5), velocity=(0, 0.05, 0))

    for force in a.steering():
        np.testing.assert_allclose(force, [0.0, 0.0, 0.0])


def test_neighbors_are_same_kind_and_exclude_self(flock):
    a = flock.add(GOLDFISH)
    flock.add(PIRANHA)
    c = flock.add(GOLDFISH)
    flock.add(AgentKind.SUNFISH)

    assert flock.agent(a).neighbors() == [c]
    assert flock.agent(c).neighbors() == [a]


def test_each_behaviour_respects_max_force():
    volume = BoundedVolume(20.0)
    flock = Flock(volume, seed=99)
    for i in range(40):
        flock.add(AgentKind(i % 2))

    for _ in range(3):
        for agent in flock:
            for force in agent.steering():
                assert np.linalg.norm(force) <= agent.max_force + EPS
        flock.tick()


def test_apply_force_accumulates(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    a.apply_force((0.001, 0, 0))
    a.apply_force((0.001, 0.002, 0))
    np.testing.assert_allclose(a.acceleration, [0.002, 0.002, 0.0])


def test_acceleration_resets_after_tick(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    a.apply_force((0.01, 0, 0))
    flock.tick()

    np.testing.assert_allclose(a.acceleration, [0.0, 0.0, 0.0])
    # The applied force was integrated into velocity, then position
    np.testing.assert_allclose(a.velocity, [0.01, 0.0, 0.0])
    np.testing.assert_allclose(a.position, [0.01, 0.0, 0.0])


def test_velocity_is_capped(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(3, 4, 0)))
    flock.tick()
    np.testing.assert_allclose(a.velocity, [0.03, 0.04, 0.0])
    assert np.linalg.norm(a.velocity) == pytest.approx(a.max_speed)


def test_lone_stationary_agent_does_not_drift(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0, 0)))
    heading = a.heading
    orientation = a.orientation

    flock.tick()

    np.testing.assert_array_equal(a.position, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(a.velocity, [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(a.heading, heading)
    np.testing.assert_array_equal(a.orientation, orientation)
    np.testing.assert_array_equal(heading, [0.0, 0.0, 1.0])
    np.testing.assert_array_equal(orientation, [0.0, 0.0, 0.0, 1.0])


def test_heading_follows_velocity(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0, 0.05, 0)))
    flock.tick()

    np.testing.assert_allclose(a.heading, [0.0, 1.0, 0.0], atol=EPS)
    half = np.sqrt(0.5)
    np.testing.assert_allclose(a.orientation, [-half, 0.0, 0.0, half], atol=EPS)


@pytest.mark.parametrize("velocity", [
    (0.01, 0.02, 0.03),
    (-0.04, 0.0, 0.0),
    (0.0, 0.0, -0.05),
    (0.0, -0.001, 0.03),
])
def test_orientation_rotates_reference_axis_onto_heading(flock, rotate, velocity):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=velocity))
    flock.tick()

    expected = np.asarray(velocity) / np.linalg.norm(velocity)
    np.testing.assert_allclose(a.heading, expected, atol=1e-9)
    np.testing.assert_allclose(rotate(a.orientation, (0.0, 0.0, 1.0)), expected, atol=1e-9)


def test_heading_kept_when_velocity_drops_to_zero(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(0, 0, 0), velocity=(0.05, 0, 0)))
    flock.tick()
    np.testing.assert_allclose(a.heading, [1.0, 0.0, 0.0])

    a.velocity = (0, 0, 0)
    flock.tick()
    np.testing.assert_allclose(a.heading, [1.0, 0.0, 0.0])


def test_boundary_turn_near_max_face(flock):
    # Inside the volume but within the 2-unit margin of x = 36
    a = flock.agent(flock.add(GOLDFISH, position=(35, 0, 0), velocity=(0.05, 0, 0)))
    flock.tick()

    np.testing.assert_allclose(a.velocity, [-0.05, 0.0, 0.0])
    np.testing.assert_allclose(a.position, [34.95, 0.0, 0.0])


def test_agent_outside_face_is_turned_and_clamped(flock, volume):
    a = flock.agent(flock.add(GOLDFISH, position=(39, 0, 0), velocity=(0.05, 0, 0)))
    flock.tick()

    assert a.velocity[0] < 0.05
    assert a.velocity[0] < 0
    assert a.position[0] == pytest.approx(volume.half_extent)
    assert volume.contains(a.position)


def test_boundary_turn_fires_on_several_axes(flock):
    a = flock.agent(flock.add(GOLDFISH, position=(-35, -35, 35), velocity=(0, 0, 0)))
    flock.tick()

    component = 0.05 / np.sqrt(3.0)
    np.testing.assert_allclose(a.velocity, [component, component, -component])


def test_boundary_turn_is_not_limited_by_max_force():
    # A tiny max_force would cap a force-based turn; boundary turning ignores it
    params = SteeringParams(max_force=1e-6, max_speed=1.0)
    flock = Flock(BoundedVolume(80.0), params=params, seed=0)
    a = flock.agent(flock.add(GOLDFISH, position=(0, 35, 0), velocity=(0, 0, 0)))
    flock.tick()

    np.testing.assert_allclose(a.velocity, [0.0, -0.5, 0.0])


def test_agent_accessors(flock, volume):
    handle = flock.add("Sunfish", position=(1, 2, 3), velocity=(0, 0, 0))
    a = flock.agent(handle)

    assert a.kind is AgentKind.SUNFISH
    assert a.volume is volume
    assert a.alive
    assert a == flock[handle]
    assert "Sunfish" in repr(a)

    # Returned arrays are copies
    pos = a.position
    pos[0] = 100.0
    np.testing.assert_allclose(a.position, [1.0, 2.0, 3.0])
