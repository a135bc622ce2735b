"""Configuration for the 3D aquarium boids simulation."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "3D Aquarium Boids"
}

CAMERA = {
    "fov": 45.0,
    "near_clip": 0.1,
    "far_clip": 500.0,
    "initial_radius": 110.0,
    "initial_theta": 90.0,
    "initial_phi": 15.0,
    "min_radius": 20.0,
    "max_radius": 400.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 40.0,
    "mouse_sensitivity": 0.3
}

AQUARIUM = {
    "size": 80.0,
    "padding": 0.05,           # Fraction of size kept clear of the glass
    "glass_color": (0.35, 0.35, 0.4),
    "bounds_color": (0.1, 0.45, 0.8),
}

BOIDS = {
    "max_speed": 0.05,         # Units per reference tick
    "max_force": 0.005,
    "perception_radius": 10.0,
    "separation_distance": 8.0,
    "turn_factor": 0.5,        # Velocity nudge near a wall, not capped by max_force
    "wall_margin": 2.0,
    "min_distance": 5.0,       # Collision correction threshold
    "clamp_after_collision": False,
    "seed": None,
    "initial_capacity": 64,
    "size": 1.6,               # Rendered cone length
}

CLOCK = {
    "reference_dt": 1.0 / 60.0,  # One reference tick = one 60 Hz frame
    "max_dt": 0.05,              # Cap dt to prevent physics explosion on lag
    "time_scale": 1.0,
}

# Display colors per species, keyed by AgentKind label
SPECIES = {
    "BlueGoldfish": (0.3, 0.55, 1.0),
    "Piranha": (0.85, 0.2, 0.2),
    "CoralGrouper": (1.0, 0.5, 0.3),
    "Sunfish": (1.0, 0.85, 0.2),
}

INITIAL_SCHOOLS = {
    "BlueGoldfish": 3,
    "CoralGrouper": 3,
    "Sunfish": 3,
}

COLORS = {
    "background": (0.0, 0.03, 0.08, 1.0),
    "text": (0.9, 0.9, 0.9)
}
