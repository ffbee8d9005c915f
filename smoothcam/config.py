from __future__ import annotations

# Window
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS_CAP = 0  # 0 = uncapped

# App
APP_VERSION = "0.3.0"

# Rendering
FOV_DEG = 70.0
NEAR = 0.05
FAR = 500.0
CLEAR_COLOR = (0.12, 0.13, 0.16)
GRID_HALF_EXTENT = 20  # grid lines from -N..N on X and Z
GRID_STEP = 1.0

# Scene start pose
DEFAULT_EYE = (-2.0, 2.5, 5.0)
DEFAULT_TARGET = (0.0, 0.5, 0.0)
DEFAULT_CONTROLLER = "unreal"

# Look angles
# Pitch is kept this far (radians) away from straight up/down; yaw is undefined at the poles.
PITCH_EPSILON = 0.01
# Eye/target closer than this have no usable look direction.
RADIUS_EPSILON = 1e-6

# FPS controller
DEFAULT_FPS_ROTATE_SENSITIVITY = 0.002  # radians per pixel
DEFAULT_FPS_TRANSLATE_SENSITIVITY = 0.5  # units per frame while a key is held
DEFAULT_FPS_SMOOTHING = 0.9

# Unreal controller
DEFAULT_UNREAL_ROTATE_SENSITIVITY = 0.002
DEFAULT_UNREAL_MOUSE_TRANSLATE_SENSITIVITY = 0.02  # Middle or L+R panning
DEFAULT_UNREAL_WHEEL_TRANSLATE_SENSITIVITY = 1.0
DEFAULT_UNREAL_KEYBOARD_MOVE_SENSITIVITY = 0.1  # W/S/A/D/Q/E while dragging
DEFAULT_UNREAL_KEYBOARD_MOVE_WHEEL_SENSITIVITY = 0.1
DEFAULT_UNREAL_SMOOTHING = 0.7
# Wheel while dragging adapts keyboard speed; it never drops below this.
KEYBOARD_MOVE_MIN_SENSITIVITY = 0.01

# Orbit controller (rates are per second; events are scaled by frame dt)
DEFAULT_ORBIT_ROTATE_SENSITIVITY = 0.08
DEFAULT_ORBIT_TRANSLATE_SENSITIVITY = 0.1
DEFAULT_ORBIT_WHEEL_ZOOM_SENSITIVITY = 0.2
DEFAULT_ORBIT_SMOOTHING = 0.8
ORBIT_MIN_RADIUS = 0.001
ORBIT_MAX_RADIUS = 1_000_000.0
