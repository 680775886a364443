import logging
from enum import Enum

import glm

from components.camera_control import Camera, CameraMovement
from components.input_controls import (
    CONTINUOUS_ACTIONS,
    CYCLE_ORTHO_VIEW,
    DISCRETE_ACTIONS,
    PERSPECTIVE_VIEW,
    KeyToggle,
)

logger = logging.getLogger(__name__)


class ProjectionMode(Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


class OrthoView(Enum):
    FRONT = "front"
    SIDE = "side"
    TOP = "top"

    def next(self):
        views = list(OrthoView)
        return views[(views.index(self) + 1) % len(views)]


# (position, front, up)
REFERENCE_POSE = ((0.0, 8.0, 12.0), (-0.1, -1.5, -2.0), (0.0, 1.0, 0.0))
ORTHO_POSES = {
    OrthoView.FRONT: ((1.0, 8.0, 10.0), (0.0, 0.0, -1.0), (0.0, 1.0, 0.0)),
    OrthoView.SIDE: ((15.0, 8.0, 0.0), (-1.0, 0.0, 0.0), (0.0, 1.0, 0.0)),
    OrthoView.TOP: ((0.0, 10.0, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, -1.0)),
}

# Continuous actions in the same order as CameraMovement.
MOVEMENT_ACTIONS = dict(zip(CONTINUOUS_ACTIONS, CameraMovement))


class ViewManager:
    """
    ViewManager owns the camera and the projection state machine:

        PERSPECTIVE --cycle--> ORTHOGRAPHIC/FRONT --cycle--> SIDE --cycle--> TOP --cycle--> FRONT
        any state  --perspective--> PERSPECTIVE (reference pose)

    Each frame it applies the frame's input to the camera and then writes the
    view, projection and camera-following spotlight uniforms.
    """

    def __init__(self, uniform_dispatcher, config, window_size=None):
        """
        Args:
            uniform_dispatcher (UniformDispatcher): Sink for the per-frame camera uniforms.
            config (RendererConfig): Projection planes, input tuning and default aspect.
            window_size (tuple): Size of the opened window. Defaults to the configured size,
                which differs from the real one in fullscreen.
        """
        self.uniform_dispatcher = uniform_dispatcher
        self.config = config
        self.aspect_ratio = config.aspect_ratio
        if window_size is not None:
            self.set_window_size(window_size)

        self.camera = Camera(
            movement_speed=config.movement_speed,
            mouse_sensitivity=config.mouse_sensitivity,
            zoom=config.fov,
        )
        self.projection_mode = ProjectionMode.PERSPECTIVE
        self.ortho_view = None
        self.toggles = {action: KeyToggle() for action in DISCRETE_ACTIONS}
        self.discrete_handlers = {
            PERSPECTIVE_VIEW: self.reset_to_perspective,
            CYCLE_ORTHO_VIEW: self.cycle_ortho_view,
        }

        self.first_mouse = True
        self.last_x = 0.0
        self.last_y = 0.0

        self.reset_to_perspective()

    # --------------------------------------------------------------------------
    # Projection State
    # --------------------------------------------------------------------------
    def reset_to_perspective(self):
        """
        Switch to perspective and move the camera back to the reference pose.
        """
        position, front, up = REFERENCE_POSE
        self.camera.set_pose(position, front, up, zoom=self.config.fov)
        self.reset_mouse_baseline()
        self.projection_mode = ProjectionMode.PERSPECTIVE
        self.ortho_view = None
        logger.debug("Switched to perspective view")

    def cycle_ortho_view(self):
        """
        Enter orthographic FRONT from perspective, otherwise advance FRONT -> SIDE -> TOP -> FRONT.
        """
        if self.projection_mode == ProjectionMode.PERSPECTIVE:
            self.ortho_view = OrthoView.FRONT
        else:
            self.ortho_view = self.ortho_view.next()
        self.projection_mode = ProjectionMode.ORTHOGRAPHIC

        position, front, up = ORTHO_POSES[self.ortho_view]
        self.camera.set_pose(position, front, up)
        self.reset_mouse_baseline()
        logger.debug(f"Switched to orthographic {self.ortho_view.value} view")

    # --------------------------------------------------------------------------
    # Input Handling
    # --------------------------------------------------------------------------
    def process_keyboard(self, frame_input, delta_time):
        for action, direction in MOVEMENT_ACTIONS.items():
            if frame_input.is_held(action):
                self.camera.process_keyboard(direction, delta_time)

        for action, toggle in self.toggles.items():
            if toggle.update(frame_input.is_held(action)):
                self.discrete_handlers[action]()

    def process_mouse_position(self, x_pos, y_pos):
        """
        Turn the camera by the cursor movement since the previous sample.
        The first sample after activation only records the baseline.
        """
        if self.first_mouse:
            self.last_x = x_pos
            self.last_y = y_pos
            self.first_mouse = False
            return

        x_offset = x_pos - self.last_x
        # Reversed since screen y grows downward.
        y_offset = self.last_y - y_pos
        self.last_x = x_pos
        self.last_y = y_pos

        self.camera.process_mouse_movement(x_offset, y_offset)

    def reset_mouse_baseline(self):
        self.first_mouse = True

    def set_window_size(self, window_size):
        width, height = window_size
        self.aspect_ratio = width / height

    def process_scroll(self, y_offset):
        """
        Change the camera movement speed by the scroll step per scroll unit.
        """
        if not y_offset:
            return self.camera.movement_speed
        return self.camera.adjust_movement_speed(
            y_offset,
            self.config.scroll_step,
            self.config.min_movement_speed,
            self.config.max_movement_speed,
        )

    # --------------------------------------------------------------------------
    # Matrices
    # --------------------------------------------------------------------------
    def get_view_matrix(self):
        return self.camera.get_view_matrix()

    def get_projection_matrix(self):
        if self.projection_mode == ProjectionMode.ORTHOGRAPHIC:
            extent = self.config.ortho_extent
            return glm.ortho(-extent, extent, -extent, extent, self.config.near_plane, self.config.far_plane)
        return glm.perspective(
            glm.radians(self.camera.zoom),
            self.aspect_ratio,
            self.config.near_plane,
            self.config.far_plane,
        )

    # --------------------------------------------------------------------------
    # Per-Frame Update
    # --------------------------------------------------------------------------
    def prepare_scene_view(self, frame_input, delta_time):
        """
        Apply this frame's input to the camera, then upload the camera uniforms.

        Args:
            frame_input (FrameInput): Input gathered for this frame.
            delta_time (float): Seconds since the previous frame.
        """
        self.process_keyboard(frame_input, delta_time)
        if frame_input.cursor_position is not None:
            self.process_mouse_position(*frame_input.cursor_position)
        self.process_scroll(frame_input.scroll_offset)

        self.uniform_dispatcher.set_view_matrix(self.get_view_matrix())
        self.uniform_dispatcher.set_projection_matrix(self.get_projection_matrix())
        self.uniform_dispatcher.set_view_position(self.camera.position)
        self.uniform_dispatcher.set_spot_light_pose(self.camera.position, self.camera.front)
