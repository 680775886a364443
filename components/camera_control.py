# ------------------------------------------------------------------------------
# Imports
# ------------------------------------------------------------------------------
import math
from enum import Enum

import glm

# ------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------
YAW = -90.0
PITCH = 0.0
SPEED = 2.5
SENSITIVITY = 0.1
ZOOM = 45.0
PITCH_LIMIT = 89.0


class CameraMovement(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# ------------------------------------------------------------------------------
# Camera Class
# ------------------------------------------------------------------------------
class Camera:
    """
    Camera is a free-flying Euler-angle camera.

    Orientation is kept as yaw/pitch (degrees) and expanded into front/right/up
    vectors. The pose can also be placed directly with set_pose(), in which
    case yaw/pitch are re-derived so that later mouse movement continues from
    the placed orientation.
    """

    def __init__(
        self,
        position=(0.0, 0.0, 0.0),
        world_up=(0.0, 1.0, 0.0),
        yaw=YAW,
        pitch=PITCH,
        movement_speed=SPEED,
        mouse_sensitivity=SENSITIVITY,
        zoom=ZOOM,
    ):
        """
        Initialize the camera.

        Args:
            position (tuple): Initial (x, y, z) position.
            world_up (tuple): Up direction of the world.
            yaw (float): Initial yaw in degrees (-90 looks down -Z).
            pitch (float): Initial pitch in degrees.
            movement_speed (float): Units per second for keyboard movement.
            mouse_sensitivity (float): Degrees per cursor unit.
            zoom (float): Vertical field of view in degrees.
        """
        self.position = glm.vec3(*position)
        self.world_up = glm.vec3(*world_up)
        self.yaw = yaw
        self.pitch = pitch
        self.movement_speed = movement_speed
        self.mouse_sensitivity = mouse_sensitivity
        self.zoom = zoom

        self.front = glm.vec3(0.0, 0.0, -1.0)
        self.right = glm.vec3(1.0, 0.0, 0.0)
        self.up = glm.vec3(0.0, 1.0, 0.0)
        self.update_camera_vectors()

    # --------------------------------------------------------------------------
    # Pose
    # --------------------------------------------------------------------------
    def get_view_matrix(self):
        """
        Returns:
            glm.mat4: lookAt(position, position + front, up).
        """
        return glm.lookAt(self.position, self.position + self.front, self.up)

    def set_pose(self, position, front, up, zoom=None):
        """
        Place the camera directly.

        Args:
            position (tuple): New (x, y, z) position.
            front (tuple): Viewing direction; need not be normalized.
            up (tuple): Up direction for the view.
            zoom (float): Optional new field of view in degrees.
        """
        self.position = glm.vec3(*position)
        self.front = glm.normalize(glm.vec3(*front))
        self.right = glm.normalize(glm.cross(self.front, glm.vec3(*up)))
        self.up = glm.normalize(glm.cross(self.right, self.front))
        if zoom is not None:
            self.zoom = zoom

        self.pitch = math.degrees(math.asin(max(-1.0, min(1.0, self.front.y))))
        horizontal = glm.vec2(self.front.x, self.front.z)
        if glm.length(horizontal) < 1e-6:
            # Looking straight up or down: the view's up vector carries the heading.
            sign = -1.0 if self.front.y > 0.0 else 1.0
            horizontal = glm.vec2(self.up.x, self.up.z) * sign
        self.yaw = math.degrees(math.atan2(horizontal.y, horizontal.x))

    # --------------------------------------------------------------------------
    # Input Handling
    # --------------------------------------------------------------------------
    def process_keyboard(self, direction, delta_time):
        """
        Move along the camera axes by movement_speed * delta_time.

        Args:
            direction (CameraMovement): Direction of travel.
            delta_time (float): Seconds since the last frame.
        """
        velocity = self.movement_speed * delta_time
        if direction == CameraMovement.FORWARD:
            self.position += self.front * velocity
        elif direction == CameraMovement.BACKWARD:
            self.position -= self.front * velocity
        elif direction == CameraMovement.LEFT:
            self.position -= self.right * velocity
        elif direction == CameraMovement.RIGHT:
            self.position += self.right * velocity
        elif direction == CameraMovement.UP:
            self.position += self.up * velocity
        elif direction == CameraMovement.DOWN:
            self.position -= self.up * velocity

    def process_mouse_movement(self, x_offset, y_offset, constrain_pitch=True):
        """
        Turn the camera by a cursor offset.

        Args:
            x_offset (float): Horizontal cursor delta (positive turns right).
            y_offset (float): Vertical cursor delta (positive looks up).
            constrain_pitch (bool): Clamp pitch to avoid flipping over the poles.
        """
        self.yaw += x_offset * self.mouse_sensitivity
        self.pitch += y_offset * self.mouse_sensitivity

        if constrain_pitch:
            self.pitch = max(-PITCH_LIMIT, min(PITCH_LIMIT, self.pitch))

        self.update_camera_vectors()

    def adjust_movement_speed(self, offset, step, minimum, maximum):
        """
        Change the movement speed by offset * step, clamped to [minimum, maximum].

        Returns:
            float: The new movement speed.
        """
        self.movement_speed = max(minimum, min(maximum, self.movement_speed + offset * step))
        return self.movement_speed

    def update_camera_vectors(self):
        """
        Recalculate front/right/up from yaw and pitch.
        """
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = glm.vec3(
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        )
        self.front = glm.normalize(front)
        self.right = glm.normalize(glm.cross(self.front, self.world_up))
        self.up = glm.normalize(glm.cross(self.right, self.front))
