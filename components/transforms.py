"""
Model matrix composition for scene objects.

All scene objects are placed with the same fixed order:

    model = Translation * RotationX * RotationY * RotationZ * Scale

Rotations therefore happen in the object's local frame, before translation.
Parts of an assembly that sit at an offset from a rotated parent must have
that offset rotated first (see `rotate_offset`) and then added to the
parent's position.
"""

import glm

X_AXIS = glm.vec3(1.0, 0.0, 0.0)
Y_AXIS = glm.vec3(0.0, 1.0, 0.0)
Z_AXIS = glm.vec3(0.0, 0.0, 1.0)


def rotation_matrix(rotation_degrees):
    """
    Return RotationX * RotationY * RotationZ for (xDeg, yDeg, zDeg).
    """
    x_deg, y_deg, z_deg = rotation_degrees
    rotation = glm.rotate(glm.mat4(1.0), glm.radians(x_deg), X_AXIS)
    rotation = glm.rotate(rotation, glm.radians(y_deg), Y_AXIS)
    rotation = glm.rotate(rotation, glm.radians(z_deg), Z_AXIS)
    return rotation


def compose_model_matrix(scale, rotation_degrees, position):
    """
    Build a model matrix from per-object placement parameters.

    Args:
        scale (tuple): (x, y, z) scale factors.
        rotation_degrees (tuple): (xDeg, yDeg, zDeg), not normalized or clamped.
        position (tuple): (x, y, z) translation.

    Returns:
        glm.mat4: Translation * RotationX * RotationY * RotationZ * Scale.
    """
    translation = glm.translate(glm.mat4(1.0), glm.vec3(*position))
    scaling = glm.scale(glm.mat4(1.0), glm.vec3(*scale))
    return translation * rotation_matrix(rotation_degrees) * scaling


def rotate_offset(offset, rotation_degrees):
    """
    Rotate a local offset by the same rotation a parent object uses.

    Args:
        offset (tuple): (x, y, z) offset in the parent's local frame.
        rotation_degrees (tuple): Parent rotation (xDeg, yDeg, zDeg).

    Returns:
        glm.vec3: The offset expressed in world orientation.
    """
    return glm.vec3(rotation_matrix(rotation_degrees) * glm.vec4(*offset, 1.0))
