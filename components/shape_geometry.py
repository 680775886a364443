"""
Procedural geometry for the primitive shapes the scene is built from.

Every generator returns a MeshData whose vertices are laid out as
position(3), normal(3), texCoords(2) float32 and drawn as GL_TRIANGLES.
Named ranges let a caller draw only part of a mesh (single box faces,
cylinder caps).

Shape conventions (before the model matrix is applied):
  - plane:    [-1, 1] in X and Z at y = 0, facing +Y
  - box:      unit cube centered on the origin
  - cone:     radius 1, base at y = 0, apex at y = 1
  - cylinder: radius 1, y in [0, 1]
  - sphere:   radius 1, centered on the origin
  - torus:    lying in the XY plane, main radius 1
"""

import math
from enum import Enum

import numpy as np

# position(3) + normal(3) + texCoords(2)
FLOATS_PER_VERTEX = 8

QUAD_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


class BoxSide(Enum):
    BACK = "back"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    FRONT = "front"


class MeshData:
    """
    Interleaved vertex data plus named (first, count) vertex ranges.
    """

    def __init__(self, vertices, ranges=None):
        self.vertices = np.asarray(vertices, dtype=np.float32).reshape(-1, FLOATS_PER_VERTEX)
        self.ranges = ranges if ranges is not None else {}

    @property
    def vertex_count(self):
        return len(self.vertices)

    def get_range(self, name):
        return self.ranges[name]


def _vertex(position, normal, uv):
    return [*position, *normal, *uv]


def _quad(corners, normal, uvs=QUAD_UVS):
    """
    Two triangles for four corners given counter-clockwise as seen from the front.
    """
    v = [_vertex(corner, normal, uv) for corner, uv in zip(corners, uvs)]
    return [v[0], v[1], v[2], v[0], v[2], v[3]]


def _ring_point(radius, angle, y):
    # Angles increase clockwise when seen from above so that U grows to the right
    # when a side is viewed from outside.
    return (radius * math.cos(angle), y, -radius * math.sin(angle))


# ------------------------------------------------------------------------------
# Plane and Box
# ------------------------------------------------------------------------------
def generate_plane():
    corners = ((-1.0, 0.0, 1.0), (1.0, 0.0, 1.0), (1.0, 0.0, -1.0), (-1.0, 0.0, -1.0))
    vertices = _quad(corners, (0.0, 1.0, 0.0))
    return MeshData(vertices, {"all": (0, len(vertices))})


def generate_box():
    """
    Unit cube with each face stored as its own 6-vertex range, keyed by BoxSide.
    """
    h = 0.5
    faces = {
        BoxSide.BACK: (((h, -h, -h), (-h, -h, -h), (-h, h, -h), (h, h, -h)), (0.0, 0.0, -1.0)),
        BoxSide.BOTTOM: (((-h, -h, -h), (h, -h, -h), (h, -h, h), (-h, -h, h)), (0.0, -1.0, 0.0)),
        BoxSide.LEFT: (((-h, -h, -h), (-h, -h, h), (-h, h, h), (-h, h, -h)), (-1.0, 0.0, 0.0)),
        BoxSide.RIGHT: (((h, -h, h), (h, -h, -h), (h, h, -h), (h, h, h)), (1.0, 0.0, 0.0)),
        BoxSide.TOP: (((-h, h, h), (h, h, h), (h, h, -h), (-h, h, -h)), (0.0, 1.0, 0.0)),
        BoxSide.FRONT: (((-h, -h, h), (h, -h, h), (h, h, h), (-h, h, h)), (0.0, 0.0, 1.0)),
    }

    vertices = []
    ranges = {}
    for side in BoxSide:
        corners, normal = faces[side]
        ranges[side] = (len(vertices), 6)
        vertices.extend(_quad(corners, normal))
    ranges["all"] = (0, len(vertices))
    return MeshData(vertices, ranges)


# ------------------------------------------------------------------------------
# Round Shapes
# ------------------------------------------------------------------------------
def _cap(segments, y, facing_up):
    """
    Triangle fan disc of radius 1 at height `y`.
    """
    vertices = []
    normal = (0.0, 1.0, 0.0) if facing_up else (0.0, -1.0, 0.0)
    center = _vertex((0.0, y, 0.0), normal, (0.5, 0.5))
    for i in range(segments):
        a0 = 2.0 * math.pi * i / segments
        a1 = 2.0 * math.pi * (i + 1) / segments
        p0 = _vertex(_ring_point(1.0, a0, y), normal, (0.5 + 0.5 * math.cos(a0), 0.5 + 0.5 * math.sin(a0)))
        p1 = _vertex(_ring_point(1.0, a1, y), normal, (0.5 + 0.5 * math.cos(a1), 0.5 + 0.5 * math.sin(a1)))
        if facing_up:
            vertices.extend([center, p0, p1])
        else:
            vertices.extend([center, p1, p0])
    return vertices


def generate_cylinder(segments=36):
    """
    Cylinder with separately drawable "sides", "top" and "bottom" ranges.
    """
    sides = []
    for i in range(segments):
        a0 = 2.0 * math.pi * i / segments
        a1 = 2.0 * math.pi * (i + 1) / segments
        u0 = i / segments
        u1 = (i + 1) / segments
        corners = (_ring_point(1.0, a0, 0.0), _ring_point(1.0, a1, 0.0),
                   _ring_point(1.0, a1, 1.0), _ring_point(1.0, a0, 1.0))
        normals = (_ring_point(1.0, a0, 0.0), _ring_point(1.0, a1, 0.0),
                   _ring_point(1.0, a1, 0.0), _ring_point(1.0, a0, 0.0))
        uvs = ((u0, 0.0), (u1, 0.0), (u1, 1.0), (u0, 1.0))
        v = [_vertex(c, n, uv) for c, n, uv in zip(corners, normals, uvs)]
        sides.extend([v[0], v[1], v[2], v[0], v[2], v[3]])

    top = _cap(segments, 1.0, facing_up=True)
    bottom = _cap(segments, 0.0, facing_up=False)

    ranges = {
        "sides": (0, len(sides)),
        "top": (len(sides), len(top)),
        "bottom": (len(sides) + len(top), len(bottom)),
    }
    vertices = sides + top + bottom
    ranges["all"] = (0, len(vertices))
    return MeshData(vertices, ranges)


def generate_cone(segments=36):
    """
    Cone with "sides" and "bottom" ranges.
    """
    sides = []
    slope = 1.0 / math.sqrt(2.0)
    for i in range(segments):
        a0 = 2.0 * math.pi * i / segments
        a1 = 2.0 * math.pi * (i + 1) / segments
        am = 0.5 * (a0 + a1)
        n0 = (math.cos(a0) * slope, slope, -math.sin(a0) * slope)
        n1 = (math.cos(a1) * slope, slope, -math.sin(a1) * slope)
        nm = (math.cos(am) * slope, slope, -math.sin(am) * slope)
        sides.append(_vertex(_ring_point(1.0, a0, 0.0), n0, (i / segments, 0.0)))
        sides.append(_vertex(_ring_point(1.0, a1, 0.0), n1, ((i + 1) / segments, 0.0)))
        sides.append(_vertex((0.0, 1.0, 0.0), nm, ((i + 0.5) / segments, 1.0)))

    bottom = _cap(segments, 0.0, facing_up=False)
    ranges = {"sides": (0, len(sides)), "bottom": (len(sides), len(bottom))}
    vertices = sides + bottom
    ranges["all"] = (0, len(vertices))
    return MeshData(vertices, ranges)


def generate_sphere(stacks=24, slices=36):
    rows = []
    for i in range(stacks + 1):
        phi = math.pi * i / stacks
        row = []
        for j in range(slices + 1):
            theta = 2.0 * math.pi * j / slices
            point = (math.sin(phi) * math.cos(theta), math.cos(phi), -math.sin(phi) * math.sin(theta))
            row.append(_vertex(point, point, (j / slices, 1.0 - i / stacks)))
        rows.append(row)

    vertices = []
    for i in range(stacks):
        for j in range(slices):
            top_left, top_right = rows[i][j], rows[i][j + 1]
            bottom_left, bottom_right = rows[i + 1][j], rows[i + 1][j + 1]
            vertices.extend([bottom_left, bottom_right, top_right, bottom_left, top_right, top_left])
    return MeshData(vertices, {"all": (0, len(vertices))})


def generate_torus(main_radius=1.0, thickness=0.1, main_segments=48, tube_segments=24):
    """
    Torus in the XY plane; `thickness` is the radius of the tube.
    """
    if thickness <= 0.0:
        raise ValueError("Torus thickness must be positive.")

    def point(i, j):
        u = 2.0 * math.pi * i / main_segments
        v = 2.0 * math.pi * j / tube_segments
        ring = main_radius + thickness * math.cos(v)
        position = (ring * math.cos(u), ring * math.sin(u), thickness * math.sin(v))
        normal = (math.cos(v) * math.cos(u), math.cos(v) * math.sin(u), math.sin(v))
        return _vertex(position, normal, (i / main_segments, j / tube_segments))

    vertices = []
    for i in range(main_segments):
        for j in range(tube_segments):
            p0, p1 = point(i, j + 1), point(i, j)
            p2, p3 = point(i + 1, j), point(i + 1, j + 1)
            vertices.extend([p0, p1, p2, p0, p2, p3])
    return MeshData(vertices, {"all": (0, len(vertices))})
