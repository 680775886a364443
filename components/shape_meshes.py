import ctypes
import logging

from OpenGL.GL import *

from components.shape_geometry import (
    FLOATS_PER_VERTEX,
    BoxSide,
    generate_box,
    generate_cone,
    generate_cylinder,
    generate_plane,
    generate_sphere,
    generate_torus,
)

logger = logging.getLogger(__name__)

DEFAULT_TORUS_THICKNESS = 0.1


class ShapeMeshes:
    """
    Load-once / draw-many primitive shapes.

    Each shape is uploaded into its own VAO/VBO the first time it is loaded;
    draw calls bind the VAO and issue glDrawArrays over the requested range.
    """

    def __init__(self, shader_engine):
        self.shader_engine = shader_engine
        self.meshes = {}
        self.vaos = []
        self.vbos = []

    # --------------------------------------------------------------------------
    # Loading
    # --------------------------------------------------------------------------
    def load_plane_mesh(self):
        self._load("plane", generate_plane)

    def load_box_mesh(self):
        self._load("box", generate_box)

    def load_cone_mesh(self):
        self._load("cone", generate_cone)

    def load_cylinder_mesh(self):
        self._load("cylinder", generate_cylinder)

    def load_sphere_mesh(self):
        self._load("sphere", generate_sphere)

    def load_torus_mesh(self, thickness=DEFAULT_TORUS_THICKNESS):
        self._load("torus", lambda: generate_torus(thickness=thickness))

    def load_extra_torus_mesh1(self, thickness=DEFAULT_TORUS_THICKNESS):
        self._load("extra_torus_1", lambda: generate_torus(thickness=thickness))

    def load_extra_torus_mesh2(self, thickness=DEFAULT_TORUS_THICKNESS):
        self._load("extra_torus_2", lambda: generate_torus(thickness=thickness))

    def load_all(self, torus_thickness=None):
        """
        Load every primitive shape.

        Args:
            torus_thickness (dict): Optional tube radius per torus variant, keyed by
                "torus", "extra_torus_1" and "extra_torus_2".
        """
        torus_thickness = torus_thickness or {}
        self.load_plane_mesh()
        self.load_box_mesh()
        self.load_cone_mesh()
        self.load_cylinder_mesh()
        self.load_sphere_mesh()
        self.load_torus_mesh(torus_thickness.get("torus", DEFAULT_TORUS_THICKNESS))
        self.load_extra_torus_mesh1(torus_thickness.get("extra_torus_1", DEFAULT_TORUS_THICKNESS))
        self.load_extra_torus_mesh2(torus_thickness.get("extra_torus_2", DEFAULT_TORUS_THICKNESS))

    def is_loaded(self, name):
        return name in self.meshes

    def _load(self, name, generator):
        if name in self.meshes:
            return

        mesh_data = generator()

        vao = glGenVertexArrays(1)
        glBindVertexArray(vao)
        self.vaos.append(vao)

        vbo = glGenBuffers(1)
        glBindBuffer(GL_ARRAY_BUFFER, vbo)
        glBufferData(GL_ARRAY_BUFFER, mesh_data.vertices.nbytes, mesh_data.vertices, GL_STATIC_DRAW)
        self.vbos.append(vbo)

        self._setup_vertex_attributes()
        glBindVertexArray(0)

        self.meshes[name] = (mesh_data, vao)
        logger.debug(f"Loaded {name} mesh with {mesh_data.vertex_count} vertices")

    def _setup_vertex_attributes(self):
        """
        Configure the vertex attribute pointers for position, normal and texCoords.
        """
        float_size = 4
        vertex_stride = FLOATS_PER_VERTEX * float_size
        program = self.shader_engine.shader_program

        position_loc = glGetAttribLocation(program, "position")
        normal_loc = glGetAttribLocation(program, "normal")
        tex_coords_loc = glGetAttribLocation(program, "texCoords")

        # position -> offset 0
        if position_loc >= 0:
            glEnableVertexAttribArray(position_loc)
            glVertexAttribPointer(position_loc, 3, GL_FLOAT, GL_FALSE, vertex_stride, ctypes.c_void_p(0))

        # normal -> offset 3 floats
        if normal_loc >= 0:
            glEnableVertexAttribArray(normal_loc)
            glVertexAttribPointer(normal_loc, 3, GL_FLOAT, GL_FALSE, vertex_stride, ctypes.c_void_p(3 * float_size))

        # texCoords -> offset 6 floats
        if tex_coords_loc >= 0:
            glEnableVertexAttribArray(tex_coords_loc)
            glVertexAttribPointer(tex_coords_loc, 2, GL_FLOAT, GL_FALSE, vertex_stride, ctypes.c_void_p(6 * float_size))

    # --------------------------------------------------------------------------
    # Drawing
    # --------------------------------------------------------------------------
    def _draw_ranges(self, name, range_keys):
        if name not in self.meshes:
            raise RuntimeError(f"The {name} mesh has not been loaded.")

        mesh_data, vao = self.meshes[name]
        glBindVertexArray(vao)
        for key in range_keys:
            first, count = mesh_data.get_range(key)
            glDrawArrays(GL_TRIANGLES, first, count)
        glBindVertexArray(0)

    def draw_plane_mesh(self):
        self._draw_ranges("plane", ["all"])

    def draw_box_mesh(self):
        self._draw_ranges("box", ["all"])

    def draw_box_mesh_side(self, side):
        self._draw_ranges("box", [BoxSide(side)])

    def draw_cone_mesh(self, draw_bottom=True):
        self._draw_ranges("cone", ["sides", "bottom"] if draw_bottom else ["sides"])

    def draw_cylinder_mesh(self, draw_top=True, draw_bottom=True, draw_sides=True):
        range_keys = []
        if draw_top:
            range_keys.append("top")
        if draw_bottom:
            range_keys.append("bottom")
        if draw_sides:
            range_keys.append("sides")
        self._draw_ranges("cylinder", range_keys)

    def draw_sphere_mesh(self):
        self._draw_ranges("sphere", ["all"])

    def draw_torus_mesh(self):
        self._draw_ranges("torus", ["all"])

    def draw_extra_torus_mesh1(self):
        self._draw_ranges("extra_torus_1", ["all"])

    def draw_extra_torus_mesh2(self):
        self._draw_ranges("extra_torus_2", ["all"])

    def draw(self, shape, **options):
        """
        Draw a shape by name, forwarding draw options (cylinder caps, box side).
        """
        draw_calls = {
            "plane": self.draw_plane_mesh,
            "box": self.draw_box_mesh,
            "box_side": self.draw_box_mesh_side,
            "cone": self.draw_cone_mesh,
            "cylinder": self.draw_cylinder_mesh,
            "sphere": self.draw_sphere_mesh,
            "torus": self.draw_torus_mesh,
            "extra_torus_1": self.draw_extra_torus_mesh1,
            "extra_torus_2": self.draw_extra_torus_mesh2,
        }
        if shape not in draw_calls:
            raise ValueError(f"Unknown shape '{shape}'. Use one of: {', '.join(draw_calls)}.")
        draw_calls[shape](**options)

    # --------------------------------------------------------------------------
    # Cleanup
    # --------------------------------------------------------------------------
    def shutdown(self):
        """
        Delete all VAOs and VBOs.
        """
        if self.vaos:
            glDeleteVertexArrays(len(self.vaos), self.vaos)
        if self.vbos:
            glDeleteBuffers(len(self.vbos), self.vbos)
        self.vaos = []
        self.vbos = []
        self.meshes = {}
