import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import glm

from components.transforms import rotate_offset

logger = logging.getLogger(__name__)

DEFAULT_UV_SCALE = (1.0, 1.0)


@dataclass
class ScenePart:
    """
    One primitive shape of an assembly.

    `offset` is in the assembly's local frame and turns with the assembly
    rotation. `rotation` of None means the part takes the assembly rotation.
    Exactly one of `texture` (tag) and `color` (rgba) is expected.
    """

    shape: str
    scale: tuple = (1.0, 1.0, 1.0)
    offset: tuple = (0.0, 0.0, 0.0)
    rotation: Optional[tuple] = None
    texture: Optional[str] = None
    color: Optional[tuple] = None
    material: Optional[str] = None
    uv_scale: tuple = DEFAULT_UV_SCALE
    draw_options: dict = field(default_factory=dict)


@dataclass
class Assembly:
    """
    A named group of parts that compose one scene object.
    """

    name: str
    parts: list
    origin: tuple = (0.0, 0.0, 0.0)
    rotation: tuple = (0.0, 0.0, 0.0)


class SceneConstructor:
    """
    SceneConstructor prepares the scene resources and draws every assembly.

    Rendering is a single sequential pass over the assemblies in order. For each
    part it issues, in order: transformation, color or texture, material,
    UV scale, then the draw call.
    """
    def __init__(
        self,
        shape_meshes,
        uniform_dispatcher,
        assemblies,
        textures=(),
        materials=(),
        light_settings=None,
        torus_thickness=None,
    ):
        """
        Args:
            shape_meshes (ShapeMeshes): Mesh provider the parts are drawn with.
            uniform_dispatcher (UniformDispatcher): Sink for per-part uniforms.
            assemblies (list): Assembly definitions in draw order.
            textures (list): (file name, tag) pairs in registration order.
            materials (list): ObjectMaterial definitions.
            light_settings (dict): Lights uploaded once by prepare_scene().
            torus_thickness (dict): Tube radius per torus mesh variant.
        """
        self.shape_meshes = shape_meshes
        self.uniform_dispatcher = uniform_dispatcher
        self.assemblies = list(assemblies)
        self.textures = list(textures)
        self.materials = list(materials)
        self.light_settings = light_settings or {}
        self.torus_thickness = torus_thickness or {}

    # --------------------------------------------------------------------------
    # Preparation
    # --------------------------------------------------------------------------
    def prepare_scene(self, texture_manager, material_manager, asset_dir):
        """
        Load everything the scene needs before the first frame.

        Args:
            texture_manager (TextureManager): Registry the textures are registered into.
            material_manager (MaterialManager): Registry the materials are defined into.
            asset_dir (str): Directory the texture files live in.
        """
        material_manager.define_materials(self.materials)

        for file_name, tag in self.textures:
            # Failures are logged by the registry and the texture is skipped.
            texture_manager.register_texture(os.path.join(asset_dir, file_name), tag)
        texture_manager.bind_textures()
        logger.info(f"Registered {texture_manager.texture_count}/{len(self.textures)} scene textures")

        self.uniform_dispatcher.set_lighting_enabled(True)
        self.uniform_dispatcher.set_lights(self.light_settings)

        self.shape_meshes.load_all(self.torus_thickness)

    # --------------------------------------------------------------------------
    # Rendering
    # --------------------------------------------------------------------------
    def iter_parts(self):
        """
        Yield (assembly, part, position, rotation) for every part in draw order.
        """
        for assembly in self.assemblies:
            origin = glm.vec3(*assembly.origin)
            for part in assembly.parts:
                position = origin + rotate_offset(part.offset, assembly.rotation)
                rotation = part.rotation if part.rotation is not None else assembly.rotation
                yield assembly, part, position, rotation

    def render_scene(self):
        """
        Draw every part of every assembly.
        """
        for _, part, position, rotation in self.iter_parts():
            self.render_part(part, position, rotation)

    def render_part(self, part, position, rotation):
        dispatcher = self.uniform_dispatcher
        dispatcher.set_transformations(part.scale, rotation, position)

        if part.texture is not None:
            dispatcher.set_texture(part.texture)
        else:
            dispatcher.set_solid_color(*(part.color or (1.0, 1.0, 1.0, 1.0)))

        if part.material is not None:
            dispatcher.set_material(part.material)
        dispatcher.set_uv_scale(*part.uv_scale)

        self.shape_meshes.draw(part.shape, **part.draw_options)
