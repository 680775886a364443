import logging
from dataclasses import dataclass, field

import glm

logger = logging.getLogger(__name__)


def _as_vec3(value):
    if isinstance(value, (int, float)):
        return glm.vec3(float(value))
    return glm.vec3(*value)


@dataclass(frozen=True)
class ObjectMaterial:
    """
    Lighting response of a surface.

    Colors may be given as a single grey level or as an (r, g, b) sequence.
    """

    tag: str
    ambient_color: glm.vec3 = field(default_factory=lambda: glm.vec3(0.0))
    ambient_strength: float = 0.0
    diffuse_color: glm.vec3 = field(default_factory=lambda: glm.vec3(0.0))
    specular_color: glm.vec3 = field(default_factory=lambda: glm.vec3(0.0))
    shininess: float = 0.0

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "ambient_color", _as_vec3(self.ambient_color))
        object.__setattr__(self, "diffuse_color", _as_vec3(self.diffuse_color))
        object.__setattr__(self, "specular_color", _as_vec3(self.specular_color))
        object.__setattr__(self, "ambient_strength", float(self.ambient_strength))
        object.__setattr__(self, "shininess", float(self.shininess))
        if self.shininess < 0.0:
            raise ValueError(f"Invalid shininess for material '{self.tag}'. Must be >= 0.")


class MaterialManager:
    """
    Registry of scene materials, defined once during scene setup.

    Lookup is first-match: defining a second material with an existing tag is
    allowed, but the first definition stays the one returned.
    """

    def __init__(self):
        self.materials = []

    def __len__(self):
        return len(self.materials)

    def define_material(self, material):
        self.materials.append(material)

    def define_materials(self, materials):
        for material in materials:
            self.define_material(material)

    def find_material(self, tag):
        """
        Return the first material defined under `tag`, or None if there is none.
        """
        for material in self.materials:
            if material.tag == tag:
                return material
        logger.debug(f"Material tag '{tag}' is not defined")
        return None
