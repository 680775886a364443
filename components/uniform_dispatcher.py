import logging

import glm

from components.transforms import compose_model_matrix

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# Uniform Names
# ------------------------------------------------------------------------------
MODEL_NAME = "model"
VIEW_NAME = "view"
PROJECTION_NAME = "projection"
VIEW_POSITION_NAME = "viewPosition"
COLOR_VALUE_NAME = "objectColor"
TEXTURE_VALUE_NAME = "objectTexture"
USE_TEXTURE_NAME = "bUseTexture"
USE_LIGHTING_NAME = "bUseLighting"
UV_SCALE_NAME = "UVscale"

MAX_POINT_LIGHTS = 5


class UniformDispatcher:
    """
    Translates per-object rendering intents into named uniform writes.

    Per object the calls are expected in the order
    transform -> color or texture -> material -> UV scale -> draw. Color and
    texture share the `bUseTexture` flag, so whichever is set last before the
    draw call decides how the object is shaded.
    """

    def __init__(self, shader_engine, texture_manager, material_manager):
        self.shader_engine = shader_engine
        self.texture_manager = texture_manager
        self.material_manager = material_manager

    # --------------------------------------------------------------------------
    # Transforms and Camera
    # --------------------------------------------------------------------------
    def set_model_matrix(self, matrix):
        self.shader_engine.set_mat4(MODEL_NAME, matrix)

    def set_transformations(self, scale, rotation_degrees, position):
        """
        Compose a model matrix from scale, (xDeg, yDeg, zDeg) rotation and position and upload it.
        """
        self.set_model_matrix(compose_model_matrix(scale, rotation_degrees, position))

    def set_view_matrix(self, matrix):
        self.shader_engine.set_mat4(VIEW_NAME, matrix)

    def set_projection_matrix(self, matrix):
        self.shader_engine.set_mat4(PROJECTION_NAME, matrix)

    def set_view_position(self, position):
        self.shader_engine.set_vec3(VIEW_POSITION_NAME, position)

    # --------------------------------------------------------------------------
    # Surface Appearance
    # --------------------------------------------------------------------------
    def set_solid_color(self, red, green, blue, alpha=1.0):
        """
        Shade the next draw with a flat RGBA color instead of a texture.
        """
        self.shader_engine.set_bool(USE_TEXTURE_NAME, False)
        self.shader_engine.set_vec4(COLOR_VALUE_NAME, glm.vec4(red, green, blue, alpha))

    def set_texture(self, tag):
        """
        Sample the next draw from the texture registered under `tag`.

        An unknown tag writes the -1 slot; the draw then samples an unbound unit.
        """
        self.shader_engine.set_bool(USE_TEXTURE_NAME, True)
        slot = self.texture_manager.find_texture_slot(tag)
        self.shader_engine.set_sampler2d(TEXTURE_VALUE_NAME, slot)

    def set_material(self, tag):
        """
        Upload the material registered under `tag`.

        An unknown tag leaves the previously uploaded material in place.
        """
        material = self.material_manager.find_material(tag)
        if material is None:
            return

        self.shader_engine.set_vec3("material.ambientColor", material.ambient_color)
        self.shader_engine.set_float("material.ambientStrength", material.ambient_strength)
        self.shader_engine.set_vec3("material.diffuseColor", material.diffuse_color)
        self.shader_engine.set_vec3("material.specularColor", material.specular_color)
        self.shader_engine.set_float("material.shininess", material.shininess)

    def set_uv_scale(self, u, v):
        self.shader_engine.set_vec2(UV_SCALE_NAME, glm.vec2(u, v))

    # --------------------------------------------------------------------------
    # Lighting
    # --------------------------------------------------------------------------
    def set_lighting_enabled(self, enabled):
        self.shader_engine.set_bool(USE_LIGHTING_NAME, enabled)

    def set_spot_light_pose(self, position, direction):
        self.shader_engine.set_vec3("spotLight.position", position)
        self.shader_engine.set_vec3("spotLight.direction", direction)

    def set_lights(self, light_settings):
        """
        Upload the scene lights.

        Args:
            light_settings (dict): Optional keys "directional" (dict), "point" (list of dicts)
                and "spot" (dict). Each light dict holds ambient/diffuse/specular colors,
                an "active" flag and its position and/or direction.
        """
        directional = light_settings.get("directional")
        if directional is not None:
            self._set_light("directionalLight", directional)

        point_lights = light_settings.get("point", [])
        if len(point_lights) > MAX_POINT_LIGHTS:
            raise ValueError(f"At most {MAX_POINT_LIGHTS} point lights are supported, got {len(point_lights)}.")
        for i, light in enumerate(point_lights):
            self._set_light(f"pointLights[{i}]", light)

        spot = light_settings.get("spot")
        if spot is not None:
            self._set_light("spotLight", spot)
            self.shader_engine.set_float("spotLight.constant", spot.get("constant", 1.0))
            self.shader_engine.set_float("spotLight.linear", spot.get("linear", 0.09))
            self.shader_engine.set_float("spotLight.quadratic", spot.get("quadratic", 0.032))
            self.shader_engine.set_float("spotLight.cutOff", glm.cos(glm.radians(spot.get("cut_off", 12.5))))
            self.shader_engine.set_float(
                "spotLight.outerCutOff", glm.cos(glm.radians(spot.get("outer_cut_off", 17.5)))
            )

        logger.debug(
            f"Uploaded lights: directional={directional is not None}, "
            f"point={len(point_lights)}, spot={spot is not None}"
        )

    def _set_light(self, prefix, light):
        if "position" in light:
            self.shader_engine.set_vec3(f"{prefix}.position", glm.vec3(*light["position"]))
        if "direction" in light:
            self.shader_engine.set_vec3(f"{prefix}.direction", glm.vec3(*light["direction"]))
        self.shader_engine.set_vec3(f"{prefix}.ambient", glm.vec3(*light.get("ambient", (0.0, 0.0, 0.0))))
        self.shader_engine.set_vec3(f"{prefix}.diffuse", glm.vec3(*light.get("diffuse", (0.0, 0.0, 0.0))))
        self.shader_engine.set_vec3(f"{prefix}.specular", glm.vec3(*light.get("specular", (0.0, 0.0, 0.0))))
        self.shader_engine.set_bool(f"{prefix}.bActive", light.get("active", True))
