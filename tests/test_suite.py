"""
Test Suite for the Desk Scene Renderer (Headless/Pure Python)

This module omits any OpenGL or window tests so it runs in headless CI.
The tests focus on:

  - Config logic (RendererConfig), including validation and shader discovery
  - Model matrix composition (transforms)
  - Material registry (MaterialManager)
  - Uniform dispatch against a mocked shader sink (UniformDispatcher)
  - Fly camera, input debouncing and the projection state machine (ViewManager)
  - Scene composition (SceneConstructor) and the static desk scene tables
  - Procedural geometry (shape_geometry)

Run via:
  pytest --html-report=./report/report.html
or:
  python -m unittest discover -s tests
"""

import math
import os
import sys
import tempfile
import typing
import unittest
from unittest.mock import MagicMock, call

import glm

# Adjust PYTHONPATH to include project root
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# --------------------------------------------------------------------------------
# Pure-Python Components
# --------------------------------------------------------------------------------
from components.camera_control import Camera, CameraMovement
from components.input_controls import (
    CONTINUOUS_ACTIONS,
    CYCLE_ORTHO_VIEW,
    DISCRETE_ACTIONS,
    MOVE_DOWN,
    MOVE_FORWARD,
    PERSPECTIVE_VIEW,
    FrameInput,
    KeyToggle,
)
from components.material_manager import MaterialManager, ObjectMaterial
from components.renderer_config import RendererConfig
from components.scene_constructor import Assembly, SceneConstructor, ScenePart
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
from components.transforms import compose_model_matrix, rotate_offset
from components.uniform_dispatcher import UniformDispatcher
from components.view_manager import (
    MOVEMENT_ACTIONS,
    ORTHO_POSES,
    REFERENCE_POSE,
    OrthoView,
    ProjectionMode,
    ViewManager,
)
from config import path_config, scene_config
from config.path_config import shaders_dir


# --------------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------------
def walk_shaders_dir(shader_root):
    """
    Walk the shader root directory and return a dictionary mapping shader types
    ("vertex", "fragment") to a dict of {shader_dir: path}.
    """
    result = {}
    for shader_type in ["vertex", "fragment"]:
        type_path = os.path.join(shader_root, shader_type)
        if not os.path.exists(type_path):
            continue
        for shader_dir in os.listdir(type_path):
            shader_file_path = os.path.join(type_path, shader_dir, f"{shader_type}.glsl")
            if os.path.exists(shader_file_path):
                result.setdefault(shader_type, {})[shader_dir] = shader_file_path
    return result


class GlmAssertions:
    """
    Mixin with tolerance-based comparisons for glm vectors and matrices.
    """

    def assertVecAlmostEqual(self, actual, expected, places=5):
        self.assertEqual(len(actual), len(expected))
        for a, e in zip(actual, expected):
            self.assertAlmostEqual(a, e, places=places)

    def assertMatAlmostEqual(self, actual, expected, places=5):
        for column in range(4):
            self.assertVecAlmostEqual(actual[column], expected[column], places=places)


# --------------------------------------------------------------------------------
# Tests: RendererConfig and Config Logic
# --------------------------------------------------------------------------------
class TestRendererConfig(unittest.TestCase):
    """
    Tests around RendererConfig to ensure it accepts/validates configuration properly.
    """
    maxDiff = None

    def test_basic_initialization(self):
        """
        Verify that RendererConfig can be constructed with minimal arguments
        and has the default attributes.
        """
        rc = RendererConfig(window_title="Test", window_size=(800, 600))
        self.assertEqual(rc.window_title, "Test")
        self.assertEqual(rc.window_size, (800, 600))
        self.assertTrue(rc.vsync_enabled)
        self.assertFalse(rc.fullscreen)
        self.assertEqual(rc.fov, 80.0)
        self.assertEqual(rc.near_plane, 0.1)
        self.assertEqual(rc.far_plane, 100.0)
        self.assertEqual(rc.shader_names, {"vertex": "scene", "fragment": "scene"})
        self.assertAlmostEqual(rc.aspect_ratio, 800 / 600)

    def test_repository_paths(self):
        root = os.path.realpath(PROJECT_ROOT)
        self.assertEqual(path_config.assets_dir, os.path.join(root, "assets"))
        self.assertEqual(path_config.shaders_dir, os.path.join(root, "shaders"))
        rc = RendererConfig()
        self.assertEqual(rc.assets_path, path_config.assets_dir)
        self.assertEqual(rc.shader_root, path_config.shaders_dir)

    def test_shader_discovery(self):
        """
        Test that discover_shaders() finds the scene shaders in the repository.
        """
        rc = RendererConfig()
        self.assertEqual(rc.shaders, walk_shaders_dir(os.path.abspath(shaders_dir)))
        self.assertIn("scene", rc.shaders["vertex"])
        self.assertIn("scene", rc.shaders["fragment"])
        self.assertEqual(rc.get_shader_path("fragment"), os.path.join("fragment", "scene", "fragment.glsl"))

    def test_missing_shader_root_raises(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with self.assertRaises(FileNotFoundError):
                RendererConfig(shader_root=os.path.join(tmp_dir, "nope"))

    def test_unknown_shader_name_raises_on_lookup(self):
        rc = RendererConfig(shader_names={"vertex": "scene", "fragment": "missing"})
        with self.assertRaises(FileNotFoundError):
            rc.get_shader_path("fragment")

    def test_invalid_window_sizes(self):
        for size in [(0, 600), (800, -1), (800,), (800.5, 600)]:
            with self.subTest(size=size):
                with self.assertRaises(ValueError):
                    RendererConfig(window_size=size)

    def test_invalid_planes(self):
        with self.assertRaises(ValueError):
            RendererConfig(near_plane=0.0)
        with self.assertRaises(ValueError):
            RendererConfig(near_plane=1.0, far_plane=1.0)
        with self.assertRaises(ValueError):
            RendererConfig(ortho_extent=0.0)

    def test_invalid_msaa_level(self):
        with self.assertRaises(ValueError):
            RendererConfig(msaa_level=3)

    def test_invalid_camera_options(self):
        with self.assertRaises(ValueError):
            RendererConfig(fov=0.0)
        with self.assertRaises(ValueError):
            RendererConfig(movement_speed=100.0)
        with self.assertRaises(ValueError):
            RendererConfig(min_movement_speed=10.0, max_movement_speed=5.0)
        with self.assertRaises(ValueError):
            RendererConfig(mouse_sensitivity=0.0)

    def test_invalid_log_level(self):
        with self.assertRaises(ValueError):
            RendererConfig(log_level="verbose")
        self.assertEqual(RendererConfig(log_level="debug").log_level, "DEBUG")

    def test_unpack_returns_copy(self):
        """
        Test that unpack() returns a deep copy of the configuration dictionary.
        Modifying the returned dict should not affect the original config.
        """
        rc = RendererConfig(window_title="UnpackTest", window_size=(800, 600))
        data1 = rc.unpack()
        data1["window_title"] = "Changed"
        data1["shader_names"]["vertex"] = "changed"
        data2 = rc.unpack()
        self.assertEqual(data2["window_title"], "UnpackTest")
        self.assertEqual(data2["shader_names"]["vertex"], "scene")


# --------------------------------------------------------------------------------
# Tests: Transforms
# --------------------------------------------------------------------------------
class TestTransforms(GlmAssertions, unittest.TestCase):

    def test_identity_rotation_and_scale_is_pure_translation(self):
        model = compose_model_matrix((1, 1, 1), (0, 0, 0), (3, 4, 5))
        self.assertMatAlmostEqual(model, glm.translate(glm.mat4(1.0), glm.vec3(3, 4, 5)))

    def test_scale_then_rotate_about_y(self):
        """
        With scale 2 and a 90 degree Y rotation the local X axis lands on -Z.
        """
        model = compose_model_matrix((2, 2, 2), (0, 90, 0), (0, 0, 0))
        x_axis = model * glm.vec4(1, 0, 0, 0)
        self.assertVecAlmostEqual(glm.vec3(x_axis), (0, 0, -2))

    def test_translation_applied_after_rotation(self):
        model = compose_model_matrix((1, 1, 1), (0, 90, 0), (10, 0, 0))
        point = model * glm.vec4(1, 0, 0, 1)
        self.assertVecAlmostEqual(glm.vec3(point), (10, 0, -1))

    def test_rotate_offset_follows_parent_rotation(self):
        offset = rotate_offset((-3, 0, 0), (0, -25, 0))
        angle = math.radians(25)
        self.assertVecAlmostEqual(offset, (-3 * math.cos(angle), 0, -3 * math.sin(angle)))

    def test_rotate_offset_without_rotation(self):
        self.assertVecAlmostEqual(rotate_offset((1, 2, 3), (0, 0, 0)), (1, 2, 3))


# --------------------------------------------------------------------------------
# Tests: Materials and Uniform Dispatch
# --------------------------------------------------------------------------------
class TestMaterialManager(GlmAssertions, unittest.TestCase):

    def test_scalar_colors_become_grey(self):
        material = ObjectMaterial("desk", ambient_color=0.25, diffuse_color=0.55, specular_color=0.1)
        self.assertVecAlmostEqual(material.ambient_color, (0.25, 0.25, 0.25))
        self.assertVecAlmostEqual(material.diffuse_color, (0.55, 0.55, 0.55))

    def test_negative_shininess_rejected(self):
        with self.assertRaises(ValueError):
            ObjectMaterial("bad", shininess=-1.0)

    def test_first_definition_wins(self):
        mm = MaterialManager()
        mm.define_material(ObjectMaterial("metal", shininess=64.0))
        mm.define_material(ObjectMaterial("metal", shininess=2.0))
        self.assertEqual(len(mm), 2)
        self.assertEqual(mm.find_material("metal").shininess, 64.0)

    def test_unknown_tag_returns_none(self):
        self.assertIsNone(MaterialManager().find_material("nothing"))


class TestUniformDispatcher(GlmAssertions, unittest.TestCase):

    def setUp(self):
        self.shader = MagicMock()
        self.textures = MagicMock()
        self.materials = MaterialManager()
        self.dispatcher = UniformDispatcher(self.shader, self.textures, self.materials)

    def test_unknown_material_writes_nothing(self):
        self.dispatcher.set_material("missing")
        self.assertEqual(self.shader.mock_calls, [])

    def test_material_uniforms(self):
        self.materials.define_material(
            ObjectMaterial("metal", ambient_color=0.2, ambient_strength=0.1, diffuse_color=0.4,
                           specular_color=0.9, shininess=64.0)
        )
        self.dispatcher.set_material("metal")
        self.shader.set_float.assert_any_call("material.ambientStrength", 0.1)
        self.shader.set_float.assert_any_call("material.shininess", 64.0)
        names = [c.args[0] for c in self.shader.set_vec3.call_args_list]
        self.assertEqual(names, ["material.ambientColor", "material.diffuseColor", "material.specularColor"])

    def test_texture_selects_slot(self):
        self.textures.find_texture_slot.return_value = 3
        self.dispatcher.set_texture("paper")
        self.textures.find_texture_slot.assert_called_once_with("paper")
        self.assertEqual(
            self.shader.mock_calls,
            [call.set_bool("bUseTexture", True), call.set_sampler2d("objectTexture", 3)],
        )

    def test_solid_color_disables_texture(self):
        self.dispatcher.set_solid_color(1.0, 0.1, 0.3, 0.5)
        self.shader.set_bool.assert_called_once_with("bUseTexture", False)
        name, color = self.shader.set_vec4.call_args.args
        self.assertEqual(name, "objectColor")
        self.assertVecAlmostEqual(color, (1.0, 0.1, 0.3, 0.5))

    def test_uv_scale(self):
        self.dispatcher.set_uv_scale(10.0, 4.0)
        name, value = self.shader.set_vec2.call_args.args
        self.assertEqual(name, "UVscale")
        self.assertVecAlmostEqual(value, (10.0, 4.0))

    def test_transformations_upload_model_matrix(self):
        self.dispatcher.set_transformations((1, 1, 1), (0, 0, 0), (1, 2, 3))
        name, matrix = self.shader.set_mat4.call_args.args
        self.assertEqual(name, "model")
        self.assertVecAlmostEqual(matrix[3], (1, 2, 3, 1))

    def test_lights(self):
        self.dispatcher.set_lights(scene_config.LIGHTS)
        vec3_names = [c.args[0] for c in self.shader.set_vec3.call_args_list]
        self.assertIn("directionalLight.direction", vec3_names)
        self.assertIn("pointLights[0].position", vec3_names)
        self.shader.set_bool.assert_any_call("pointLights[0].bActive", True)
        self.shader.set_bool.assert_any_call("spotLight.bActive", False)

    def test_too_many_point_lights(self):
        with self.assertRaises(ValueError):
            self.dispatcher.set_lights({"point": [{"position": (0, 0, 0)}] * 6})


# --------------------------------------------------------------------------------
# Tests: Camera, Input and View Management
# --------------------------------------------------------------------------------
class TestCamera(GlmAssertions, unittest.TestCase):

    def test_default_orientation_looks_down_negative_z(self):
        self.assertVecAlmostEqual(Camera().front, (0, 0, -1))

    def test_keyboard_movement_scales_with_delta_time(self):
        camera = Camera(movement_speed=2.5)
        camera.process_keyboard(CameraMovement.FORWARD, 2.0)
        self.assertVecAlmostEqual(camera.position, (0, 0, -5))
        camera.process_keyboard(CameraMovement.RIGHT, 1.0)
        self.assertVecAlmostEqual(camera.position, (2.5, 0, -5))
        camera.process_keyboard(CameraMovement.UP, 1.0)
        self.assertVecAlmostEqual(camera.position, (2.5, 2.5, -5))

    def test_pitch_is_clamped(self):
        camera = Camera()
        camera.process_mouse_movement(0, 100000)
        self.assertEqual(camera.pitch, 89.0)
        camera.process_mouse_movement(0, -100000)
        self.assertEqual(camera.pitch, -89.0)

    def test_set_pose_keeps_orientation_for_mouse_look(self):
        camera = Camera()
        camera.set_pose((0, 8, 12), (-0.1, -1.5, -2.0), (0, 1, 0))
        front = glm.vec3(camera.front)
        self.assertVecAlmostEqual(front, glm.normalize(glm.vec3(-0.1, -1.5, -2.0)))
        camera.process_mouse_movement(0, 0)
        self.assertVecAlmostEqual(camera.front, front)

    def test_set_pose_looking_straight_down(self):
        camera = Camera()
        camera.set_pose((0, 10, 0), (0, -1, 0), (0, 0, -1))
        self.assertVecAlmostEqual(camera.up, (0, 0, -1))
        self.assertVecAlmostEqual(camera.right, (1, 0, 0))
        self.assertAlmostEqual(camera.pitch, -90.0)
        self.assertAlmostEqual(camera.yaw, -90.0)

    def test_adjust_movement_speed_clamps(self):
        camera = Camera(movement_speed=2.5)
        self.assertAlmostEqual(camera.adjust_movement_speed(1, 0.1, 1.0, 50.0), 2.6)
        self.assertEqual(camera.adjust_movement_speed(-1000, 0.1, 1.0, 50.0), 1.0)


class TestInputControls(unittest.TestCase):

    def test_key_toggle_needs_release(self):
        toggle = KeyToggle()
        self.assertTrue(toggle.update(True))
        self.assertFalse(toggle.update(True))
        self.assertFalse(toggle.update(True))
        self.assertFalse(toggle.update(False))
        self.assertTrue(toggle.update(True))

    def test_frame_input_is_immutable(self):
        frame_input = FrameInput(held_actions=[MOVE_FORWARD], cursor_position=(1, 2), scroll_offset=1)
        self.assertTrue(frame_input.is_held(MOVE_FORWARD))
        self.assertEqual(frame_input.scroll_offset, 1.0)
        with self.assertRaises(AttributeError):
            frame_input.scroll_offset = 2.0


class TestViewManager(GlmAssertions, unittest.TestCase):

    def setUp(self):
        self.dispatcher = MagicMock()
        self.config = RendererConfig(window_size=(1000, 800))
        self.view = ViewManager(self.dispatcher, self.config)

    def press(self, action):
        self.view.prepare_scene_view(FrameInput(held_actions=[action]), 0.0)

    def release(self):
        self.view.prepare_scene_view(FrameInput(), 0.0)

    def test_initial_state_is_reference_perspective(self):
        self.assertEqual(self.view.projection_mode, ProjectionMode.PERSPECTIVE)
        self.assertVecAlmostEqual(self.view.camera.position, (0, 8, 12))
        self.assertEqual(self.view.camera.zoom, 80.0)

    def test_ortho_cycle_wraps(self):
        expected = [OrthoView.FRONT, OrthoView.SIDE, OrthoView.TOP, OrthoView.FRONT]
        for ortho_view in expected:
            self.press(CYCLE_ORTHO_VIEW)
            self.release()
            self.assertEqual(self.view.projection_mode, ProjectionMode.ORTHOGRAPHIC)
            self.assertEqual(self.view.ortho_view, ortho_view)
        self.assertVecAlmostEqual(self.view.camera.position, (1, 8, 10))

    def test_held_cycle_key_fires_once(self):
        for _ in range(5):
            self.press(CYCLE_ORTHO_VIEW)
        self.assertEqual(self.view.ortho_view, OrthoView.FRONT)

    def test_top_view_pose(self):
        for _ in range(3):
            self.press(CYCLE_ORTHO_VIEW)
            self.release()
        self.assertEqual(self.view.ortho_view, OrthoView.TOP)
        self.assertVecAlmostEqual(self.view.camera.position, (0, 10, 0))
        self.assertVecAlmostEqual(self.view.camera.front, (0, -1, 0))

    def test_perspective_resets_pose(self):
        self.press(CYCLE_ORTHO_VIEW)
        self.release()
        self.press(PERSPECTIVE_VIEW)
        self.assertEqual(self.view.projection_mode, ProjectionMode.PERSPECTIVE)
        self.assertIsNone(self.view.ortho_view)
        self.assertVecAlmostEqual(self.view.camera.position, (0, 8, 12))

    def test_projection_matrices(self):
        self.assertMatAlmostEqual(
            self.view.get_projection_matrix(),
            glm.perspective(glm.radians(80.0), 1000 / 800, 0.1, 100.0),
        )
        self.press(CYCLE_ORTHO_VIEW)
        self.assertMatAlmostEqual(
            self.view.get_projection_matrix(),
            glm.ortho(-10.0, 10.0, -10.0, 10.0, 0.1, 100.0),
        )

    def test_scroll_speed_stays_in_bounds(self):
        for _ in range(1000):
            self.view.process_scroll(5)
        self.assertEqual(self.view.camera.movement_speed, 50.0)
        for _ in range(1000):
            self.view.process_scroll(-5)
        self.assertEqual(self.view.camera.movement_speed, 1.0)

    def test_first_mouse_sample_sets_baseline(self):
        yaw, pitch = self.view.camera.yaw, self.view.camera.pitch
        self.view.process_mouse_position(400, 300)
        self.assertEqual((self.view.camera.yaw, self.view.camera.pitch), (yaw, pitch))
        self.view.process_mouse_position(410, 290)
        self.assertAlmostEqual(self.view.camera.yaw, yaw + 1.0)
        # Moving the cursor up looks up
        self.assertAlmostEqual(self.view.camera.pitch, pitch + 1.0)

    def test_reset_mouse_baseline(self):
        self.view.process_mouse_position(0, 0)
        self.view.reset_mouse_baseline()
        yaw = self.view.camera.yaw
        self.view.process_mouse_position(500, 500)
        self.assertEqual(self.view.camera.yaw, yaw)

    def test_perspective_aspect_follows_window_size(self):
        view = ViewManager(self.dispatcher, self.config, window_size=(1920, 1080))
        self.assertAlmostEqual(view.aspect_ratio, 1920 / 1080)
        self.assertMatAlmostEqual(
            view.get_projection_matrix(),
            glm.perspective(glm.radians(80.0), 1920 / 1080, 0.1, 100.0),
        )
        view.set_window_size((800, 800))
        self.assertMatAlmostEqual(
            view.get_projection_matrix(),
            glm.perspective(glm.radians(80.0), 1.0, 0.1, 100.0),
        )

    def test_controls_come_from_action_tables(self):
        self.assertEqual(set(self.view.toggles), set(DISCRETE_ACTIONS))
        self.assertEqual(list(MOVEMENT_ACTIONS), list(CONTINUOUS_ACTIONS))
        self.assertEqual(MOVEMENT_ACTIONS[MOVE_FORWARD], CameraMovement.FORWARD)
        self.assertEqual(MOVEMENT_ACTIONS[MOVE_DOWN], CameraMovement.DOWN)

    def test_view_change_resets_mouse_baseline(self):
        expected_fronts = {
            CYCLE_ORTHO_VIEW: ORTHO_POSES[OrthoView.FRONT][1],
            PERSPECTIVE_VIEW: REFERENCE_POSE[1],
        }
        for action, front in expected_fronts.items():
            with self.subTest(action=action):
                self.view.process_mouse_position(0, 0)
                self.view.process_mouse_position(10, 10)
                self.release()
                # The cursor jumps in the same frame as the view change
                self.view.prepare_scene_view(
                    FrameInput(held_actions=[action], cursor_position=(500, 500)), 0.0
                )
                self.assertVecAlmostEqual(self.view.camera.front, glm.normalize(glm.vec3(*front)))
                self.assertEqual((self.view.last_x, self.view.last_y), (500, 500))

    def test_prepare_scene_view_moves_then_uploads(self):
        front = glm.vec3(self.view.camera.front)
        self.view.prepare_scene_view(FrameInput(held_actions=[MOVE_FORWARD]), 1.0)
        self.assertVecAlmostEqual(self.view.camera.position, glm.vec3(0, 8, 12) + front * 2.5)

        self.dispatcher.set_view_matrix.assert_called_once()
        self.dispatcher.set_projection_matrix.assert_called_once()
        self.dispatcher.set_view_position.assert_called_once_with(self.view.camera.position)
        self.dispatcher.set_spot_light_pose.assert_called_once_with(
            self.view.camera.position, self.view.camera.front
        )


# --------------------------------------------------------------------------------
# Tests: Scene Composition
# --------------------------------------------------------------------------------
class TestSceneConstructor(GlmAssertions, unittest.TestCase):

    def setUp(self):
        self.recorder = MagicMock()
        self.meshes = self.recorder.meshes
        self.dispatcher = self.recorder.dispatcher

    def test_part_optional_fields(self):
        part = ScenePart("sphere")
        self.assertIsNone(part.rotation)
        self.assertIsNone(part.texture)
        self.assertIsNone(part.color)
        self.assertIsNone(part.material)
        self.assertEqual(part.uv_scale, (1.0, 1.0))

        hints = typing.get_type_hints(ScenePart)
        for name, value_type in [("rotation", tuple), ("texture", str), ("color", tuple), ("material", str)]:
            with self.subTest(field=name):
                self.assertEqual(hints[name], typing.Optional[value_type])

    def test_per_part_call_order(self):
        assembly = Assembly("thing", parts=[
            ScenePart("box", texture="paper", material="paper", uv_scale=(1.0, 3.0)),
            ScenePart("cylinder", color=(1.0, 0.0, 0.0, 1.0), material="glass",
                      draw_options={"draw_top": False}),
        ])
        SceneConstructor(self.meshes, self.dispatcher, [assembly]).render_scene()

        names = [c[0] for c in self.recorder.mock_calls]
        self.assertEqual(names, [
            "dispatcher.set_transformations",
            "dispatcher.set_texture",
            "dispatcher.set_material",
            "dispatcher.set_uv_scale",
            "meshes.draw",
            "dispatcher.set_transformations",
            "dispatcher.set_solid_color",
            "dispatcher.set_material",
            "dispatcher.set_uv_scale",
            "meshes.draw",
        ])
        self.dispatcher.set_uv_scale.assert_any_call(1.0, 3.0)
        self.dispatcher.set_uv_scale.assert_called_with(1.0, 1.0)
        self.meshes.draw.assert_called_with("cylinder", draw_top=False)

    def test_offsets_turn_with_assembly(self):
        assembly = Assembly("thing", origin=(1, 0, 0), rotation=(0, 90, 0), parts=[
            ScenePart("box", offset=(1, 0, 0), texture="a"),
            ScenePart("box", offset=(0, 1, 0), rotation=(90, 0, 0), texture="a"),
        ])
        sc = SceneConstructor(self.meshes, self.dispatcher, [assembly])
        parts = list(sc.iter_parts())

        _, _, position, rotation = parts[0]
        self.assertVecAlmostEqual(position, (1, 0, -1))
        self.assertEqual(rotation, (0, 90, 0))

        _, _, position, rotation = parts[1]
        self.assertVecAlmostEqual(position, (1, 1, 0))
        self.assertEqual(rotation, (90, 0, 0))

    def test_assemblies_render_in_order(self):
        first = Assembly("first", parts=[ScenePart("plane", texture="a")])
        second = Assembly("second", parts=[ScenePart("sphere", texture="b")])
        sc = SceneConstructor(self.meshes, self.dispatcher, [first, second])
        self.assertEqual([a.name for a, _, _, _ in sc.iter_parts()], ["first", "second"])

    def test_prepare_scene(self):
        texture_manager = MagicMock()
        material_manager = MagicMock()
        materials = [ObjectMaterial("desk")]
        sc = SceneConstructor(
            self.meshes,
            self.dispatcher,
            [],
            textures=[("desk_texture.jpg", "desk"), ("paper.jpg", "paper")],
            materials=materials,
            light_settings={"point": []},
            torus_thickness={"torus": 0.05},
        )
        sc.prepare_scene(texture_manager, material_manager, "/assets")

        material_manager.define_materials.assert_called_once_with(materials)
        self.assertEqual(texture_manager.register_texture.call_args_list, [
            call(os.path.join("/assets", "desk_texture.jpg"), "desk"),
            call(os.path.join("/assets", "paper.jpg"), "paper"),
        ])
        texture_manager.bind_textures.assert_called_once_with()
        self.dispatcher.set_lighting_enabled.assert_called_once_with(True)
        self.dispatcher.set_lights.assert_called_once_with({"point": []})
        self.meshes.load_all.assert_called_once_with({"torus": 0.05})


class TestDeskScene(unittest.TestCase):
    """
    Consistency checks over the static desk scene tables.
    """

    known_shapes = {
        "plane", "box", "box_side", "cone", "cylinder", "sphere", "torus", "extra_torus_1", "extra_torus_2"
    }

    def all_parts(self):
        return [part for assembly in scene_config.ASSEMBLIES for part in assembly.parts]

    def test_draw_order(self):
        self.assertEqual(
            [assembly.name for assembly in scene_config.ASSEMBLIES],
            ["platform", "cork_stopper", "book", "candle", "chest", "mug"],
        )

    def test_textures_fit_in_slots(self):
        self.assertEqual(len(scene_config.TEXTURES), 13)
        self.assertLessEqual(len(scene_config.TEXTURES), 16)

    def test_parts_reference_known_resources(self):
        texture_tags = {tag for _, tag in scene_config.TEXTURES}
        material_tags = {material.tag for material in scene_config.MATERIALS}
        for part in self.all_parts():
            with self.subTest(part=part):
                self.assertIn(part.shape, self.known_shapes)
                self.assertIn(part.material, material_tags)
                self.assertTrue((part.texture is None) != (part.color is None))
                if part.texture is not None:
                    self.assertIn(part.texture, texture_tags)

    def test_box_sides_name_real_faces(self):
        for part in self.all_parts():
            if part.shape == "box_side":
                BoxSide(part.draw_options["side"])


# --------------------------------------------------------------------------------
# Tests: Procedural Geometry
# --------------------------------------------------------------------------------
class TestShapeGeometry(unittest.TestCase):

    def test_vertex_layout(self):
        for mesh in [generate_plane(), generate_box(), generate_cone(), generate_cylinder(),
                     generate_sphere(), generate_torus()]:
            self.assertEqual(mesh.vertices.shape[1], FLOATS_PER_VERTEX)
            self.assertEqual(str(mesh.vertices.dtype), "float32")
            self.assertEqual(mesh.get_range("all"), (0, mesh.vertex_count))

    def test_plane_spans_unit_square(self):
        mesh = generate_plane()
        self.assertEqual(mesh.vertex_count, 6)
        self.assertEqual(mesh.vertices[:, 0].min(), -1.0)
        self.assertEqual(mesh.vertices[:, 2].max(), 1.0)
        self.assertTrue((mesh.vertices[:, 1] == 0.0).all())

    def test_box_face_ranges(self):
        mesh = generate_box()
        self.assertEqual(mesh.vertex_count, 36)
        for index, side in enumerate(BoxSide):
            self.assertEqual(mesh.get_range(side), (index * 6, 6))

        first, count = mesh.get_range(BoxSide.TOP)
        face = mesh.vertices[first:first + count]
        self.assertTrue((face[:, 1] == 0.5).all())
        self.assertTrue((face[:, 4] == 1.0).all())

    def test_cylinder_ranges_are_contiguous(self):
        mesh = generate_cylinder(segments=12)
        sides, top, bottom = mesh.get_range("sides"), mesh.get_range("top"), mesh.get_range("bottom")
        self.assertEqual(sides[0], 0)
        self.assertEqual(top[0], sides[0] + sides[1])
        self.assertEqual(bottom[0], top[0] + top[1])
        self.assertEqual(bottom[0] + bottom[1], mesh.vertex_count)
        self.assertEqual(mesh.vertices[:, 1].min(), 0.0)
        self.assertEqual(mesh.vertices[:, 1].max(), 1.0)

    def test_cone_apex(self):
        mesh = generate_cone(segments=8)
        self.assertAlmostEqual(float(mesh.vertices[:, 1].max()), 1.0)
        self.assertEqual(mesh.get_range("bottom")[1], 8 * 3)

    def test_sphere_radius(self):
        mesh = generate_sphere(stacks=6, slices=8)
        radii = (mesh.vertices[:, :3] ** 2).sum(axis=1) ** 0.5
        self.assertTrue(((radii > 0.999) & (radii < 1.001)).all())

    def test_torus_thickness(self):
        mesh = generate_torus(thickness=0.25, main_segments=8, tube_segments=8)
        self.assertAlmostEqual(float(mesh.vertices[:, 2].max()), 0.25, places=5)
        with self.assertRaises(ValueError):
            generate_torus(thickness=0.0)


if __name__ == "__main__":
    unittest.main()
