# ------------------------------------------------------------------------------
# Imports
# ------------------------------------------------------------------------------
import logging
import time

from OpenGL.GL import *

from components.material_manager import MaterialManager
from components.renderer_window import RendererWindow
from components.scene_constructor import SceneConstructor
from components.shader_engine import ShaderEngine
from components.shape_meshes import ShapeMeshes
from components.texture_manager import TextureManager
from components.uniform_dispatcher import UniformDispatcher
from components.view_manager import ViewManager
from config import scene_config
from utils.gl_utils import check_gl_error

logger = logging.getLogger(__name__)

CLEAR_COLOR = (0.0, 0.0, 0.0, 1.0)


class RenderingInstance:
    """
    RenderingInstance coordinates all rendering activities:
      - Window creation and management
      - Shader program, resource registries and uniform dispatch
      - Scene preparation and per-frame rendering
      - Main loop and updates (FPS, events)
    """

    # --------------------------------------------------------------------------
    # Initialization
    # --------------------------------------------------------------------------
    def __init__(self, config, assemblies=None):
        """
        Initialize the RenderingInstance with a given configuration.

        Args:
            config: A RendererConfig object containing various rendering options.
            assemblies: Scene assemblies to draw; defaults to the desk scene.
        """
        # --- Primary Configuration ---
        self.config = config
        self.assemblies = assemblies if assemblies is not None else scene_config.ASSEMBLIES

        # --- Window/Context & Runtime State ---
        self.render_window = None
        self.running = False

        # --- Rendering Components ---
        self.shader_engine = None
        self.texture_manager = None
        self.material_manager = None
        self.uniform_dispatcher = None
        self.shape_meshes = None
        self.scene_construct = None
        self.view_manager = None

    # --------------------------------------------------------------------------
    # Setup and Lifecycle Methods
    # --------------------------------------------------------------------------
    def setup(self):
        """
        Set up the rendering instance:
          - Create the window
          - Build the shader program and the resource registries
          - Prepare the scene and the view
        """
        # 1) Create the main window
        self.render_window = RendererWindow(
            window_size=self.config.window_size,
            title=self.config.window_title,
            msaa_level=self.config.msaa_level,
            vsync_enabled=self.config.vsync_enabled,
            fullscreen=self.config.fullscreen,
            capture_mouse=self.config.capture_mouse,
        )

        # 2) Shader program
        self.shader_engine = ShaderEngine(
            self.config.get_shader_path("vertex"),
            self.config.get_shader_path("fragment"),
            shader_base_dir=self.config.shader_root,
        )
        self.shader_engine.use_shader_program()
        check_gl_error("shader program setup", self.config.debug_mode)

        # 3) Registries and uniform dispatch
        self.texture_manager = TextureManager()
        self.material_manager = MaterialManager()
        self.uniform_dispatcher = UniformDispatcher(
            self.shader_engine, self.texture_manager, self.material_manager
        )

        # 4) Scene
        self.shape_meshes = ShapeMeshes(self.shader_engine)
        self.scene_construct = SceneConstructor(
            self.shape_meshes,
            self.uniform_dispatcher,
            self.assemblies,
            textures=scene_config.TEXTURES,
            materials=scene_config.MATERIALS,
            light_settings=scene_config.LIGHTS,
            torus_thickness=scene_config.TORUS_THICKNESS,
        )
        self.scene_construct.prepare_scene(self.texture_manager, self.material_manager, self.config.assets_path)
        check_gl_error("scene preparation", self.config.debug_mode)

        # 5) View
        self.view_manager = ViewManager(
            self.uniform_dispatcher, self.config, window_size=self.render_window.window_size
        )

        glClearColor(*CLEAR_COLOR)

    def run(self):
        """
        Start the main rendering loop. Collect FPS and handle events.
        """
        # 1) Perform initial setup
        self.setup()

        # 2) Begin the main loop
        self.running = True

        # --- FPS Tracking ---
        fps_update_interval = 1.0  # seconds
        last_fps_update_time = time.time()
        fps_accumulator = 0.0
        fps_frame_count = 0

        # 3) Main Loop
        try:
            while self.running:
                # Update delta time (in seconds)
                delta_time = self.render_window.tick()

                frame_input = self.render_window.poll_input()
                if frame_input.quit_requested:
                    self.running = False
                    break

                # Clear screen
                glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

                # Camera first, then the scene it looks at
                self.view_manager.prepare_scene_view(frame_input, delta_time)
                self.scene_construct.render_scene()
                check_gl_error("render_scene", self.config.debug_mode)

                # Gather FPS data
                fps_accumulator += self.render_window.get_fps()
                fps_frame_count += 1

                current_time = time.time()
                if current_time - last_fps_update_time >= fps_update_interval:
                    average_fps = fps_accumulator / fps_frame_count
                    self.render_window.draw_fps_in_title(average_fps)
                    # Reset FPS tracking
                    fps_accumulator = 0.0
                    fps_frame_count = 0
                    last_fps_update_time = current_time

                # Update display
                self.render_window.display_flip()
        finally:
            # 4) Shutdown once loop finishes or is broken
            self.shutdown()

    def shutdown(self):
        """
        Clean up the rendering instance:
          - Release textures, meshes and shader programs
          - Close the window (OpenGL context)
        """
        self.running = False

        if self.texture_manager:
            self.texture_manager.destroy_textures()
        if self.shape_meshes:
            self.shape_meshes.shutdown()
        if self.shader_engine:
            self.shader_engine.delete_shader_programs()

        if self.render_window:
            self.render_window.shutdown()
            self.render_window = None
        logger.info("Renderer shut down")
