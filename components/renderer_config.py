import copy
import os

from config.path_config import assets_dir, shaders_dir

VALID_MSAA_LEVELS = (0, 2, 4, 8, 16)
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RendererConfig:
    """
    RendererConfig stores all major configuration options for the rendering process:
    - Window properties
    - Camera and projection settings
    - Input tuning (movement speed, mouse sensitivity, scroll)
    - Shader and asset locations
    - Debug mode and logging
    """

    def __init__(
        self,
            # ------------------------------------------------------------------------------
            # Window/Runtime Settings
            # ------------------------------------------------------------------------------
        window_title="Desk Scene",
        window_size=(1000, 800),
        vsync_enabled=True,
        fullscreen=False,
        msaa_level=4,

            # ------------------------------------------------------------------------------
            # Camera / Projection Settings
            # ------------------------------------------------------------------------------
        fov=80.0,
        near_plane=0.1,
        far_plane=100.0,
        ortho_extent=10.0,

            # ------------------------------------------------------------------------------
            # Input Settings
            # ------------------------------------------------------------------------------
        movement_speed=2.5,
        mouse_sensitivity=0.1,
        scroll_step=0.1,
        min_movement_speed=1.0,
        max_movement_speed=50.0,
        capture_mouse=True,

            # ------------------------------------------------------------------------------
            # Shaders and Assets
            # ------------------------------------------------------------------------------
        shader_names=None,
        assets_path=assets_dir,
        shader_root=shaders_dir,

            # ------------------------------------------------------------------------------
            # Debug / Logging
            # ------------------------------------------------------------------------------
        debug_mode=False,
        log_level="INFO",
    ):
        """
        Initialize the RendererConfig with various settings.
        """
        # ------------------------------------------------------------------------------
        # Window/Runtime
        # ------------------------------------------------------------------------------
        self.window_title = window_title
        self.window_size = tuple(window_size)
        self.vsync_enabled = vsync_enabled
        self.fullscreen = fullscreen
        self.msaa_level = msaa_level

        # ------------------------------------------------------------------------------
        # Camera / Projection
        # ------------------------------------------------------------------------------
        self.fov = fov
        self.near_plane = near_plane
        self.far_plane = far_plane
        self.ortho_extent = ortho_extent

        # ------------------------------------------------------------------------------
        # Input
        # ------------------------------------------------------------------------------
        self.movement_speed = movement_speed
        self.mouse_sensitivity = mouse_sensitivity
        self.scroll_step = scroll_step
        self.min_movement_speed = min_movement_speed
        self.max_movement_speed = max_movement_speed
        self.capture_mouse = capture_mouse

        # ------------------------------------------------------------------------------
        # Shaders and Assets
        # ------------------------------------------------------------------------------
        self.shader_names = dict(shader_names) if shader_names else {"vertex": "scene", "fragment": "scene"}
        self.assets_path = assets_path
        self.shader_root = shader_root

        # ------------------------------------------------------------------------------
        # Debug / Logging
        # ------------------------------------------------------------------------------
        self.debug_mode = debug_mode
        self.log_level = log_level.upper() if isinstance(log_level, str) else log_level

        self._validate_config()

        # Placeholder for external shader references
        self.shaders = {}

        # Attempt to discover known shaders
        self.discover_shaders()

    @property
    def aspect_ratio(self):
        width, height = self.window_size
        return width / height

    def discover_shaders(self):
        """
        Populate self.shaders by scanning the shader root directory.
        This function looks for vertex and fragment subdirectories, each
        containing a <type>.glsl file, and returns the resulting mapping.
        """
        shader_root = os.path.abspath(self.shader_root)
        if not os.path.exists(shader_root):
            raise FileNotFoundError(f"The shader root directory '{shader_root}' does not exist.")

        for shader_type in ["vertex", "fragment"]:
            type_path = os.path.join(shader_root, shader_type)
            if not os.path.exists(type_path):
                continue

            for shader_dir in sorted(os.listdir(type_path)):
                dir_path = os.path.join(type_path, shader_dir)
                shader_file_path = os.path.join(dir_path, f"{shader_type}.glsl")
                if os.path.exists(shader_file_path):
                    if shader_type not in self.shaders:
                        self.shaders[shader_type] = {}
                    self.shaders[shader_type][shader_dir] = shader_file_path

        return self.shaders

    def get_shader_path(self, shader_type):
        """
        Path of the configured shader of `shader_type`, relative to the shader root.
        """
        name = self.shader_names[shader_type]
        if name not in self.shaders.get(shader_type, {}):
            raise FileNotFoundError(f"No {shader_type} shader named '{name}' under {self.shader_root}")
        return os.path.join(shader_type, name, f"{shader_type}.glsl")

    def unpack(self):
        """
        Unpack the configuration into a dictionary.
        Returns a deep copy so mutations won't affect this config.
        """
        return copy.deepcopy(self.__dict__)

    def _validate_config(self):
        """
        Private method to validate configuration options.
        Raises ValueError if invalid options or combinations are detected.
        """
        if len(self.window_size) != 2 or any(
            not isinstance(dimension, int) or dimension <= 0 for dimension in self.window_size
        ):
            raise ValueError("Invalid window_size. Must be two positive integers (width, height).")

        if self.msaa_level not in VALID_MSAA_LEVELS:
            raise ValueError(
                "Invalid msaa_level option. "
                f"Use one of: {', '.join(str(level) for level in VALID_MSAA_LEVELS)}."
            )

        if not (0.0 < self.fov < 180.0):
            raise ValueError("Invalid fov value. Must be between 0 and 180 degrees.")

        if self.near_plane <= 0.0:
            raise ValueError("Invalid near_plane value. Must be positive.")

        if self.far_plane <= self.near_plane:
            raise ValueError("Invalid far_plane value. Must be greater than near_plane.")

        if self.ortho_extent <= 0.0:
            raise ValueError("Invalid ortho_extent value. Must be positive.")

        if self.min_movement_speed <= 0.0 or self.max_movement_speed < self.min_movement_speed:
            raise ValueError("Invalid movement speed bounds. Need 0 < min_movement_speed <= max_movement_speed.")

        if not (self.min_movement_speed <= self.movement_speed <= self.max_movement_speed):
            raise ValueError(
                f"Invalid movement_speed value. Must be between {self.min_movement_speed} "
                f"and {self.max_movement_speed}."
            )

        if self.mouse_sensitivity <= 0.0:
            raise ValueError("Invalid mouse_sensitivity value. Must be positive.")

        if self.scroll_step < 0.0:
            raise ValueError("Invalid scroll_step value. Must not be negative.")

        missing = {"vertex", "fragment"} - set(self.shader_names)
        if missing:
            raise ValueError(f"Invalid shader_names. Missing: {', '.join(sorted(missing))}.")

        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError("Invalid log_level option. Use one of: " + ", ".join(VALID_LOG_LEVELS) + ".")
