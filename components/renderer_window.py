import logging

import pygame
from OpenGL.GL import *

from components.input_controls import (
    CYCLE_ORTHO_VIEW,
    MOVE_BACKWARD,
    MOVE_DOWN,
    MOVE_FORWARD,
    MOVE_LEFT,
    MOVE_RIGHT,
    MOVE_UP,
    PERSPECTIVE_VIEW,
    FrameInput,
)

logger = logging.getLogger(__name__)

DEFAULT_KEY_BINDINGS = {
    MOVE_FORWARD: (pygame.K_w,),
    MOVE_BACKWARD: (pygame.K_s,),
    MOVE_LEFT: (pygame.K_a,),
    MOVE_RIGHT: (pygame.K_d,),
    MOVE_UP: (pygame.K_q,),
    MOVE_DOWN: (pygame.K_e,),
    PERSPECTIVE_VIEW: (pygame.K_p,),
    CYCLE_ORTHO_VIEW: (pygame.K_o,),
}


class WindowCreationError(RuntimeError):
    """The OpenGL window or context could not be created."""


class RendererWindow:
    """
    RendererWindow manages a Pygame-based OpenGL rendering window:
    - Window creation (with optional fullscreen, vsync, MSAA)
    - Event handling (closing, ESC key, mouse motion and wheel)
    - Sampling of held keys into a per-frame FrameInput
    - FPS title bar updates
    """

    def __init__(
            self,
            window_size=(1000, 800),
            title="Renderer",
            msaa_level=4,
            vsync_enabled=True,
            fullscreen=False,
            capture_mouse=True,
            key_bindings=None,
    ):
        """
        Initialize the window parameters and open the display.

        Args:
            window_size (tuple): (width, height) of the window.
            title (str): The title to display in the window bar.
            msaa_level (int): Level of MSAA anti-aliasing (0 disables it).
            vsync_enabled (bool): Whether to enable VSync (if supported).
            fullscreen (bool): If True, creates a fullscreen window.
            capture_mouse (bool): Hide and grab the cursor for mouse look.
            key_bindings (dict): Action name -> tuple of pygame key codes.

        Raises:
            WindowCreationError: If pygame cannot open an OpenGL display.
        """
        # ----------------------------------------------------------------------
        # Window and Rendering Config
        # ----------------------------------------------------------------------
        self.window_size = window_size
        self.title = title
        self.msaa_level = msaa_level
        self.vsync_enabled = vsync_enabled
        self.fullscreen = fullscreen
        self.capture_mouse = capture_mouse
        self.key_bindings = dict(key_bindings) if key_bindings else dict(DEFAULT_KEY_BINDINGS)

        # ----------------------------------------------------------------------
        # Internal State
        # ----------------------------------------------------------------------
        self.clock = None
        self.running = True
        self.should_close = False
        self.cursor_x = 0.0
        self.cursor_y = 0.0

        # ----------------------------------------------------------------------
        # Pygame Setup and OpenGL Initialization
        # ----------------------------------------------------------------------
        self.setup_pygame()
        self.clock = pygame.time.Clock()

    # --------------------------------------------------------------------------
    # Pygame and OpenGL Setup
    # --------------------------------------------------------------------------
    def setup_pygame(self):
        """
        Initialize Pygame, configure OpenGL attributes, and open the display.
        """
        pygame.init()
        self.configure_opengl_attributes()

        if self.fullscreen:
            # Match the desktop resolution for fullscreen
            desktop_info = pygame.display.Info()
            self.window_size = (desktop_info.current_w, desktop_info.current_h)

        display_flags = pygame.DOUBLEBUF | pygame.OPENGL
        if self.fullscreen:
            display_flags |= pygame.FULLSCREEN

        try:
            try:
                pygame.display.set_mode(
                    self.window_size,
                    display_flags,
                    vsync=1 if self.vsync_enabled else 0
                )
            except TypeError:
                # For older Pygame versions that do not support vsync argument
                pygame.display.set_mode(self.window_size, display_flags)
                logger.warning("VSync not supported by your Pygame version.")
        except pygame.error as e:
            logger.error(f"Failed to create the OpenGL window: {e}")
            pygame.quit()
            raise WindowCreationError(f"Failed to create the OpenGL window: {e}") from e

        pygame.display.set_caption(self.title)
        logger.info(f"Opened {self.window_size[0]}x{self.window_size[1]} window '{self.title}'")

        if self.capture_mouse:
            pygame.mouse.set_visible(False)
            pygame.event.set_grab(True)

        if self.msaa_level:
            glEnable(GL_MULTISAMPLE)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glViewport(0, 0, *self.window_size)

    def configure_opengl_attributes(self):
        """
        Request a core 3.3 context and configure multisampling.
        """
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE)
        if self.msaa_level:
            pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLEBUFFERS, 1)
            pygame.display.gl_set_attribute(pygame.GL_MULTISAMPLESAMPLES, self.msaa_level)

    # --------------------------------------------------------------------------
    # Window Title and FPS
    # --------------------------------------------------------------------------
    def draw_fps_in_title(self, fps):
        """
        Update the window title with FPS.

        Args:
            fps (float): Current frames per second.
        """
        pygame.display.set_caption(f"{self.title} - FPS: {fps:.2f}")

    # --------------------------------------------------------------------------
    # Timing
    # --------------------------------------------------------------------------
    def tick(self):
        """
        Advance the frame clock.

        Returns:
            float: Seconds elapsed since the previous tick.
        """
        return self.clock.tick() / 1000.0

    def get_fps(self):
        return self.clock.get_fps()

    # --------------------------------------------------------------------------
    # Event Handling
    # --------------------------------------------------------------------------
    def poll_input(self):
        """
        Drain the Pygame event queue and sample held keys.

        Mouse motion is accumulated into a virtual cursor from relative motion,
        so it keeps working while the cursor is grabbed.

        Returns:
            FrameInput: The input for this frame.
        """
        cursor_moved = False
        scroll_offset = 0.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.should_close = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.should_close = True
            elif event.type == pygame.MOUSEMOTION:
                self.cursor_x += event.rel[0]
                self.cursor_y += event.rel[1]
                cursor_moved = True
            elif event.type == pygame.MOUSEWHEEL:
                scroll_offset += event.y

        pressed = pygame.key.get_pressed()
        held_actions = [
            action for action, keys in self.key_bindings.items()
            if any(pressed[key] for key in keys)
        ]

        return FrameInput(
            held_actions=held_actions,
            cursor_position=(self.cursor_x, self.cursor_y) if cursor_moved else None,
            scroll_offset=scroll_offset,
            quit_requested=self.should_close,
        )

    # --------------------------------------------------------------------------
    # Display Handling
    # --------------------------------------------------------------------------
    def display_flip(self):
        """
        Swap the front and back buffers to display the newly rendered frame.
        """
        pygame.display.flip()

    # --------------------------------------------------------------------------
    # Shutdown and Cleanup
    # --------------------------------------------------------------------------
    def shutdown(self):
        """
        Release the cursor and quit Pygame.
        """
        self.running = False
        if self.capture_mouse:
            pygame.event.set_grab(False)
            pygame.mouse.set_visible(True)
        pygame.quit()
