"""
Per-frame input snapshot and debouncing for discrete controls.

Controls come in two kinds:
  - continuous: sampled every frame and applied while held (camera movement)
  - discrete: fire once per press and re-arm only after the key is seen released
    (projection toggles); each one owns a KeyToggle.
"""

# ------------------------------------------------------------------------------
# Action Names
# ------------------------------------------------------------------------------
MOVE_FORWARD = "move_forward"
MOVE_BACKWARD = "move_backward"
MOVE_LEFT = "move_left"
MOVE_RIGHT = "move_right"
MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
PERSPECTIVE_VIEW = "perspective_view"
CYCLE_ORTHO_VIEW = "cycle_ortho_view"

CONTINUOUS_ACTIONS = (MOVE_FORWARD, MOVE_BACKWARD, MOVE_LEFT, MOVE_RIGHT, MOVE_UP, MOVE_DOWN)
DISCRETE_ACTIONS = (PERSPECTIVE_VIEW, CYCLE_ORTHO_VIEW)


class FrameInput:
    """
    Immutable snapshot of the input delivered for one frame.

    Attributes:
        held_actions (frozenset): Actions whose keys are down this frame.
        cursor_position (tuple): (x, y) cursor position, or None if the cursor did not move.
        scroll_offset (float): Vertical scroll units since the last frame.
        quit_requested (bool): The window was asked to close.
    """

    __slots__ = ("held_actions", "cursor_position", "scroll_offset", "quit_requested")

    def __init__(self, held_actions=(), cursor_position=None, scroll_offset=0.0, quit_requested=False):
        object.__setattr__(self, "held_actions", frozenset(held_actions))
        object.__setattr__(self, "cursor_position", cursor_position)
        object.__setattr__(self, "scroll_offset", float(scroll_offset))
        object.__setattr__(self, "quit_requested", quit_requested)

    def __setattr__(self, name, value):
        raise AttributeError("FrameInput is immutable")

    def is_held(self, action):
        return action in self.held_actions

    def __repr__(self):
        return (
            f"FrameInput(held_actions={sorted(self.held_actions)}, cursor_position={self.cursor_position}, "
            f"scroll_offset={self.scroll_offset}, quit_requested={self.quit_requested})"
        )


class KeyToggle:
    """
    Edge detector for one discrete control.

    update() reports True only on the first frame a key is seen down; holding the
    key does nothing further until it has been observed released.
    """

    def __init__(self):
        self.pressed = False

    def update(self, is_down):
        if is_down and not self.pressed:
            self.pressed = True
            return True
        if not is_down:
            self.pressed = False
        return False
