"""
Static description of the desk scene: textures, materials, lights and the
assemblies drawn each frame, in draw order.

Offsets are in each assembly's local frame and turn with its rotation.
"""

from components.material_manager import ObjectMaterial
from components.scene_constructor import Assembly, ScenePart

# ------------------------------------------------------------------------------
# Textures (file under assets/, tag)
# ------------------------------------------------------------------------------
TEXTURES = [
    ("desk_texture.jpg", "desk"),
    ("cork_stopper.jpg", "cork_stopper"),
    ("black_rubber.jpg", "rubber"),
    ("book_fabric.jpg", "book_fabric"),
    ("paper.jpg", "paper"),
    ("chest.jpg", "chest"),
    ("leather.jpg", "leather"),
    ("chest_top.jpg", "chest_top"),
    ("leather_seam.jpg", "leather_seam"),
    ("metal_dark.jpg", "metal_dark"),
    ("metal_mug.jpg", "metal_mug"),
    ("metal_mug_body.jpg", "metal_mug_body"),
    ("tile.jpg", "tile_wall"),
]

# ------------------------------------------------------------------------------
# Materials
# ------------------------------------------------------------------------------
MATERIALS = [
    ObjectMaterial("desk", ambient_color=0.25, ambient_strength=0.15, diffuse_color=0.55,
                   specular_color=0.1, shininess=0.05),
    ObjectMaterial("rubber", ambient_color=0.05, ambient_strength=0.2, diffuse_color=0.1,
                   specular_color=0.05, shininess=0.02),
    ObjectMaterial("metal", ambient_color=0.2, ambient_strength=0.1, diffuse_color=0.4,
                   specular_color=0.9, shininess=64.0),
    ObjectMaterial("book_fabric", ambient_color=0.15, ambient_strength=0.2, diffuse_color=0.3,
                   specular_color=0.05, shininess=0.1),
    ObjectMaterial("paper", ambient_color=0.2, ambient_strength=0.3, diffuse_color=0.8,
                   specular_color=0.1, shininess=0.05),
    ObjectMaterial("glass", ambient_color=0.4, ambient_strength=0.3, diffuse_color=0.3,
                   specular_color=0.6, shininess=85.0),
    ObjectMaterial("leather", ambient_color=(0.22, 0.14, 0.10), ambient_strength=0.25,
                   diffuse_color=(0.45, 0.28, 0.18), specular_color=(0.08, 0.05, 0.04), shininess=1.0),
    ObjectMaterial("tile", ambient_color=(0.25, 0.25, 0.45), ambient_strength=0.25,
                   diffuse_color=(0.4, 0.5, 0.6), specular_color=(0.1, 0.15, 0.2), shininess=6.0),
]

# ------------------------------------------------------------------------------
# Lights
# ------------------------------------------------------------------------------
LIGHTS = {
    "directional": {
        "direction": (-0.3, -1.0, -0.4),
        "ambient": (0.20, 0.18, 0.17),
        "diffuse": (0.2, 0.2, 0.2),
        "specular": (0.4, 0.4, 0.4),
        "active": True,
    },
    "point": [
        {
            "position": (5.0, 12.0, 8.0),
            "ambient": (0.28, 0.25, 0.26),
            "diffuse": (0.35, 0.35, 0.35),
            "specular": (0.3, 0.3, 0.3),
            "active": True,
        },
    ],
    # Follows the camera; pose is written every frame by the view manager.
    "spot": {
        "ambient": (0.0, 0.0, 0.0),
        "diffuse": (1.0, 1.0, 1.0),
        "specular": (1.0, 1.0, 1.0),
        "active": False,
    },
}

# Tube radius of each torus mesh variant.
TORUS_THICKNESS = {
    "torus": 0.05,
    "extra_torus_1": 0.1,
    "extra_torus_2": 0.061,
}

GLASS_COLOR = (0.3, 0.3, 0.4, 0.6)
THREAD_COLOR = (0.3, 0.3, 0.4, 0.8)


def box_sides(scale, offset, material, sides):
    """
    One part per visible box face.

    Args:
        sides (list): (side, texture tag, uv scale) in draw order.
    """
    return [
        ScenePart("box_side", scale=scale, offset=offset, texture=texture, material=material,
                  uv_scale=uv_scale, draw_options={"side": side})
        for side, texture, uv_scale in sides
    ]


def chest_front_strip(x):
    lower = ScenePart("box", scale=(0.75, 3.5, 0.1), offset=(x, 1.75, 1.8), texture="leather",
                      material="leather", uv_scale=(0.75, 5.5))
    upper = box_sides((0.75, 2.0, 0.1), (x, 4.5, 1.8), "leather", [
        ("left", "leather_seam", (2.0, 1.0)),
        ("right", "leather_seam", (2.0, 1.0)),
        ("front", "leather_seam", (4.5, 1.0)),
        ("back", "leather", (4.5, 1.0)),
        ("top", "leather", (4.5, 1.0)),
    ])
    return [lower] + upper


# ------------------------------------------------------------------------------
# Assemblies
# ------------------------------------------------------------------------------
PLATFORM = Assembly("platform", parts=[
    ScenePart("plane", scale=(35.0, 1.0, 12.0), offset=(0.0, 0.0, 2.0), texture="desk",
              material="desk", uv_scale=(10.0, 4.0)),
    # Backdrop wall
    ScenePart("plane", scale=(35.0, 1.0, 12.0), offset=(0.0, 2.0, -10.0), rotation=(90.0, 0.0, 0.0),
              texture="tile_wall", material="metal", uv_scale=(10.0, 4.0)),
])

CORK_STOPPER = Assembly("cork_stopper", origin=(2.0, 0.0, 0.0), parts=[
    ScenePart("extra_torus_1", scale=(0.3, 0.3, 0.3), offset=(0.0, 0.35, 0.0), rotation=(90.0, 0.0, 0.0),
              texture="rubber", material="rubber", uv_scale=(0.64, 0.64)),
    ScenePart("extra_torus_1", scale=(0.24, 0.24, 0.24), offset=(0.0, 0.65, 0.0), rotation=(90.0, 0.0, 0.0),
              texture="rubber", material="rubber", uv_scale=(0.55, 0.55)),
    ScenePart("cone", scale=(0.4, 2.0, 0.4), texture="cork_stopper", material="metal", uv_scale=(1.0, 2.0)),
])

BOOK = Assembly("book", origin=(7.0, 0.6, 0.0), rotation=(0.0, -25.0, 0.0), parts=[
    # Back cover
    ScenePart("box", scale=(6.0, 0.2, 9.0), offset=(0.0, -0.5, 0.0), texture="book_fabric",
              material="book_fabric", uv_scale=(1.0, 3.0)),
    # Front cover
    ScenePart("box", scale=(6.0, 0.2, 9.0), offset=(0.0, 0.5, 0.0), texture="book_fabric",
              material="book_fabric", uv_scale=(1.0, 3.0)),
    # Binding
    ScenePart("box", scale=(0.2, 1.2, 9.0), offset=(-3.0, 0.0, 0.0), texture="book_fabric",
              material="book_fabric", uv_scale=(1.0, 3.0)),
    # Pages
    ScenePart("box", scale=(5.8, 0.8, 8.8), texture="paper", material="paper", uv_scale=(1.0, 3.0)),
])

CANDLE = Assembly("candle", origin=(7.0, 0.6, 0.0), parts=[
    # Wax
    ScenePart("cylinder", scale=(1.1, 2.0, 1.1), offset=(0.0, 0.6, 0.0), color=(1.0, 0.1, 0.3, 1.0),
              material="glass"),
    # Lower glass
    ScenePart("cylinder", scale=(1.2, 0.3, 1.2), offset=(0.0, 0.6, 0.0), color=GLASS_COLOR, material="glass",
              draw_options={"draw_top": True, "draw_bottom": False, "draw_sides": True}),
    # Label
    ScenePart("cylinder", scale=(1.2, 1.4, 1.2), offset=(0.0, 0.9, 0.0), texture="paper", material="paper",
              uv_scale=(1.2, 1.4), draw_options={"draw_top": False, "draw_bottom": False, "draw_sides": True}),
    # Wick
    ScenePart("cylinder", scale=(0.05, 0.4, 0.05), offset=(0.0, 2.6, 0.0), texture="rubber",
              material="book_fabric", draw_options={"draw_top": True, "draw_bottom": False, "draw_sides": True}),
    # Upper glass
    ScenePart("cylinder", scale=(1.2, 0.8, 1.2), offset=(0.0, 2.3, 0.0), color=GLASS_COLOR, material="glass",
              draw_options={"draw_top": True, "draw_bottom": False, "draw_sides": True}),
    # Neck
    ScenePart("cylinder", scale=(1.0, 0.4, 1.0), offset=(0.0, 3.1, 0.0), color=GLASS_COLOR, material="glass",
              draw_options={"draw_top": False, "draw_bottom": False, "draw_sides": True}),
    # Threads
    ScenePart("torus", scale=(1.05, 1.05, 0.3), offset=(0.0, 3.2, 0.0), rotation=(90.0, 0.0, 0.0),
              color=THREAD_COLOR, material="glass"),
    ScenePart("torus", scale=(1.05, 1.05, 0.3), offset=(0.0, 3.3, 0.0), rotation=(90.0, 0.0, 0.0),
              color=THREAD_COLOR, material="glass"),
])

CHEST = Assembly("chest", origin=(-3.0, 0.0, -2.0), rotation=(0.0, 15.0, 0.0), parts=[
    # Base
    ScenePart("box", scale=(9.0, 3.5, 3.5), offset=(0.0, 1.75, 0.0), texture="chest", material="desk",
              uv_scale=(4.5, 1.0)),
    # Lid
    *box_sides((9.0, 2.0, 3.5), (0.0, 4.5, 0.0), "desk", [
        ("left", "chest_top", (2.0, 1.0)),
        ("right", "chest_top", (2.0, 1.0)),
        ("front", "chest_top", (4.5, 1.0)),
        ("back", "chest_top", (4.5, 1.0)),
        ("top", "chest", (4.5, 1.0)),
    ]),
    # Leather straps
    *chest_front_strip(-2.0),
    *chest_front_strip(2.0),
    ScenePart("box", scale=(0.75, 0.1, 3.6), offset=(2.0, 5.55, 0.05), texture="leather", material="leather",
              uv_scale=(0.75, 3.6)),
    ScenePart("box", scale=(0.75, 0.1, 3.6), offset=(-2.0, 5.55, 0.05), texture="leather", material="leather",
              uv_scale=(0.75, 3.6)),
    # Latch plates
    ScenePart("box", scale=(1.75, 0.3, 0.1), offset=(0.0, 3.75, 1.8), texture="metal_dark", material="metal",
              uv_scale=(1.75, 0.3)),
    ScenePart("box", scale=(1.75, 0.3, 0.1), offset=(0.0, 3.25, 1.8), texture="metal_dark", material="metal",
              uv_scale=(1.75, 0.3)),
    # Lock
    ScenePart("box", scale=(0.5, 0.1, 0.1), offset=(0.0, 3.75, 1.9), texture="cork_stopper", material="metal"),
    ScenePart("box", scale=(0.25, 0.1, 0.1), offset=(0.125, 3.25, 1.9), texture="cork_stopper", material="metal"),
    ScenePart("box", scale=(0.1, 0.4, 0.1), offset=(0.2, 3.5, 1.9), texture="cork_stopper", material="metal"),
])

MUG = Assembly("mug", origin=(-7.0, 0.0, 3.0), parts=[
    # Outer body
    ScenePart("cylinder", scale=(1.6, 3.4, 1.6), rotation=(0.0, 145.0, 0.0), texture="metal_mug_body",
              material="metal", draw_options={"draw_top": False, "draw_bottom": False, "draw_sides": True}),
    # Inner body
    ScenePart("cylinder", scale=(1.4, 3.0, 1.4), offset=(0.0, 0.4, 0.0), rotation=(0.0, 145.0, 0.0),
              texture="metal_mug", material="metal",
              draw_options={"draw_top": False, "draw_bottom": True, "draw_sides": True}),
    # Rim
    ScenePart("cylinder", scale=(1.6, 0.2, 1.6), offset=(0.0, 3.4, 0.0), rotation=(0.0, 145.0, 0.0),
              texture="cork_stopper", material="metal",
              draw_options={"draw_top": False, "draw_bottom": False, "draw_sides": True}),
    ScenePart("extra_torus_2", scale=(1.5, 1.5, 1.1), offset=(0.0, 3.6, 0.0), rotation=(90.0, 0.0, 90.0),
              texture="cork_stopper", material="metal"),
    # Handle
    ScenePart("box", scale=(0.5, 0.1, 1.3), offset=(-1.5, 2.9, 1.5), rotation=(0.0, -45.0, 0.0),
              texture="metal_mug", material="metal"),
    ScenePart("box", scale=(0.5, 0.1, 1.3), offset=(-1.5, 0.8, 1.5), rotation=(0.0, -45.0, 0.0),
              texture="metal_mug", material="metal"),
    ScenePart("box", scale=(0.5, 2.0, 0.1), offset=(-1.925, 1.85, 1.925), rotation=(0.0, -45.0, 0.0),
              texture="metal_mug", material="metal"),
])

ASSEMBLIES = [PLATFORM, CORK_STOPPER, BOOK, CANDLE, CHEST, MUG]
