import logging
import sys

from components.renderer_config import RendererConfig
from components.renderer_instancing import RenderingInstance
from components.renderer_window import WindowCreationError
from utils.log_setup import setup_logging

logger = logging.getLogger(__name__)


def main():
    config = RendererConfig(
        window_title="Desk Scene",
        window_size=(1000, 800),
        fov=80.0,
        near_plane=0.1,
        far_plane=100.0,
        debug_mode=False,
        log_level="INFO",
    )
    setup_logging(config.log_level)

    instance = RenderingInstance(config)
    try:
        instance.run()
    except WindowCreationError:
        logger.critical("Could not open the render window, exiting.")
        return 1
    return 0


if __name__ == "__main__":
    """
    Entry point to launch the desk scene renderer.
    """
    sys.exit(main())
