import logging

from OpenGL.GL import *
from PIL import Image

logger = logging.getLogger(__name__)

# Number of texture units the scene shader samples from.
MAX_TEXTURE_SLOTS = 16

# Sentinel returned by lookups for an unknown tag.
NOT_FOUND = -1

# Pillow modes whose bands map one-to-one onto uploaded channels.
CHANNELS_BY_MODE = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}

# Modes expanded to RGB/RGBA before upload. Palette images with transparency become RGBA.
CONVERTED_MODES = {"P": "RGB", "PA": "RGBA", "CMYK": "RGB"}


class TextureLoadError(RuntimeError):
    """Raised when an image file cannot be turned into texture data."""


class TextureEntry:
    """
    A texture that has been uploaded to the GPU.

    Attributes:
        tag (str): Lookup key used by the scene.
        handle (int): OpenGL texture name.
        slot (int): Texture unit index the texture is bound to.
    """

    __slots__ = ("tag", "handle", "slot")

    def __init__(self, tag, handle, slot):
        self.tag = tag
        self.handle = handle
        self.slot = slot

    def __repr__(self):
        return f"TextureEntry(tag={self.tag!r}, handle={self.handle}, slot={self.slot})"


def load_image_data(file_path):
    """
    Decode an image file into raw pixel bytes, flipped vertically so that the
    first row is the bottom of the image (OpenGL texture coordinate convention).

    Args:
        file_path (str): Path to the image.

    Palette and CMYK images are expanded to RGB (RGBA for transparent palettes).

    Returns:
        tuple: (pixel_bytes, width, height, channels)

    Raises:
        TextureLoadError: If the file is missing, cannot be decoded, or uses a
            mode without a plain 8-bit channel layout (YCbCr, LAB, I, F, ...).
    """
    try:
        with Image.open(file_path) as image:
            image.load()
            mode = image.mode
            if mode in CONVERTED_MODES:
                target = CONVERTED_MODES[mode]
                if mode == "P" and "transparency" in image.info:
                    target = "RGBA"
                image = image.convert(target)
            flipped = image.transpose(Image.FLIP_TOP_BOTTOM)
    except OSError as e:
        raise TextureLoadError(f"Could not load image: {file_path} ({e})") from e

    channels = CHANNELS_BY_MODE.get(flipped.mode)
    if channels is None:
        raise TextureLoadError(f"Unsupported image mode '{flipped.mode}': {file_path}")

    width, height = flipped.size
    return flipped.tobytes(), width, height, channels


class TextureManager:
    """
    Load-once registry of scene textures.

    Each registered texture gets the next free texture unit (slot = registration
    index). Lookups scan the entries in registration order and the first entry
    with a matching tag wins, so re-registering a tag never replaces the
    original texture; the later entry only occupies a slot.
    """

    def __init__(self, max_slots=MAX_TEXTURE_SLOTS):
        self.max_slots = max_slots
        self.entries = []

    def __len__(self):
        return len(self.entries)

    @property
    def texture_count(self):
        return len(self.entries)

    # --------------------------------------------------------------------------
    # Registration
    # --------------------------------------------------------------------------
    def register_texture(self, file_path, tag):
        """
        Decode an image, upload it as a mipmapped 2D texture and register it under `tag`.

        Only RGB and RGBA images are accepted. On any failure nothing is allocated
        and the tag stays unregistered.

        Args:
            file_path (str): Image file to load.
            tag (str): Lookup key for the texture.

        Returns:
            bool: True if the texture was registered.
        """
        if len(self.entries) >= self.max_slots:
            logger.error(f"Cannot register texture '{tag}': all {self.max_slots} texture slots are in use")
            return False

        try:
            image_data, width, height, channels = load_image_data(file_path)
        except TextureLoadError as e:
            logger.error(str(e))
            return False

        if channels == 3:
            internal_format, pixel_format = GL_RGB8, GL_RGB
        elif channels == 4:
            internal_format, pixel_format = GL_RGBA8, GL_RGBA
        else:
            logger.error(f"Not implemented to handle image with {channels} channels: {file_path}")
            return False

        logger.info(f"Loaded image {file_path}, width: {width}, height: {height}, channels: {channels}")

        texture_id = glGenTextures(1)
        glBindTexture(GL_TEXTURE_2D, texture_id)

        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_S, GL_REPEAT)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_WRAP_T, GL_REPEAT)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MIN_FILTER, GL_LINEAR)
        glTexParameteri(GL_TEXTURE_2D, GL_TEXTURE_MAG_FILTER, GL_LINEAR)

        # RGB rows are not 4-byte aligned for odd widths
        glPixelStorei(GL_UNPACK_ALIGNMENT, 1)
        glTexImage2D(
            GL_TEXTURE_2D, 0, internal_format, width, height, 0, pixel_format, GL_UNSIGNED_BYTE, image_data
        )
        glGenerateMipmap(GL_TEXTURE_2D)
        glBindTexture(GL_TEXTURE_2D, 0)

        self.entries.append(TextureEntry(tag, texture_id, len(self.entries)))
        return True

    # --------------------------------------------------------------------------
    # Lookup
    # --------------------------------------------------------------------------
    def _find_entry(self, tag):
        for entry in self.entries:
            if entry.tag == tag:
                return entry
        return None

    def find_texture_slot(self, tag):
        """
        Return the texture unit of the first texture registered under `tag`, or -1.
        """
        entry = self._find_entry(tag)
        if entry is None:
            logger.debug(f"Texture tag '{tag}' is not registered")
            return NOT_FOUND
        return entry.slot

    def find_texture_id(self, tag):
        """
        Return the OpenGL texture name of the first texture registered under `tag`, or -1.
        """
        entry = self._find_entry(tag)
        if entry is None:
            logger.debug(f"Texture tag '{tag}' is not registered")
            return NOT_FOUND
        return entry.handle

    # --------------------------------------------------------------------------
    # Binding and Teardown
    # --------------------------------------------------------------------------
    def bind_textures(self):
        """
        Bind every registered texture to the texture unit matching its slot.
        """
        for entry in self.entries:
            glActiveTexture(GL_TEXTURE0 + entry.slot)
            glBindTexture(GL_TEXTURE_2D, entry.handle)

    def destroy_textures(self):
        """
        Delete all registered textures from GPU memory and empty the registry.
        """
        if self.entries:
            handles = [entry.handle for entry in self.entries]
            glDeleteTextures(len(handles), handles)
            logger.debug(f"Deleted {len(handles)} textures")
        self.entries = []
