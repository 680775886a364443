import logging
import os
import re

import glm
from OpenGL.GL import *

from config.path_config import shaders_dir

logger = logging.getLogger(__name__)

INCLUDE_PATTERN = re.compile(r'^#include\s+"([^"]+)"\s*$')

SHADER_STAGE_NAMES = {
    GL_VERTEX_SHADER: "vertex",
    GL_FRAGMENT_SHADER: "fragment",
}


class ShaderEngine:
    """
    ShaderEngine builds the scene's vertex/fragment program and is the sink for
    all named uniform writes:
    - Loads GLSL sources, resolving #include directives against a 'common' directory
    - Compiles and links, raising RuntimeError with the GL info log on failure
    - Caches uniform locations and exposes typed setters (mat4, vec2/3/4, float, int, bool, sampler2D)
    """
    def __init__(
        self,
        vertex_shader_path,
        fragment_shader_path,
        shader_base_dir=shaders_dir,
        common_dir_name="common",
    ):
        """
        Initialize the ShaderEngine.

        Args:
            vertex_shader_path (str): Vertex shader path, relative to `shader_base_dir`.
            fragment_shader_path (str): Fragment shader path, relative to `shader_base_dir`.
            shader_base_dir (str): Root of the shader tree.
            common_dir_name (str): Subdirectory searched for #include files not found locally.
        """
        self.shader_base_dir = shader_base_dir
        self.common_dir_name = common_dir_name
        self.uniform_locations = {}

        self.shader_program = None
        if vertex_shader_path or fragment_shader_path:
            self.shader_program = self.create_shader_program(vertex_shader_path, fragment_shader_path)

    # --------------------------------------------------------------------------
    # Program Lifetime
    # --------------------------------------------------------------------------
    def use_shader_program(self):
        if self.shader_program:
            glUseProgram(self.shader_program)

    def delete_shader_programs(self):
        """
        Delete the program and forget cached uniform locations.
        """
        if self.shader_program:
            glDeleteProgram(self.shader_program)
            self.shader_program = None
        self.uniform_locations.clear()

    # --------------------------------------------------------------------------
    # Uniform Setters
    # --------------------------------------------------------------------------
    def get_uniform_location(self, name):
        """
        Return the (cached) location of a uniform; -1 if the program does not use it.
        """
        location = self.uniform_locations.get(name)
        if location is None:
            location = glGetUniformLocation(self.shader_program, name)
            if location == -1:
                logger.debug(f"Uniform '{name}' is not active in the shader program")
            self.uniform_locations[name] = location
        return location

    def set_mat4(self, name, matrix):
        glUniformMatrix4fv(self.get_uniform_location(name), 1, GL_FALSE, glm.value_ptr(glm.mat4(matrix)))

    def set_vec2(self, name, value):
        glUniform2fv(self.get_uniform_location(name), 1, glm.value_ptr(glm.vec2(value)))

    def set_vec3(self, name, value):
        glUniform3fv(self.get_uniform_location(name), 1, glm.value_ptr(glm.vec3(value)))

    def set_vec4(self, name, value):
        glUniform4fv(self.get_uniform_location(name), 1, glm.value_ptr(glm.vec4(value)))

    def set_float(self, name, value):
        glUniform1f(self.get_uniform_location(name), float(value))

    def set_int(self, name, value):
        glUniform1i(self.get_uniform_location(name), int(value))

    def set_bool(self, name, value):
        glUniform1i(self.get_uniform_location(name), 1 if value else 0)

    def set_sampler2d(self, name, slot):
        glUniform1i(self.get_uniform_location(name), int(slot))

    # --------------------------------------------------------------------------
    # Building the Program
    # --------------------------------------------------------------------------
    def create_shader_program(self, vertex_shader_path, fragment_shader_path):
        """
        Compile each given stage and link them into one program.

        Raises:
            FileNotFoundError: If a shader or one of its includes is missing.
            RuntimeError: If compilation or linking fails.
        """
        stages = [
            (path, stage)
            for path, stage in ((vertex_shader_path, GL_VERTEX_SHADER), (fragment_shader_path, GL_FRAGMENT_SHADER))
            if path
        ]

        shaders = []
        try:
            for path, stage in stages:
                shaders.append(self._compile_shader(self._load_shader_code(path), stage))
            program = self._link_shader_program(shaders)
        finally:
            # Shaders are no longer needed once linked (or once linking is abandoned)
            for shader in shaders:
                glDeleteShader(shader)

        logger.info(f"Linked shader program from {', '.join(path for path, _ in stages)}")
        return program

    def _load_shader_code(self, shader_file):
        """
        Read a shader relative to the base directory with its #include directives expanded.
        """
        full_path = os.path.join(self.shader_base_dir, shader_file)
        if not os.path.isfile(full_path):
            raise FileNotFoundError(f"Shader file not found: {full_path}")
        return self._read_with_includes(full_path, ())

    def _read_with_includes(self, path, include_chain):
        real_path = os.path.realpath(path)
        if real_path in include_chain:
            raise RuntimeError(f"Recursive #include of {path}")

        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
        return self._process_includes(source, os.path.dirname(path), include_chain + (real_path,))

    def _process_includes(self, source, current_dir, include_chain=()):
        """
        Replace every #include "file" line with the file's (expanded) contents.

        Lookup order: `current_dir`, then `<shader_base_dir>/<common_dir_name>`.
        """
        expanded = []
        for line in source.split("\n"):
            stripped = line.strip()
            if not stripped.startswith("#include"):
                expanded.append(line)
                continue

            match = INCLUDE_PATTERN.match(stripped)
            if match is None:
                raise RuntimeError(f'Malformed #include directive: {stripped!r}. Use #include "filename"')

            include_name = match.group(1)
            candidates = [
                os.path.join(current_dir, include_name),
                os.path.join(self.shader_base_dir, self.common_dir_name, include_name),
            ]
            found = next((candidate for candidate in candidates if os.path.isfile(candidate)), None)
            if found is None:
                raise FileNotFoundError(f"Included shader '{include_name}' not found in: {', '.join(candidates)}")

            expanded.append(self._read_with_includes(found, include_chain))

        return "\n".join(expanded)

    def _compile_shader(self, source, shader_type):
        shader = glCreateShader(shader_type)
        glShaderSource(shader, source)
        glCompileShader(shader)

        if not glGetShaderiv(shader, GL_COMPILE_STATUS):
            info_log = glGetShaderInfoLog(shader)
            glDeleteShader(shader)
            stage_name = SHADER_STAGE_NAMES.get(shader_type, "unknown")
            raise RuntimeError(f"Error compiling {stage_name} shader: {_decode_log(info_log)}")
        return shader

    def _link_shader_program(self, shaders):
        program = glCreateProgram()
        for shader in shaders:
            glAttachShader(program, shader)
        glLinkProgram(program)

        if not glGetProgramiv(program, GL_LINK_STATUS):
            info_log = glGetProgramInfoLog(program)
            glDeleteProgram(program)
            raise RuntimeError(f"Error linking shader program: {_decode_log(info_log)}")
        return program


def _decode_log(info_log):
    if isinstance(info_log, bytes):
        return info_log.decode(errors="replace")
    return str(info_log)
