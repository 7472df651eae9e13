from shaderpass.graphics.utils.uniforms import (
    UniformDispatcher,
    find_uniform,
    pack_float,
    pack_mat3,
    pack_mat4,
    pack_vec2,
    pack_vec3,
    pack_vec4,
    set_sampler,
)

__all__ = [
    "UniformDispatcher",
    "find_uniform",
    "set_sampler",
    "pack_float",
    "pack_vec2",
    "pack_vec3",
    "pack_vec4",
    "pack_mat3",
    "pack_mat4",
]
