# shaderpass/graphics/debug/dump.py
from __future__ import annotations

from typing import TYPE_CHECKING

import moderngl

if TYPE_CHECKING:
    from shaderpass.graphics.context import GLSLContext


def dump_context_state(
    context: GLSLContext,
    *,
    header: str = "SHADERPASS CONTEXT DUMP",
) -> None:
    """
    Print a snapshot of the context, its program cache and GL state.

    Safe to call at runtime. Intended for debugging black screens,
    uniforms that never arrive and programs that keep recompiling.
    """
    gl = context.ctx

    print("\n" + "=" * 80)
    print(header)
    print("=" * 80)

    # ------------------------------------------------------------------
    # Context info
    # ------------------------------------------------------------------

    print("\n[Context]")
    print(f"  GL Version      : {gl.version_code}")
    print(f"  Vendor          : {gl.info.get('GL_VENDOR', 'unknown')}")
    print(f"  Renderer        : {gl.info.get('GL_RENDERER', 'unknown')}")
    print(f"  Surface         : {context.surface}")
    print(f"  Elapsed (s)     : {context.clock.elapsed:.3f}")

    # ------------------------------------------------------------------
    # Built-in uniforms
    # ------------------------------------------------------------------

    print("\n[Built-in uniforms]")
    for name, value in context.builtin_uniforms().items():
        print(f"  {name:<16}: {value}")

    # ------------------------------------------------------------------
    # Program cache
    # ------------------------------------------------------------------

    key_mode = "concatenated" if context.programs.concatenated_keys else "pair"
    print("\n[Program cache]")
    print(f"  Entries         : {len(context.programs)}")
    print(f"  Key mode        : {key_mode}")

    for compiled in context.programs:
        prog = compiled.program
        print(f"\n  Program '{compiled.label}'")
        print(f"    Program id    : {id(prog)}")
        print(f"    Vertex chars  : {len(compiled.sources.vertex)}")
        print(f"    Fragment chars: {len(compiled.sources.fragment)}")

        try:
            members = list(prog)
            print(f"    Members       : {members}")
            for name in members:
                try:
                    member = prog[name]
                    if hasattr(member, "value"):
                        print(f"      {name} = {member.value}")
                except (KeyError, moderngl.Error) as e:
                    print(f"      {name} = <unreadable: {e}>")
        except moderngl.Error as e:
            print(f"    Member query failed: {e}")

    # ------------------------------------------------------------------
    # GL state that commonly breaks rendering
    # ------------------------------------------------------------------

    print("\n[GL State]")
    print(f"  Viewport       : {gl.viewport}")
    print(f"  Bound FBO      : {gl.fbo}")

    print("\n" + "=" * 80)
    print("END SHADERPASS CONTEXT DUMP")
    print("=" * 80 + "\n")
