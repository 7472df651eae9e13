# shaderpass/graphics/core/window.py
import logging
from typing import Tuple

import moderngl
import pygame

from shaderpass.graphics.core.settings import WindowSettings

logger = logging.getLogger(__name__)


class Window:
    """
    Owns the OS window and the OpenGL context whose default framebuffer is
    the "default surface" draw calls render to.
    """

    def __init__(self, settings: WindowSettings | None = None):
        self.settings = settings or WindowSettings()

        if not pygame.get_init():
            pygame.init()

        major, minor = self.settings.gl_version
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, major)
        pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, minor)
        pygame.display.gl_set_attribute(
            pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE
        )
        pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)

        flags = pygame.OPENGL | pygame.DOUBLEBUF
        if self.settings.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode(
            (self.settings.width, self.settings.height),
            flags,
            vsync=int(self.settings.vsync),
        )
        pygame.display.set_caption(self.settings.title)

        self.ctx = moderngl.create_context()

        version = self.ctx.version_code
        logger.info(
            "OpenGL context created: %s.%s", str(version)[0], str(version)[1:]
        )

    @property
    def size(self) -> Tuple[int, int]:
        w, h = self._screen.get_size()
        return (w, h)

    def handle_resize(self, event: pygame.event.Event) -> None:
        """Keep the default framebuffer viewport in step with the window."""
        if event.type != pygame.VIDEORESIZE:
            return
        w, h = self.size
        self.ctx.screen.viewport = (0, 0, w, h)
        logger.debug("Window resized to %dx%d", w, h)

    def present(self) -> None:
        pygame.display.flip()

    def destroy(self) -> None:
        pygame.quit()
