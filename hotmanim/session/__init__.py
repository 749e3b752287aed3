"""Render sessions: command building, PTY lifecycle, artifact discovery."""

from .artifact import Artifact, ArtifactLocator, ArtifactSlot, locate_artifact
from .command import RenderCommand, Size, build_render_command, pty_size_for_viewport
from .pty_session import Renderer, SessionHandle, start_render

__all__ = [
    "Artifact",
    "ArtifactLocator",
    "ArtifactSlot",
    "RenderCommand",
    "Renderer",
    "SessionHandle",
    "Size",
    "build_render_command",
    "locate_artifact",
    "pty_size_for_viewport",
    "start_render",
]
