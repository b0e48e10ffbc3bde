from __future__ import annotations


class EngineError(Exception):
    """Base class for errors raised by the host engine collaborators."""


class SceneGraphFailure(EngineError, RuntimeError):
    """Attach/detach rejected by the scene graph. Fatal for the frame."""
