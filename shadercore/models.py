"""
Data types shared by the shaderpack preprocessor.
"""
import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Language(str, Enum):
    """Shading-language dialect targeted by a build."""
    OPENGL = "gl"
    OPENGL_ES_20 = "gles2"
    OPENGL_ES_30 = "gles3"


# Version assumed when a top-level source has no #version directive
DEFAULT_VERSIONS = {
    Language.OPENGL: "110",
    Language.OPENGL_ES_20: "100",
    Language.OPENGL_ES_30: "100",
}

# Versions glsl-optimizer is known to handle
TESTED_VERSIONS = {
    Language.OPENGL: ("110", "120"),
    Language.OPENGL_ES_20: ("100", "300"),
    Language.OPENGL_ES_30: ("100", "300"),
}


class ShaderKind(str, Enum):
    """Pipeline stage of a shader source."""
    VERTEX = "vertex"
    FRAGMENT = "fragment"
    UNKNOWN = "unknown"

    @classmethod
    def from_path(cls, path):
        """Guess the kind from the file extension (.vert / .frag)."""
        ext = os.path.splitext(str(path))[1].lower()
        if ext == ".vert":
            return cls.VERTEX
        if ext == ".frag":
            return cls.FRAGMENT
        return cls.UNKNOWN


class ShaderSource(BaseModel):
    """A top-level shader unit: logical name, kind and where its text comes from."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ShaderKind = ShaderKind.UNKNOWN
    path: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_path(cls, path, kind=None):
        path = str(path)
        return cls(
            name=os.path.basename(path),
            kind=kind if kind is not None else ShaderKind.from_path(path),
            path=path,
        )

    def read(self) -> str:
        """Return the raw source text, reading it from disk if not preloaded."""
        if self.text is not None:
            return self.text
        if self.path is None:
            raise ValueError(f"shader source '{self.name}' has neither text nor path")
        with open(self.path, 'r', encoding='utf-8') as f:
            return f.read()


class ProcessResult(BaseModel):
    """Assembled output for one top-level source."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: ShaderKind = ShaderKind.UNKNOWN
    text: str
    version: str
    optimized: bool = False
