# ==========================================
# OPTIMIZER DRIVERS
# ==========================================
"""
Optional post-processing of assembled shaders.

The optimizer is an opaque collaborator: it takes assembled text plus the
shader kind and returns Ok(optimized text) or Err(diagnostic string).
"""
import os
import shutil
import subprocess
import tempfile
from abc import ABC, abstractmethod

from shadercore.errors import UnsupportedVersionError
from shadercore.models import TESTED_VERSIONS, Language, ShaderKind
from shadercore.result import Err, Ok, Result


def check_version(lang, version, allow_untested=False, source_name=None) -> Result:
    """
    Decide whether a resolved version may be optimized for the target language.

    Returns Ok(version), or Err(UnsupportedVersionError) when the version is
    untested and allow_untested is not set. An Err only means "skip optimizing".
    """
    lang = Language(lang)
    number = version.split()[0] if version else version
    if allow_untested or number in TESTED_VERSIONS[lang]:
        return Ok(version)
    return Err(UnsupportedVersionError(version, lang, source_name=source_name))


class Optimizer(ABC):
    """Abstract base class for shader optimizers."""

    @abstractmethod
    def optimize(self, source: str, kind: ShaderKind) -> Result:
        pass


class GlslOptimizer(Optimizer):
    """Driver for the glsl-optimizer command-line tool (glslopt)."""

    TARGET_FLAGS = {
        Language.OPENGL: "-1",
        Language.OPENGL_ES_20: "-2",
        Language.OPENGL_ES_30: "-3",
    }
    KIND_FLAGS = {
        ShaderKind.VERTEX: "-v",
        ShaderKind.FRAGMENT: "-f",
    }

    def __init__(self, lang=Language.OPENGL, executable=None, timeout=60):
        self.lang = Language(lang)
        self.executable = executable
        self.timeout = timeout

    def discover(self):
        """Find the glslopt executable: explicit path, $GLSLOPT, then PATH."""
        if self.executable:
            return self.executable
        env_path = os.environ.get("GLSLOPT")
        if env_path:
            return env_path
        return shutil.which("glslopt")

    def optimize(self, source: str, kind: ShaderKind) -> Result:
        kind = ShaderKind(kind)
        if kind == ShaderKind.UNKNOWN:
            # Only vertex and fragment shaders can be optimized
            return Ok(source)

        executable = self.discover()
        if not executable:
            return Err("glslopt not found. Install glsl-optimizer or point GLSLOPT to its executable.")

        with tempfile.TemporaryDirectory() as tmpdir:
            in_path = os.path.join(tmpdir, "input.glsl")
            out_path = os.path.join(tmpdir, "output.glsl")
            with open(in_path, 'w', encoding='utf-8') as f:
                f.write(source)

            cmd = [executable, self.KIND_FLAGS[kind], self.TARGET_FLAGS[self.lang], in_path, out_path]
            try:
                proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
            except FileNotFoundError:
                return Err(f"optimizer executable not found: {executable}")
            except subprocess.TimeoutExpired:
                return Err(f"optimizer timed out after {self.timeout}s")

            if proc.returncode != 0 or not os.path.exists(out_path):
                diagnostic = (proc.stderr or proc.stdout).strip()
                return Err(diagnostic or f"glslopt exited with status {proc.returncode}")

            with open(out_path, 'r', encoding='utf-8') as f:
                return Ok(f.read())
