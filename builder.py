import sys
import os
import glob
import json
from typing import List, Optional

from pydantic import BaseModel, ValidationError

from shadercore.codegen import FILE_MAP_MODULE, render_file_map
from shadercore.errors import ConfigError, OptimizationError
from shadercore.includes import IncludeTable
from shadercore.models import Language, ShaderKind, ShaderSource
from shadercore.optimize import GlslOptimizer, check_version
from shadercore.registry import FileIdRegistry
from shadercore.scanner import Assembler

# Global verbose flag
_VERBOSE = False

DEFAULT_OUT_DIR = "__shaderpack_build__"
CONFIG_FILE = "shaderpack.json"


def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value


def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


def resolve_out_dir(out_dir=None):
    """Explicit directory, then $SHADERPACK_OUT_DIR, then the default build dir."""
    return out_dir or os.environ.get("SHADERPACK_OUT_DIR") or DEFAULT_OUT_DIR


def expand_pattern(pattern):
    """Files matching a glob pattern, sorted so builds are reproducible."""
    return sorted(p for p in glob.glob(pattern) if os.path.isfile(p))


# ==========================================
# PROJECT CONFIGURATION
# ==========================================

class ProjectConfig(BaseModel):
    """Contents of a shaderpack.json project file."""
    lang: Language = Language.OPENGL
    vertex: List[str] = []
    fragment: List[str] = []
    sources: List[str] = []
    includes: List[str] = []
    out_dir: Optional[str] = None
    preserve_line_info: bool = True
    optimize: bool = False
    allow_untested: bool = False
    optimizer: Optional[str] = None


def load_project_config(path=CONFIG_FILE):
    """Load and validate a project file. Relative globs are resolved against its directory."""
    if not os.path.exists(path):
        raise ConfigError(f"project file not found: {path}", source_name=path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON: {e.msg}", source_name=path, line_number=e.lineno)
    try:
        project = ProjectConfig(**data)
    except ValidationError as e:
        raise ConfigError(
            f"invalid project configuration: {e.errors()[0]['msg']}",
            source_name=path,
            suggestion="Check the field names and types in the project file",
        )

    base_dir = os.path.dirname(os.path.abspath(path))

    def rebase(patterns):
        return [p if os.path.isabs(p) else os.path.join(base_dir, p) for p in patterns]

    return project.model_copy(update={
        "vertex": rebase(project.vertex),
        "fragment": rebase(project.fragment),
        "sources": rebase(project.sources),
        "includes": rebase(project.includes),
        "out_dir": project.out_dir if project.out_dir is None or os.path.isabs(project.out_dir)
        else os.path.join(base_dir, project.out_dir),
    })


# ==========================================
# THE BUILDER
# ==========================================

class Config:
    """
    Build configuration for a set of shader sources.

    Example:
        Config(Language.OPENGL) \\
            .vertex("shaders/*.vert") \\
            .fragment("shaders/*.frag") \\
            .include("shaders/include/*") \\
            .build()
    """

    def __init__(self, lang=Language.OPENGL):
        self.lang = Language(lang)
        self.sources: List[ShaderSource] = []
        self.includes = IncludeTable()
        self.optimizer = None
        self.preserve_line_info = True
        self.allow_untested = False

    @classmethod
    def from_project(cls, project):
        """Create a Config from a ProjectConfig."""
        config = cls(project.lang)
        for pattern in project.vertex:
            config.vertex(pattern)
        for pattern in project.fragment:
            config.fragment(pattern)
        for pattern in project.sources:
            config.source(pattern)
        for pattern in project.includes:
            config.include(pattern)
        if not project.preserve_line_info:
            config.discard_line_info()
        if project.optimize:
            config.optimize(GlslOptimizer(project.lang, executable=project.optimizer))
        if project.allow_untested:
            config.allow_untested_versions()
        return config

    def vertex(self, pattern):
        """Add files matching pattern as vertex shader sources."""
        for path in expand_pattern(pattern):
            self.sources.append(ShaderSource.from_path(path, ShaderKind.VERTEX))
        return self

    def fragment(self, pattern):
        """Add files matching pattern as fragment shader sources."""
        for path in expand_pattern(pattern):
            self.sources.append(ShaderSource.from_path(path, ShaderKind.FRAGMENT))
        return self

    def source(self, pattern):
        """
        Add files matching pattern as shader sources. ".vert" and ".frag" files
        become vertex and fragment shaders; anything else is of unknown kind and
        is never optimized.
        """
        for path in expand_pattern(pattern):
            self.sources.append(ShaderSource.from_path(path))
        return self

    def add_source(self, source):
        """Add an already constructed ShaderSource."""
        self.sources.append(source)
        return self

    def include(self, pattern):
        """Add files matching pattern to the include table, keyed by file name."""
        self.includes = self.includes.merged(IncludeTable.from_paths(expand_pattern(pattern)))
        return self

    def add_include(self, name, text):
        """Add a single include table entry."""
        self.includes = self.includes.merged({name: text})
        return self

    def optimize(self, optimizer=None):
        """
        Optimize vertex and fragment shaders after assembly. Also implies
        discard_line_info(), as the optimizer does not keep comments anyway.
        """
        self.preserve_line_info = False
        self.optimizer = optimizer if optimizer is not None else GlslOptimizer(self.lang)
        return self

    def discard_line_info(self):
        """Strip comments and blank lines and skip the re-anchoring #line markers."""
        self.preserve_line_info = False
        return self

    def allow_untested_versions(self):
        """Let the optimizer try versions it is not known to support."""
        self.allow_untested = True
        return self

    def process_all(self, registry=None):
        """
        Assemble every source in order with one shared file id registry.

        Returns:
            (results, registry): list of ProcessResult and the FileIdRegistry

        Raises:
            ShaderBuildError: on the first failing source
        """
        registry = registry if registry is not None else FileIdRegistry()
        assembler = Assembler(
            self.includes,
            registry=registry,
            lang=self.lang,
            preserve_line_info=self.preserve_line_info,
        )

        results = []
        for shader_source in self.sources:
            debug_log(f"Processing {shader_source.name} ({shader_source.kind.value})")
            result = assembler.process(shader_source).unwrap()
            debug_log(f"Resolved {shader_source.name} to version {result.version}")
            results.append(self._optimize(result))
        return results, registry

    def _optimize(self, result):
        if self.optimizer is None:
            return result
        supported = check_version(self.lang, result.version, self.allow_untested, source_name=result.name)
        if supported.is_err():
            debug_log(f"Skipping optimization of {result.name}: {supported.error.message}")
            return result
        optimized = self.optimizer.optimize(result.text, result.kind)
        if optimized.is_err():
            raise OptimizationError(result.name, optimized.error)
        return result.model_copy(update={"text": optimized.value, "optimized": True})

    def build(self, out_dir=None):
        """
        Assemble every source and write the artifacts: one file per source under
        its logical name, plus the file id lookup module.

        Returns:
            list of ProcessResult
        """
        out_dir = resolve_out_dir(out_dir)
        results, registry = self.process_all()

        os.makedirs(out_dir, exist_ok=True)
        for result in results:
            target_file = os.path.join(out_dir, result.name)
            with open(target_file, 'w', encoding='utf-8') as f:
                f.write(result.text)
            debug_log(f"Wrote {target_file}")

        map_file = os.path.join(out_dir, FILE_MAP_MODULE)
        with open(map_file, 'w', encoding='utf-8') as f:
            f.write(render_file_map(registry))
        debug_log(f"Wrote {map_file} ({len(registry)} include ids)")

        return results


def load_shader(name, out_dir=None):
    """Read a generated shader artifact back by its logical name."""
    path = os.path.join(resolve_out_dir(out_dir), name)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
