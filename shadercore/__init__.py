# shaderpack - Core Preprocessor Components
"""
Core modules for the shaderpack preprocessor:
- models: Languages, shader kinds, sources and results
- result: Ok / Err values used to propagate errors
- errors: Error taxonomy (cycles, missing includes, version conflicts, ...)
- grammar: Lark grammar for #version / #include directive lines
- directives: Directive recognition on single lines
- includes: Include table
- registry: File id registry shared across a build session
- scanner: The include-expanding assembler
- optimize: Optional optimizer collaborator
- codegen: File id lookup module generation
"""

from .errors import (
    ShaderBuildError,
    CycleError,
    MissingIncludeError,
    VersionMismatchError,
    UnsupportedVersionError,
    OptimizationError,
    ConfigError,
)
from .models import Language, ShaderKind, ShaderSource, ProcessResult
from .result import Result, Ok, Err
from .includes import IncludeTable
from .registry import FileIdRegistry
from .scanner import Assembler, preprocess
from .optimize import Optimizer, GlslOptimizer, check_version
from .codegen import render_file_map

__all__ = [
    'ShaderBuildError',
    'CycleError',
    'MissingIncludeError',
    'VersionMismatchError',
    'UnsupportedVersionError',
    'OptimizationError',
    'ConfigError',
    'Language',
    'ShaderKind',
    'ShaderSource',
    'ProcessResult',
    'Result',
    'Ok',
    'Err',
    'IncludeTable',
    'FileIdRegistry',
    'Assembler',
    'preprocess',
    'Optimizer',
    'GlslOptimizer',
    'check_version',
    'render_file_map',
]
