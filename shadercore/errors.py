"""
Error types for the shaderpack preprocessor.

Every error here is fatal to the build that raised it. Inside the engine they
travel as Err(...) values; the builder and CLI raise and report them.
"""


class ShaderBuildError(Exception):
    """Base exception for shader build errors with source location and hints."""
    def __init__(self, message, source_name=None, line_number=None, context=None, suggestion=None):
        self.message = message
        self.source_name = source_name
        self.line_number = line_number
        self.context = context  # The offending line
        self.suggestion = suggestion  # How to fix it
        super().__init__(self._format_error())

    def _format_error(self):
        """Format the error message with location, context and suggestion."""
        lines = ["\n❌ Shader Build Error"]
        if self.source_name:
            lines.append(f" in \"{self.source_name}\"")
        if self.line_number:
            lines.append(f" at line {self.line_number}")
        lines.append(":\n")

        lines.append(f"   {self.message}\n")

        if self.context:
            lines.append(f"   > {self.context}\n")

        if self.suggestion:
            lines.append(f"   💡 {self.suggestion}\n")

        return "".join(lines)


class CycleError(ShaderBuildError):
    """An include name recurs within its own expansion path."""
    def __init__(self, include_name, source_name, stack=(), line_number=None, context=None):
        self.include_name = include_name
        self.stack = tuple(stack)
        chain = " -> ".join(self.stack + (include_name,))
        super().__init__(
            f"recursive inclusion of \"{include_name}\" in shader file \"{source_name}\" ({chain})",
            source_name=source_name,
            line_number=line_number,
            context=context,
            suggestion="Break the cycle by moving shared code into a separate include",
        )


class MissingIncludeError(ShaderBuildError):
    """An include directive names content absent from the include table."""
    def __init__(self, include_name, source_name, line_number=None, context=None):
        self.include_name = include_name
        super().__init__(
            f"shader file \"{source_name}\" includes non-existent file \"{include_name}\"",
            source_name=source_name,
            line_number=line_number,
            context=context,
            suggestion="Check the include name and that it is matched by an include pattern",
        )


class VersionMismatchError(ShaderBuildError):
    """A nested file's #version disagrees with the version inherited from its parent."""
    def __init__(self, include_name, found, expected, line_number=None, context=None):
        self.include_name = include_name
        self.found = found
        self.expected = expected
        super().__init__(
            f"included file \"{include_name}\" specifies version {found}, but parent specifies \"{expected}\"",
            source_name=include_name,
            line_number=line_number,
            context=context,
            suggestion=f"Remove the #version line from \"{include_name}\" or change it to {expected}",
        )


class UnsupportedVersionError(ShaderBuildError):
    """The resolved version is not eligible for optimization under the target language."""
    def __init__(self, version, lang, source_name=None):
        self.version = version
        self.lang = lang
        super().__init__(
            f"version {version} is untested with the optimizer for target '{getattr(lang, 'value', lang)}'",
            source_name=source_name,
            suggestion="Use allow_untested_versions() to optimize it anyway",
        )


class OptimizationError(ShaderBuildError):
    """The optimizer rejected an assembled shader."""
    def __init__(self, source_name, diagnostic):
        self.diagnostic = diagnostic
        super().__init__(
            f"optimization error for shader source \"{source_name}\": {diagnostic}",
            source_name=source_name,
        )


class ConfigError(ShaderBuildError):
    """Invalid build configuration or project file."""
