"""
Assembler for shader sources.

Recursively replaces '#include "name"' / '#include <name>' lines with the text
of the named include, like a C preprocessor restricted to inclusion. Along the
way it strips comments for classification, reconciles #version directives
across the inclusion tree and emits '#line <line> <file id>' markers so the
driver's compile errors still point at the original file and line.
"""
import re
from typing import Optional

from shadercore.directives import DirectiveReader, IncludeDirective, VersionDirective
from shadercore.errors import CycleError, MissingIncludeError, VersionMismatchError
from shadercore.includes import IncludeTable
from shadercore.models import DEFAULT_VERSIONS, Language, ProcessResult, ShaderSource
from shadercore.registry import FileIdRegistry
from shadercore.result import Err, Ok, Result

# Block comments closed on the same line, and line comments
LINE_COMMENT_RE = re.compile(r"/\*.*?\*/|//.*")

TOP_LEVEL_FILE_ID = 0


def split_lines(text):
    """Split text into lines, dropping '\\r' endings and the final empty line."""
    lines = text.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def line_marker(line_number, file_id):
    return f"#line {line_number} {file_id}"


class Assembler:
    """
    Expands includes for top-level shader sources.

    One Assembler serves a whole build session: its FileIdRegistry is shared by
    every source processed through it, in processing order. The inclusion stack
    and version state live only inside a single process() call.
    """

    def __init__(self, includes=None, registry=None, lang=Language.OPENGL,
                 preserve_line_info=True, reader=None):
        """
        Args:
            includes: IncludeTable (or plain mapping) of include name -> text
            registry: FileIdRegistry to share; a new one is created if None
            lang: target language, selects the default #version
            preserve_line_info: keep comments, blank lines and #line markers
            reader: DirectiveReader to reuse; a new one is created if None
        """
        if includes is None:
            includes = IncludeTable()
        elif not isinstance(includes, IncludeTable):
            includes = IncludeTable(includes)
        self.includes = includes
        self.registry = registry if registry is not None else FileIdRegistry()
        self.lang = Language(lang)
        self.preserve_line_info = preserve_line_info
        self._reader = reader if reader is not None else DirectiveReader()

    @property
    def default_version(self) -> str:
        return DEFAULT_VERSIONS[self.lang]

    def process(self, source, text=None) -> Result:
        """
        Assemble one top-level source.

        Args:
            source: ShaderSource (or a plain logical name)
            text: raw text; read from the source if None

        Returns:
            Ok(ProcessResult) or Err(ShaderBuildError)
        """
        if not isinstance(source, ShaderSource):
            source = ShaderSource(name=str(source), text=text)
        if text is None:
            text = source.read()

        expanded = self._expand(source.name, text.rstrip(), (), TOP_LEVEL_FILE_ID, None)
        if expanded.is_err():
            return expanded
        output, version, _ = expanded.value
        return Ok(ProcessResult(name=source.name, kind=source.kind, text=output, version=version))

    def _expand(self, name, source, stack, file_id, inherited_version) -> Result:
        """
        Assemble one level of the inclusion tree.

        Args:
            name: name of the text being scanned (for error messages)
            source: raw text
            stack: tuple of include names on the current path, empty at top level
            file_id: id used in this level's #line markers
            inherited_version: parent's resolved version, None at top level

        Returns:
            Ok((text, version, has_body)) or Err(error); has_body is False when
            nothing but the leading marker would be emitted
        """
        preserve = self.preserve_line_info
        output = []

        # True while inside a block comment opened on an earlier line
        block_comment = False
        # True until the first significant line has been seen
        first_line = True
        version: Optional[str] = inherited_version
        first_line_num = 1

        for index, line in enumerate(split_lines(source)):
            # Comment text closed on this line, kept when the line itself is consumed
            closed_comment = ""
            if block_comment:
                end = line.find("*/")
                if end < 0:
                    if preserve:
                        output.append(line)
                    continue
                block_comment = False
                closed_comment = line[:end + 2]
                remainder = line[end + 2:]
            else:
                remainder = line

            code = LINE_COMMENT_RE.sub("", remainder)
            start = code.find("/*")
            if start >= 0:
                block_comment = True
                code = code[:start]

            blank = not code.strip()
            directive = None if blank else self._reader.read(code)

            if blank:
                if not preserve:
                    continue
            elif first_line:
                first_line = False
                if isinstance(directive, VersionDirective):
                    found = directive.version
                    if inherited_version is not None and found != inherited_version:
                        return Err(VersionMismatchError(
                            name, found, inherited_version,
                            line_number=index + 1, context=line.strip(),
                        ))
                    version = found
                    if preserve and index > 0:
                        # Keep the line count: the consumed #version becomes a placeholder
                        reopen = " /*" if block_comment else ""
                        output.append((closed_comment + reopen).strip())
                    else:
                        first_line_num = 2
                    continue
                if version is None:
                    version = self.default_version

            if not preserve and stack and isinstance(directive, VersionDirective):
                continue

            if not isinstance(directive, IncludeDirective):
                output.append(line if preserve else code)
                continue

            target = directive.target
            if target not in self.includes:
                return Err(MissingIncludeError(target, name, line_number=index + 1, context=line.strip()))
            if target in stack:
                return Err(CycleError(target, name, stack, line_number=index + 1, context=line.strip()))

            include_id = self.registry.resolve(target)
            expanded = self._expand(target, self.includes[target], stack + (target,), include_id, version)
            if expanded.is_err():
                return expanded
            include_text, _, include_has_body = expanded.value

            if preserve:
                if closed_comment:
                    output.append(closed_comment)
                output.append(include_text)
                output.append(line_marker(index + 2, file_id))
                if block_comment:
                    # The include line opened a block comment; reopen it after the marker
                    output.append("/*")
            elif include_has_body:
                output.append(include_text)

        if version is None:
            version = self.default_version

        has_body = bool("\n".join(output).strip())
        text = "\n".join([line_marker(first_line_num, file_id)] + output).rstrip()
        if not stack:
            text = f"#version {version}\n{text}"
        return Ok((text, version, has_body))


def preprocess(source_code, includes=None, lang=Language.OPENGL, preserve_line_info=True,
               name="<source>", registry=None) -> ProcessResult:
    """
    Assemble a single source string, raising on error.

    Args:
        source_code: top-level shader text
        includes: mapping of include name -> text
        lang: target language
        preserve_line_info: keep comments/blank lines and emit re-anchoring markers
        name: logical name used in error messages
        registry: optional FileIdRegistry to share between calls

    Returns:
        ProcessResult with the assembled text and resolved version

    Raises:
        CycleError, MissingIncludeError, VersionMismatchError
    """
    assembler = Assembler(includes, registry=registry, lang=lang, preserve_line_info=preserve_line_info)
    return assembler.process(ShaderSource(name=name, text=source_code)).unwrap()
