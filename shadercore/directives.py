"""
Directive recognition - turns directive parse trees into values.

The scanner hands every comment-stripped line that starts with '#' to a
DirectiveReader, which either returns a VersionDirective / IncludeDirective or
None for anything else.
"""
from typing import NamedTuple, Optional, Union

from lark import Transformer
from lark.exceptions import UnexpectedInput

from shadercore.grammar import create_directive_parser


class VersionDirective(NamedTuple):
    number: str
    profile: Optional[str] = None

    @property
    def version(self) -> str:
        """Canonical version string: number plus profile when present."""
        if self.profile:
            return f"{self.number} {self.profile}"
        return self.number


class IncludeDirective(NamedTuple):
    target: str
    angled: bool = False


Directive = Union[VersionDirective, IncludeDirective]


class DirectiveTransformer(Transformer):
    """Transforms directive parse trees into directive values."""

    def start(self, items):
        return items[0]

    def version_directive(self, args):
        number, profile = args
        return VersionDirective(str(number), str(profile) if profile is not None else None)

    def include_directive(self, args):
        token = args[0]
        # Strip the surrounding quotes or angle brackets
        return IncludeDirective(str(token)[1:-1], angled=token.type == 'ANGLED_TARGET')


class DirectiveReader:
    """Classifies single source lines as #version, #include or neither."""

    def __init__(self, parser=None):
        self._parser = parser if parser is not None else create_directive_parser()
        self._transformer = DirectiveTransformer()

    def read(self, line) -> Optional[Directive]:
        """Return the directive on a comment-free line, or None if it is not one."""
        stripped = line.strip()
        if not stripped.startswith('#'):
            return None
        try:
            tree = self._parser.parse(stripped)
        except UnexpectedInput:
            # Some other directive (#define, #ifdef, ...) or malformed text
            return None
        return self._transformer.transform(tree)
