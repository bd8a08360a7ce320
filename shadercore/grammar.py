"""
Shader Directive Grammar.

This module contains the Lark grammar for the preprocessor directives the
assembler cares about: #version and #include. Any other line, including other
directives such as #define, is not matched and is treated as ordinary code.
"""
from lark import Lark

directive_grammar = r"""
    start: version_directive | include_directive

    // #version 120 / #version 300 es
    version_directive: "#" "version" VERSION_NUMBER [PROFILE]

    // #include "name" / #include <name>
    include_directive: "#" "include" (QUOTED_TARGET | ANGLED_TARGET)

    // --- Terminals ---
    VERSION_NUMBER: /\d+/
    PROFILE: /[A-Za-z_]\w*/
    QUOTED_TARGET: /"[^"\n]+"/
    ANGLED_TARGET: /<[^>\n]+>/

    %import common.WS_INLINE
    %ignore WS_INLINE
"""


def create_directive_parser():
    """Build the directive parser. Construct once per build and pass it along."""
    return Lark(directive_grammar, parser='lalr')
