"""
Unit tests for the directive grammar and DirectiveReader.
"""
import os
import sys

import pytest
from lark import Lark
from lark.exceptions import UnexpectedInput

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shadercore.directives import DirectiveReader, IncludeDirective, VersionDirective
from shadercore.grammar import directive_grammar, create_directive_parser


@pytest.fixture
def parser():
    """Create a parser instance for testing."""
    return Lark(directive_grammar, parser='lalr')


@pytest.fixture
def reader():
    return DirectiveReader(create_directive_parser())


class TestDirectiveParsing:
    """Tests for raw grammar parsing."""

    def test_version(self, parser):
        tree = parser.parse('#version 120')
        assert tree is not None

    def test_version_with_profile(self, parser):
        tree = parser.parse('#version 300 es')
        assert tree is not None

    def test_quoted_include(self, parser):
        tree = parser.parse('#include "common.glsl"')
        assert tree is not None

    def test_angled_include(self, parser):
        tree = parser.parse('#include <lib/common.glsl>')
        assert tree is not None

    def test_spacing_after_hash(self, parser):
        tree = parser.parse('#   include "common.glsl"')
        assert tree is not None

    def test_define_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('#define FOO 1')

    def test_version_without_number_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('#version')

    def test_include_without_target_rejected(self, parser):
        with pytest.raises(UnexpectedInput):
            parser.parse('#include common.glsl')


class TestDirectiveReader:
    """Tests for DirectiveReader.read()."""

    def test_reads_version(self, reader):
        directive = reader.read('#version 120')
        assert directive == VersionDirective("120")
        assert directive.version == "120"

    def test_reads_version_profile(self, reader):
        directive = reader.read('  #version 330 core  ')
        assert directive == VersionDirective("330", "core")
        assert directive.version == "330 core"

    def test_reads_quoted_include(self, reader):
        directive = reader.read('#include "common.glsl"')
        assert directive == IncludeDirective("common.glsl", angled=False)

    def test_reads_angled_include(self, reader):
        directive = reader.read('\t#include <noise/simplex.glsl>')
        assert directive == IncludeDirective("noise/simplex.glsl", angled=True)

    def test_code_line_is_not_a_directive(self, reader):
        assert reader.read('float x = 1.0;') is None

    def test_other_directive_is_not_matched(self, reader):
        assert reader.read('#ifdef GL_ES') is None
        assert reader.read('#extension GL_OES_standard_derivatives : enable') is None

    def test_trailing_garbage_is_not_an_include(self, reader):
        assert reader.read('#include "a.glsl" junk') is None

    def test_empty_line(self, reader):
        assert reader.read('') is None
