"""
Unit tests for the optimizer boundary.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shadercore.errors import UnsupportedVersionError
from shadercore.models import Language, ShaderKind
from shadercore.optimize import GlslOptimizer, Optimizer, check_version


class TestCheckVersion:
    """Tests for version eligibility."""

    @pytest.mark.parametrize("version", ["110", "120"])
    def test_gl_tested_versions(self, version):
        assert check_version(Language.OPENGL, version).is_ok()

    def test_gl_untested_version(self):
        result = check_version(Language.OPENGL, "330 core", source_name="a.vert")
        assert result.is_err()
        assert isinstance(result.error, UnsupportedVersionError)
        assert result.error.source_name == "a.vert"

    def test_gl_allow_untested(self):
        assert check_version(Language.OPENGL, "330", allow_untested=True).is_ok()

    @pytest.mark.parametrize("lang", [Language.OPENGL_ES_20, Language.OPENGL_ES_30])
    def test_gles_versions(self, lang):
        assert check_version(lang, "100").is_ok()
        assert check_version(lang, "300 es").is_ok()
        assert check_version(lang, "120").is_err()

    def test_accepts_language_values(self):
        assert check_version("gles2", "100").is_ok()


class TestGlslOptimizer:
    """Tests for the glslopt subprocess driver."""

    def test_unknown_kind_passes_through(self):
        optimizer = GlslOptimizer(executable="/nonexistent/glslopt")
        result = optimizer.optimize("float x;", ShaderKind.UNKNOWN)
        assert result.unwrap() == "float x;"

    def test_missing_executable(self, monkeypatch):
        monkeypatch.delenv("GLSLOPT", raising=False)
        monkeypatch.setenv("PATH", "")
        result = GlslOptimizer().optimize("void main(){}", ShaderKind.VERTEX)
        assert result.is_err()
        assert "glslopt not found" in result.error

    def test_nonexistent_explicit_executable(self):
        result = GlslOptimizer(executable="/nonexistent/glslopt").optimize("void main(){}", ShaderKind.FRAGMENT)
        assert result.is_err()
        assert "not found" in result.error

    def test_env_discovery(self, monkeypatch, fake_glslopt):
        monkeypatch.setenv("GLSLOPT", fake_glslopt)
        assert GlslOptimizer().discover() == fake_glslopt

    def test_optimizes_vertex(self, fake_glslopt):
        optimizer = GlslOptimizer(Language.OPENGL, executable=fake_glslopt)
        result = optimizer.optimize("void main(){}", ShaderKind.VERTEX)
        assert result.unwrap().startswith("// glslopt -v -1\n")

    def test_target_flag_follows_language(self, fake_glslopt):
        optimizer = GlslOptimizer(Language.OPENGL_ES_30, executable=fake_glslopt)
        result = optimizer.optimize("void main(){}", ShaderKind.FRAGMENT)
        assert result.unwrap().startswith("// glslopt -f -3\n")

    def test_diagnostic_on_failure(self, fake_glslopt):
        optimizer = GlslOptimizer(executable=fake_glslopt)
        result = optimizer.optimize("BROKEN", ShaderKind.FRAGMENT)
        assert result.is_err()
        assert "syntax error" in result.error


class TestOptimizerInterface:
    """Custom optimizers plug in through the Optimizer base class."""

    def test_subclass(self):
        class Upper(Optimizer):
            def optimize(self, source, kind):
                from shadercore.result import Ok
                return Ok(source.upper())

        assert Upper().optimize("abc", ShaderKind.VERTEX).unwrap() == "ABC"

    def test_abstract(self):
        with pytest.raises(TypeError):
            Optimizer()
