"""
Unit tests for the Result type (Ok, Err).
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shadercore.errors import MissingIncludeError
from shadercore.result import Err, Ok


class TestResultType:
    """Tests for Ok and Err result types."""

    def test_ok_is_ok(self):
        result = Ok("success")
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_err_is_err(self):
        result = Err("diagnostic")
        assert result.is_err() is True
        assert result.is_ok() is False

    def test_ok_unwrap(self):
        assert Ok(42).unwrap() == 42

    def test_err_unwrap_raises_carried_error(self):
        """unwrap() on an Err holding an exception raises that exception."""
        error = MissingIncludeError("a.glsl", "main.vert")
        with pytest.raises(MissingIncludeError):
            Err(error).unwrap()

    def test_err_unwrap_raises_runtime_error_for_strings(self):
        with pytest.raises(RuntimeError) as excinfo:
            Err("bad shader").unwrap()
        assert "bad shader" in str(excinfo.value)

    def test_err_str(self):
        assert str(Err("compile failed")) == "compile failed"
