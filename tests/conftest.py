"""
Shared fixtures.
"""
import os
import stat
import sys
import textwrap

import pytest

FAKE_GLSLOPT = textwrap.dedent('''\
    import sys

    kind, target, in_path, out_path = sys.argv[1:5]
    with open(in_path) as f:
        source = f.read()
    if "BROKEN" in source:
        sys.stderr.write("0:3(1): error: syntax error\\n")
        sys.exit(1)
    with open(out_path, "w") as f:
        f.write("// glslopt " + kind + " " + target + "\\n" + source)
''')


@pytest.fixture
def fake_glslopt(tmp_path):
    """An executable standing in for glsl-optimizer's glslopt tool."""
    path = tmp_path / "glslopt"
    path.write_text(f"#!{sys.executable}\n" + FAKE_GLSLOPT)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def shader_tree(tmp_path):
    """A small shader project on disk."""
    root = tmp_path / "shaders"
    (root / "include").mkdir(parents=True)
    (root / "include" / "common.glsl").write_text("uniform float u_time;\n")
    (root / "include" / "light.glsl").write_text('#include "common.glsl"\nvec3 light() { return vec3(u_time); }\n')
    (root / "sprite.vert").write_text('#version 120\n#include "common.glsl"\nvoid main() { gl_Position = vec4(u_time); }\n')
    (root / "sprite.frag").write_text('#version 120\n#include "light.glsl"\nvoid main() { gl_FragColor = vec4(light(), 1.0); }\n')
    (root / "util.glsl").write_text('// shared helpers\nfloat util() { return 1.0; }\n')
    return root
