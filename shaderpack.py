import argparse
import sys
import os
import json

from builder import (
    CONFIG_FILE,
    Config,
    ProjectConfig,
    load_project_config,
    resolve_out_dir,
    set_verbose,
)
from shadercore.errors import ShaderBuildError
from shadercore.models import Language, ShaderSource
from shadercore.scanner import Assembler

LANG_CHOICES = [lang.value for lang in Language]


def log(message):
    """Log informational messages to stderr."""
    print(f"\033[92m\033[1mINFO:\033[0m {message}", file=sys.stderr)


def fail(message):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def make_config(args):
    """Build a Config from the project file (if any) and command-line overrides."""
    config_path = args.config or CONFIG_FILE
    if args.config or os.path.exists(config_path):
        project = load_project_config(config_path)
        log(f"Loaded {config_path}")
    else:
        project = ProjectConfig()

    if args.lang:
        project = project.model_copy(update={"lang": Language(args.lang)})
    project = project.model_copy(update={
        "vertex": project.vertex + (args.vertex or []),
        "fragment": project.fragment + (args.fragment or []),
        "sources": project.sources + (args.source or []),
        "includes": project.includes + (args.include or []),
        "preserve_line_info": project.preserve_line_info and not args.discard_line_info,
        "optimize": project.optimize or args.optimize,
        "allow_untested": project.allow_untested or args.allow_untested,
        "out_dir": args.out or project.out_dir,
    })
    return Config.from_project(project), project.out_dir


def cmd_build(args):
    """Assemble all configured shader sources into the output directory."""
    try:
        config, out_dir = make_config(args)
    except ShaderBuildError as e:
        fail(str(e))

    if not config.sources:
        fail("No shader sources matched. Use --vertex/--fragment/--source or a project file.")

    out_dir = resolve_out_dir(out_dir)
    log(f"Building {len(config.sources)} shader(s) with {len(config.includes)} include(s)...")
    try:
        results = config.build(out_dir)
    except ShaderBuildError as e:
        fail(f"Build Failed:\n{e}")

    for result in results:
        suffix = " (optimized)" if result.optimized else ""
        log(f"  {result.name}: version {result.version}{suffix}")
    log(f"📁 Output directory: {out_dir}")


def cmd_expand(args):
    """Assemble a single file and print the result to stdout."""
    if args.filename == "-":
        source = ShaderSource(name="<stdin>", text=sys.stdin.read())
    elif not os.path.exists(args.filename):
        fail(f"File '{args.filename}' not found.")
    else:
        source = ShaderSource.from_path(args.filename)

    config = Config(args.lang or Language.OPENGL)
    for pattern in args.include or []:
        config.include(pattern)

    assembler = Assembler(config.includes, lang=config.lang,
                          preserve_line_info=not args.discard_line_info)
    result = assembler.process(source)
    if result.is_err():
        fail(f"Expansion Failed:\n{result.error}")
    print(result.value.text)


def cmd_init(args):
    log("Initializing project...")
    os.makedirs(os.path.join("shaders", "include"), exist_ok=True)
    with open(os.path.join("shaders", "include", "common.glsl"), "w") as f:
        f.write("uniform float u_time;\n\nfloat pulse() {\n    return abs(sin(u_time));\n}\n")
    with open(os.path.join("shaders", "sprite.vert"), "w") as f:
        f.write('#version 120\n#include "common.glsl"\n\nattribute vec2 position;\n\n'
                'void main() {\n    gl_Position = vec4(position * pulse(), 0.0, 1.0);\n}\n')
    with open(os.path.join("shaders", "sprite.frag"), "w") as f:
        f.write('#version 120\n#include "common.glsl"\n\n'
                'void main() {\n    gl_FragColor = vec4(pulse());\n}\n')
    with open(CONFIG_FILE, "w") as f:
        json.dump({
            "lang": "gl",
            "vertex": ["shaders/*.vert"],
            "fragment": ["shaders/*.frag"],
            "includes": ["shaders/include/*.glsl"],
        }, f, indent=2)
    log(f"Created {CONFIG_FILE} and shaders/")


def main(argv=None):
    parser = argparse.ArgumentParser(description="shaderpack: GLSL #include preprocessor")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    subparsers = parser.add_subparsers(dest="command")

    build = subparsers.add_parser("build", help="Assemble shader sources into the output directory")
    build.add_argument("--config", help=f"Project file (default: {CONFIG_FILE} if present)")
    build.add_argument("--lang", choices=LANG_CHOICES, help="Target language")
    build.add_argument("--vertex", action="append", help="Glob pattern of vertex shaders")
    build.add_argument("--fragment", action="append", help="Glob pattern of fragment shaders")
    build.add_argument("--source", action="append", help="Glob pattern of shaders (kind from extension)")
    build.add_argument("--include", action="append", help="Glob pattern of include files")
    build.add_argument("--out", help="Output directory (default: $SHADERPACK_OUT_DIR or __shaderpack_build__)")
    build.add_argument("--discard-line-info", action="store_true", help="Strip comments, blank lines and #line re-anchoring")
    build.add_argument("--optimize", action="store_true", help="Run glslopt on vertex and fragment shaders")
    build.add_argument("--allow-untested", action="store_true", help="Optimize untested language versions too")

    expand = subparsers.add_parser("expand", help="Print one assembled shader to stdout")
    expand.add_argument("filename", nargs="?", default="-", help="Shader file (default: read from stdin)")
    expand.add_argument("--include", action="append", help="Glob pattern of include files")
    expand.add_argument("--lang", choices=LANG_CHOICES, help="Target language")
    expand.add_argument("--discard-line-info", action="store_true", help="Strip comments and blank lines")

    subparsers.add_parser("init", help="Create a sample project")

    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    if args.command == "build": cmd_build(args)
    elif args.command == "expand": cmd_expand(args)
    elif args.command == "init": cmd_init(args)
    else: parser.print_help()


if __name__ == "__main__":
    main()
