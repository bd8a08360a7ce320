"""
Generates the file id -> include name lookup module.

The generated module lets run-time code turn the file id in a driver error
message ("0(12) : error ...") back into the include that produced it.
"""

FILE_MAP_MODULE = "shader_map.py"


def render_file_map(registry) -> str:
    """Render Python source defining FILE_NAMES and id_to_file_name()."""
    lines = [
        '"""Generated by shaderpack. Maps #line file ids to include names."""',
        "",
        "FILE_NAMES = {",
    ]
    for file_id, name in registry.items():
        lines.append(f"    {file_id}: {name!r},")
    lines.append("}")
    lines.append("")
    lines.append("")
    lines.append("def id_to_file_name(file_id):")
    lines.append('    """Return the include name for a file id, or None if it is unknown."""')
    lines.append("    return FILE_NAMES.get(file_id)")
    return "\n".join(lines) + "\n"
