from __future__ import annotations

def _pick_glsl_version(ctx_version_code: int) -> int:
    """Pick a GLSL version compatible with the active OpenGL context.

    - For OpenGL >= 3.3: use GLSL 330
    - Otherwise: GLSL 150 (OpenGL 3.2)
    """
    if ctx_version_code >= 330:
        return 330
    return 150

_LINE_VERT_BODY = """
in vec3 in_pos;
in vec3 in_color;

uniform mat4 u_proj;
uniform mat4 u_view;

out vec3 v_color;
out vec3 v_world_pos;

void main() {
    v_color = in_color;
    v_world_pos = in_pos;
    gl_Position = u_proj * u_view * vec4(in_pos, 1.0);
}
"""

_LINE_FRAG_BODY = """in vec3 v_color;
in vec3 v_world_pos;

uniform vec3 u_cam_pos;
uniform float u_fade_start;
uniform float u_fade_end;
uniform vec3 u_clear_color;

out vec4 f_color;

void main() {
    // Fade distant grid lines into the background
    float dist = length(v_world_pos - u_cam_pos);
    float fade = smoothstep(u_fade_start, u_fade_end, dist);
    f_color = vec4(mix(v_color, u_clear_color, fade), 1.0);
}"""

_HUD_VERT = """#version 150
in vec2 in_pos;
in vec2 in_uv;
out vec2 v_uv;
void main() {
    v_uv = in_uv;
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

_HUD_FRAG = """#version 150
uniform sampler2D u_tex;
in vec2 v_uv;
out vec4 f_color;
void main() {
    f_color = texture(u_tex, v_uv);
}
"""

def line_shader_sources(ctx_version_code: int) -> tuple[str, str]:
    ver = _pick_glsl_version(ctx_version_code)
    prefix = f"#version {ver}\n"
    return prefix + _LINE_VERT_BODY, prefix + _LINE_FRAG_BODY

def hud_shader_sources() -> tuple[str, str]:
    return _HUD_VERT, _HUD_FRAG
