from __future__ import annotations

import time

import pygame
import moderngl

from smoothcam.backend import frame_input_from_pygame
from smoothcam.config import WINDOW_WIDTH, WINDOW_HEIGHT, FPS_CAP, GRID_HALF_EXTENT, GRID_STEP, APP_VERSION
from smoothcam.controllers.fps import FpsCameraController, FpsSettings
from smoothcam.controllers.orbit import OrbitCameraController, OrbitSettings
from smoothcam.controllers.unreal import UnrealCameraController, UnrealSettings
from smoothcam.render.renderer import Renderer
from smoothcam.render.scene import build_scene
from smoothcam.rig.camera import CameraRig, update_rigs

CONTROLLERS = ("fps", "unreal", "orbit")

def _init_pygame_gl() -> None:
    pygame.init()
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MAJOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_MINOR_VERSION, 3)
    pygame.display.gl_set_attribute(pygame.GL_CONTEXT_PROFILE_MASK, pygame.GL_CONTEXT_PROFILE_CORE)
    pygame.display.gl_set_attribute(pygame.GL_DEPTH_SIZE, 24)
    pygame.display.gl_set_attribute(pygame.GL_DOUBLEBUFFER, 1)

def _surface_to_rgba_bytes(surf: pygame.Surface) -> tuple[bytes, int, int]:
    s = surf.convert_alpha()
    w, h = s.get_size()
    data = pygame.image.tostring(s, "RGBA", False)
    return data, w, h

def build_rigs(
    *,
    eye: tuple[float, float, float],
    target: tuple[float, float, float],
    active: str,
    smoothing: float | None,
    rotate_sensitivity: float | None,
    translate_sensitivity: float | None,
    keyboard_move_sensitivity: float | None = None,
) -> list[CameraRig]:
    """One rig per control scheme, all starting at the same pose; only `active` is enabled."""
    if active not in CONTROLLERS:
        raise ValueError(f"unknown controller {active!r}, expected one of {CONTROLLERS}")

    fps_kw: dict = {}
    unreal_kw: dict = {}
    orbit_kw: dict = {}
    if smoothing is not None:
        for kw in (fps_kw, unreal_kw, orbit_kw):
            kw["smoothing_weight"] = smoothing
    if rotate_sensitivity is not None:
        fps_kw["rotate_sensitivity"] = rotate_sensitivity
        unreal_kw["rotate_sensitivity"] = rotate_sensitivity
    if translate_sensitivity is not None:
        fps_kw["translate_sensitivity"] = translate_sensitivity
    if keyboard_move_sensitivity is not None:
        unreal_kw["keyboard_move_sensitivity"] = keyboard_move_sensitivity

    controllers = {
        "fps": FpsCameraController(FpsSettings(**fps_kw), enabled=active == "fps"),
        "unreal": UnrealCameraController(UnrealSettings(**unreal_kw), enabled=active == "unreal"),
        "orbit": OrbitCameraController(OrbitSettings(**orbit_kw), enabled=active == "orbit"),
    }
    return [CameraRig(controllers[name], eye, target, name=name) for name in CONTROLLERS]

def enable_only(rigs: list[CameraRig], index: int | None) -> None:
    """Enable rig `index` and disable the rest; None disables all (control freezes)."""
    for i, rig in enumerate(rigs):
        rig.enabled = i == index

def shown_rig(active: int | None, previous: int) -> int:
    """Rig to render: the driven one, or the last driven one while control is frozen."""
    return previous if active is None else active

def debug_lines(rig: CameraRig, driven: bool, fps_est: float) -> list[str]:
    e, t = rig.smoothed.eye, rig.smoothed.target
    lines = [
        f"smoothcam v{APP_VERSION}",
        f"active={rig.name if driven else 'none'} fps~{fps_est:.0f} events={rig.events_last_frame}",
        f"eye=({e[0]:.2f}, {e[1]:.2f}, {e[2]:.2f}) radius={rig.transform.radius():.2f}",
        f"target=({t[0]:.2f}, {t[1]:.2f}, {t[2]:.2f}) smoothing={rig.smoother.weight:.2f}",
    ]
    if isinstance(rig.controller, UnrealCameraController):
        lines.append(f"keyboard speed={rig.controller.keyboard_move_sensitivity:.3f}")
    lines.append("1/2/3: fps/unreal/orbit  0: freeze  esc: quit")
    return lines

def run_app(
    *,
    controller: str,
    eye: tuple[float, float, float],
    target: tuple[float, float, float],
    smoothing: float | None,
    rotate_sensitivity: float | None,
    translate_sensitivity: float | None,
    keyboard_move_sensitivity: float | None,
    grab: bool,
    debug: bool,
) -> None:
    rigs = build_rigs(
        eye=eye,
        target=target,
        active=controller,
        smoothing=smoothing,
        rotate_sensitivity=rotate_sensitivity,
        translate_sensitivity=translate_sensitivity,
        keyboard_move_sensitivity=keyboard_move_sensitivity,
    )

    _init_pygame_gl()

    flags = pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE
    pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), flags)
    pygame.display.set_caption(f"smoothcam v{APP_VERSION} ({controller})")

    try:
        ctx = moderngl.create_context()
    except Exception as e:
        pygame.quit()
        raise RuntimeError("Failed to create ModernGL context (need OpenGL 3.2+)") from e

    if debug:
        print(f"[smoothcam] moderngl ctx version_code={ctx.version_code} vendor={ctx.info.get('GL_VENDOR')} renderer={ctx.info.get('GL_RENDERER')}")

    ctx.viewport = (0, 0, WINDOW_WIDTH, WINDOW_HEIGHT)
    renderer = Renderer(ctx, WINDOW_WIDTH, WINDOW_HEIGHT, build_scene(GRID_HALF_EXTENT, GRID_STEP))

    if grab:
        pygame.event.set_grab(True)
        pygame.mouse.set_visible(False)

    fade_end = GRID_HALF_EXTENT * GRID_STEP
    fade_start = fade_end * 0.5

    clock = pygame.time.Clock()
    running = True
    last_t = time.perf_counter()
    last_log = last_t
    last_hud = last_t

    pygame.font.init()
    font = pygame.font.SysFont("Menlo", 16) or pygame.font.Font(None, 16)
    fps_est = 0.0
    shown = CONTROLLERS.index(controller)

    try:
        while running:
            now = time.perf_counter()
            dt = min(now - last_t, 0.05)
            last_t = now

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in (pygame.K_1, pygame.K_2, pygame.K_3):
                        enable_only(rigs, event.key - pygame.K_1)
                    elif event.key == pygame.K_0:
                        enable_only(rigs, None)
                elif event.type == pygame.VIDEORESIZE:
                    w, h = max(64, event.w), max(64, event.h)
                    pygame.display.set_mode((w, h), flags)
                    renderer.resize(w, h)

            frame = frame_input_from_pygame(events, pygame.key.get_pressed(), pygame.mouse.get_pressed(3), dt)
            active = update_rigs(rigs, frame)
            shown = shown_rig(active, shown)
            rig = rigs[shown]

            if dt > 0:
                inst_fps = 1.0 / dt
                fps_est = (0.9 * fps_est + 0.1 * inst_fps) if fps_est > 0 else inst_fps

            renderer.begin_frame()
            renderer.draw_scene(
                rig.view_matrix(),
                rig.smoothed.eye,
                fade_start=fade_start,
                fade_end=fade_end,
            )

            if debug:
                if now - last_hud >= 0.12:
                    last_hud = now
                    lines = debug_lines(rig, active is not None, fps_est)
                    pad = 6
                    line_h = font.get_linesize()
                    w = max(font.size(line)[0] for line in lines) + pad * 2
                    h = line_h * len(lines) + pad * 2
                    surf = pygame.Surface((w, h), pygame.SRCALPHA)
                    surf.fill((0, 0, 0, 130))
                    y = pad
                    for line in lines:
                        img = font.render(line, True, (255, 255, 255))
                        surf.blit(img, (pad, y))
                        y += line_h
                    rgba, tw, th = _surface_to_rgba_bytes(surf)
                    renderer.hud_update_rgba(rgba, tw, th)
                renderer.draw_hud()

                if now - last_log >= 1.0:
                    last_log = now
                    e = rig.smoothed.eye
                    print(f"[smoothcam] fps~{fps_est:.0f} active={rig.name if active is not None else 'none'} eye=({e[0]:.2f}, {e[1]:.2f}, {e[2]:.2f}) radius={rig.transform.radius():.2f}")

            pygame.display.flip()

            if FPS_CAP and FPS_CAP > 0:
                clock.tick(FPS_CAP)
            else:
                clock.tick()
    finally:
        renderer.release()
        pygame.quit()
