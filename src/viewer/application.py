# viewer/application.py
import logging
import numpy as np
import pygame
from renderer.kernels import render_scene_data
from renderer.scene_data import flatten_scene
from renderer.tone_mapping import tone_map

logger = logging.getLogger(__name__)

# Scene units per second
MOVE_SPEED = 50.0

class Application:
    """
    Preview window for a scene, rendered with the compiled kernel.

    w/s move the camera along its view direction, a/d strafe, Esc quits.
    The frame is only re-rendered after the camera has moved.
    """
    def __init__(self, scene, settings):
        pygame.init()

        self.scene = scene
        self.settings = settings
        self.window_width = scene.width
        self.window_height = scene.height
        self.entropy = np.random.SeedSequence(settings.seed).entropy

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Whitted Ray Tracer")
        self.clock = pygame.time.Clock()

        self.move_speed = MOVE_SPEED
        self.key_map = {
            'w': pygame.K_w,
            's': pygame.K_s,
            'a': pygame.K_a,
            'd': pygame.K_d,
        }
        self.needs_render = True
        self.frame_count = 0

    def handle_input(self, dt: float) -> bool:
        """
        Moves the camera for the keys held down. Returns True if it moved.
        """
        keys = pygame.key.get_pressed()
        camera = self.scene.camera
        step = self.move_speed * dt
        moved = False

        if keys[self.key_map['w']]:
            camera.move(step)
            moved = True
        if keys[self.key_map['s']]:
            camera.move(-step)
            moved = True
        if keys[self.key_map['a']]:
            camera.strafe(-step)
            moved = True
        if keys[self.key_map['d']]:
            camera.strafe(step)
            moved = True

        return moved

    def render_frame(self) -> np.ndarray:
        scene = self.scene
        data = flatten_scene(scene)
        frame, rays_cast = render_scene_data(data, scene.width, scene.height, scene.super_samples,
                                             scene.effective_depth_complexity, scene.max_reflections,
                                             scene.dispersion, scene.image_scale, self.entropy)
        scene.rays_cast = rays_cast
        return tone_map(frame, self.settings.tone_mapping)

    def draw(self, pixels: np.ndarray):
        # surfarray is (x, y) with y pointing down
        frame_surface = pygame.surfarray.make_surface(pixels[:, ::-1])
        self.screen.blit(frame_surface, (0, 0))
        pygame.display.flip()

    def run(self):
        try:
            running = True
            while running:
                dt = self.clock.tick(60) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False

                if self.handle_input(dt):
                    self.needs_render = True

                if self.needs_render:
                    render_start = pygame.time.get_ticks()
                    self.draw(self.render_frame())
                    self.frame_count += 1
                    self.needs_render = False
                    logger.debug("Frame %d in %d ms, camera at %s", self.frame_count,
                                 pygame.time.get_ticks() - render_start, self.scene.camera.position)
        finally:
            pygame.quit()
