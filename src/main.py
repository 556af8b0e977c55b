# main.py
import argparse
import logging
import sys
from core import config
from core.config import RenderSettings
from core.errors import RayTracerError
from core.logging_config import setup_logging
from renderer.raytracer import Renderer
from scene.parser import load_scene

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Render a scene file with a Whitted-style ray tracer')
    parser.add_argument('scene', type=str,
                        help='Scene description file, "-" to read standard input')
    parser.add_argument('output', type=str, nargs='?', default=None,
                        help=f'Output image, format chosen by extension (default: {config.DEFAULT_OUTPUT})')
    parser.add_argument('--width', type=int, default=None,
                        help=f'Image width in pixels (default: {config.WIDTH})')
    parser.add_argument('--height', type=int, default=None,
                        help=f'Image height in pixels (default: {config.HEIGHT})')
    parser.add_argument('--super-samples', type=int, default=None,
                        help='Anti-aliasing grid size, N gives NxN samples per pixel')
    parser.add_argument('--depth-complexity', type=int, default=None,
                        help='Lens samples per sub-sample when the scene has dispersion')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for lens sampling, for reproducible depth of field')
    parser.add_argument('--workers', type=int, default=None,
                        help='Worker processes for the python backend')
    parser.add_argument('--backend', type=str, choices=config.BACKENDS, default=None,
                        help=f'Render backend (default: {config.BACKEND})')
    parser.add_argument('--tone-map', type=str, choices=config.TONE_MAPPINGS, default=None,
                        help=f'Float to 8-bit conversion (default: {config.TONE_MAPPING})')
    parser.add_argument('--interactive', action='store_true',
                        help='Open a preview window instead of writing an image')
    parser.add_argument('--log-level', type=str, default=config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging verbosity')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Also write the log to this file')
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        settings = RenderSettings.from_env().override(
            width=args.width,
            height=args.height,
            super_samples=args.super_samples,
            depth_complexity=args.depth_complexity,
            seed=args.seed,
            workers=args.workers,
            backend=args.backend,
            tone_mapping=args.tone_map,
        )
        scene = load_scene(args.scene)
        scene.apply_settings(settings)

        if args.interactive:
            from viewer.application import Application
            Application(scene, settings).run()
            return 0

        output = args.output
        if output is None:
            logger.warning("No output file specified - writing to %s", config.DEFAULT_OUTPUT)
            output = config.DEFAULT_OUTPUT

        Renderer(settings).render_to_file(scene, output)
    except RayTracerError as e:
        logger.error("%s", e)
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
