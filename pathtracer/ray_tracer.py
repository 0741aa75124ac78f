import argparse
import time
from typing import List, Optional

import numpy as np

from pathtracer.renderer import Renderer, RenderStats, render_image, save_image
from pathtracer.scene_parser import parse_scene_file


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Python Path Tracer')
    parser.add_argument('scene_file', type=str, help='Path to the scene file')
    parser.add_argument('output_image', type=str, help='Name of the output image file')
    parser.add_argument('--width', type=int, default=200, help='Image width')
    parser.add_argument('--height', type=int, default=200, help='Image height')
    parser.add_argument('--seed', type=int, default=0, help='Seed of the random stream driving every sample')
    parser.add_argument(
        '--samples',
        type=int,
        default=None,
        help='Samples per pixel, overriding the scene file setting',
    )
    args = parser.parse_args(argv)

    def log_phase(label: str, seconds: float) -> None:
        print(f"[phase] {label}: {seconds:.2f}s")

    parse_start = time.perf_counter()
    camera, scene_settings, scene = parse_scene_file(args.scene_file)
    log_phase("parse_scene", time.perf_counter() - parse_start)

    samples_per_pixel = args.samples if args.samples is not None else scene_settings.samples_per_pixel
    if samples_per_pixel < 1:
        raise ValueError("--samples must be at least 1")

    stats = RenderStats()
    render_start = time.perf_counter()
    image_array = render_image(
        camera,
        Renderer(scene, scene_settings),
        args.width,
        args.height,
        samples_per_pixel,
        np.random.default_rng(args.seed),
        stats,
    )
    log_phase("render", time.perf_counter() - render_start)

    save_start = time.perf_counter()
    save_image(image_array, args.output_image)
    log_phase("save_image", time.perf_counter() - save_start)

    print(
        "[stats] lights={lights}, rays={rays}, hits={hits}, depth_cutoffs={depth_cutoffs}".format(
            lights=len(scene.light_samplers()), **stats.as_dict()
        )
    )


if __name__ == '__main__':
    program_start = time.time()
    readable_start = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_start))
    print(f"[timer] Program started at {readable_start}")
    try:
        main()
    finally:
        program_end = time.time()
        readable_end = time.strftime('%Y-%m-%d %H:%M:%S', time.localtime(program_end))
        elapsed = program_end - program_start
        print(f"[timer] Program ended at {readable_end} (elapsed {elapsed:.2f}s)")
