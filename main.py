#!/usr/bin/env python3
"""Interactive field-of-light demo.

Moves an observer with the mouse (or along a scripted path) and redraws
the visibility polygon around the configured walls on every frame.
"""

from __future__ import annotations

import argparse
import logging

import matplotlib.pyplot as plt

from config import AppConfig, load_config
from observer import MouseObserver, ObserverSource, PathObserver
from scene import Point2D, Scene
from visibility import visible_area
from visualization import animate_scene, plot_scene

log = logging.getLogger("field_of_light")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=str, default=None,
                        help="JSON file with scene/view/path settings")
    parser.add_argument("--path", action="store_true",
                        help="Follow the configured scripted path instead of the mouse")
    parser.add_argument("--fill", action="store_true",
                        help="Fill the visibility polygon")
    parser.add_argument("--no-rays", action="store_true",
                        help="Hide probe rays and intersection markers")
    parser.add_argument("--observer", type=float, nargs=2, metavar=("X", "Y"), default=None,
                        help="Initial (or, with --save, fixed) observer position")
    parser.add_argument("--save", type=str, default=None, metavar="PNG",
                        help="Render a single frame to an image and exit")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


def build_source(config: AppConfig, use_path: bool, start: Point2D) -> ObserverSource:
    if use_path:
        if config.path is None:
            raise SystemExit("--path requires a 'path' section in the configuration.")
        return PathObserver(config.path.points(), config.path.speed, config.path.loop)
    return MouseObserver(start)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    config: AppConfig = load_config(args.config)
    if args.fill:
        config.view.fill = True
    if args.no_rays:
        config.view.show_rays = False
        config.view.show_hits = False

    scene: Scene = config.scene.build()
    log.info(
        "Scene %gx%g with %d walls (%d probes per frame).",
        scene.width, scene.height, len(scene.walls), len(scene.vertices),
    )

    start: Point2D = (
        Point2D(*args.observer) if args.observer
        else Point2D(scene.width / 2.0, scene.height / 2.0)
    )

    fig, ax = plt.subplots(figsize=(scene.width / 100.0, scene.height / 100.0))
    fig.subplots_adjust(left=0, right=1, bottom=0, top=1)

    if args.save:
        result = plot_scene(ax, scene, start, config.view)
        fig.savefig(args.save)
        area: float | None = visible_area(result.polygon)
        if area is None:
            log.info(
                "Saved %s: %d polygon vertices (self-intersecting, no area).",
                args.save, len(result.polygon),
            )
        else:
            log.info(
                "Saved %s: %d polygon vertices, visible area %.1f.",
                args.save, len(result.polygon), area,
            )
        return 0

    source: ObserverSource = build_source(config, args.path, start)
    # The animation stops if it is garbage collected before the window closes.
    anim = animate_scene(fig, ax, scene, source, config.view)  # noqa: F841
    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
