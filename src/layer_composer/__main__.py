import argparse
import asyncio
import logging
from typing import Optional

from layer_composer.api.composer import ImageComposer
from layer_composer.api.raster import RasterHandle
from layer_composer.api.resizer import bounded_size
from layer_composer.config import MAX_HEIGHT, MAX_WIDTH, ComposerConfig
from layer_composer.constants import BlendMode, PointerEventKind
from layer_composer.errors import ComposerError
from layer_composer.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    # Sub-commands accept -v as well; SUPPRESS keeps the top-level value.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Be more verbose.",
    )

    parser = argparse.ArgumentParser(description="layer-composer command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    compose_parser = subparsers.add_parser(
        "compose",
        parents=[common],
        help="Composite a component over a base image and save as PNG",
    )
    compose_parser.add_argument("base_file", help="Base image file")
    compose_parser.add_argument("output_file", help="Output PNG file")
    compose_parser.add_argument("-c", "--component", help="Component image file")
    compose_parser.add_argument("--x", type=float, help="Component left edge")
    compose_parser.add_argument("--y", type=float, help="Component top edge")
    compose_parser.add_argument(
        "--scale", type=float, default=100.0, help="Scale in percent [default: 100]"
    )
    compose_parser.add_argument(
        "--rotation", type=int, default=0, help="Rotation in degrees [default: 0]"
    )
    compose_parser.add_argument(
        "--opacity", type=float, default=100.0, help="Opacity in percent [default: 100]"
    )
    compose_parser.add_argument(
        "--blend", default=BlendMode.NORMAL.value, help="Blend mode [default: normal]"
    )
    compose_parser.add_argument(
        "--drag",
        type=float,
        nargs=4,
        metavar=("X0", "Y0", "X1", "Y1"),
        help="Drag the component from (X0, Y0) to (X1, Y1) in surface pixels",
    )
    compose_parser.add_argument("--prompt", help="Run the post-effect with this prompt")
    compose_parser.add_argument(
        "--effect-delay",
        type=float,
        default=0.0,
        help="Latency of the post-effect in seconds [default: 0]",
    )
    compose_parser.add_argument(
        "--max-size",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=(MAX_WIDTH, MAX_HEIGHT),
        help="Surface bound [default: %d %d]" % (MAX_WIDTH, MAX_HEIGHT),
    )

    info_parser = subparsers.add_parser(
        "info", parents=[common], help="Show image and surface size"
    )
    info_parser.add_argument("input_file", help="Input image file")
    info_parser.add_argument(
        "--max-size",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=(MAX_WIDTH, MAX_HEIGHT),
    )

    subparsers.add_parser(
        "blend-modes", parents=[common], help="List supported blend modes"
    )

    return parser.parse_args(argv)


def compose(args: argparse.Namespace) -> None:
    config = ComposerConfig(
        max_width=args.max_size[0],
        max_height=args.max_size[1],
        effect_delay=args.effect_delay,
    )
    composer = ImageComposer(config)
    composer.load_base(args.base_file)
    composer.set_scale(args.scale)
    composer.set_rotation(args.rotation)
    composer.set_opacity(args.opacity)
    composer.set_blend_mode(args.blend)
    if args.component:
        composer.load_component(args.component)
    if args.x is not None or args.y is not None:
        x, y = composer.transform.position
        composer.transform.position = (
            x if args.x is None else args.x,
            y if args.y is None else args.y,
        )
        composer.render()
    if args.drag:
        x0, y0, x1, y1 = args.drag
        composer.handle_pointer((PointerEventKind.DOWN, x0, y0))
        composer.handle_pointer((PointerEventKind.MOVE, x1, y1))
        composer.handle_pointer((PointerEventKind.UP, x1, y1))
    if args.prompt is not None:
        asyncio.run(composer.generate(args.prompt))
    composer.save(args.output_file)
    logger.info("Wrote %s", args.output_file)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("layer_composer")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        if args.command == "compose":
            compose(args)

        elif args.command == "info":
            raster = RasterHandle.open(args.input_file)
            size = bounded_size(raster.width, raster.height, *args.max_size)
            print("size: %dx%d" % raster.size)
            print("surface: %dx%d" % (size.width, size.height))

        elif args.command == "blend-modes":
            for mode in BlendMode:
                print(mode.value)
    except (ComposerError, ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    return None


if __name__ == "__main__":
    raise SystemExit(main())
