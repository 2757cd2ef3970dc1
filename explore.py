import os
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


# Import libraries for computation
import tensorflow as tf
import numpy as np

if _suppress_messages:
    try:
        tf.get_logger().setLevel("ERROR")
        for handler in tf.get_logger().handlers:
            handler.setLevel("ERROR")
    except Exception:
        pass

# Imports for visualization
import PIL.Image
import imageio

from fractal_explorer import (
    InvalidParameterError,
    Julia,
    Newton,
    ViewRect,
    ZoomNavigator,
    fractal_from_name,
    is_plane_fractal,
    render_frame,
    select_zoom_center,
)
from fractal_explorer.fractals import FRACTAL_NAMES
from fractal_explorer.navigation import ZOOM_DEFAULT, clamp_zoom_fraction, edge_map, zoom_box
from fractal_explorer.newton import DEFAULT_DEGREE
from fractal_explorer.raster import draw_caption, draw_zoom_box, primitives_to_image, result_to_image
from fractal_explorer.renderer import BACKENDS, DEFAULT_BACKEND, RenderResult

try:
    from matplotlib import colormaps as _mpl_colormaps
except ImportError:  # Matplotlib < 3.5
    from matplotlib import cm as _mpl_colormaps  # type: ignore


def get_colormap(name):
    return _mpl_colormaps.get_cmap(name)


def select_device():
    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
        log("GPU found, using %s" % gpus[0].name)
        return '/GPU:0'
    except RuntimeError as e:
        log(e)
        return '/CPU:0'


from argparse import ArgumentParser


@dataclass
class OutputConfig:
    modes: tuple[str, ...]
    gif_path: Path | None
    image_path: Path | None
    frame_dir: Path | None
    image_format: str


def build_parser():
    parser = ArgumentParser(description='Render escape-time, Newton and recursive fractals to image files.')

    parser.add_argument('--fractal', type=str, choices=FRACTAL_NAMES, default='mandelbrot',
                        help='fractal to render')

    parser.add_argument('--julia-constant', type=int,
                        dest='julia_constant', help='index of the preset Julia constant (cycles through 4 presets)',
                        metavar='INDEX', default=0)

    parser.add_argument('--degree', type=int,
                        dest='degree', help='degree n of the Newton polynomial z^n - 1',
                        metavar='DEGREE', default=DEFAULT_DEGREE)

    parser.add_argument('--depth', type=int,
                        dest='depth', help='recursion depth of the geometric fractals',
                        metavar='DEPTH', default=1)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='maximum number of iterations per point (default depends on the fractal)',
                        metavar='MAX_ITERATIONS', default=None)

    parser.add_argument('--x-res', type=int,
                        dest='x_res', help='screen width in pixels',
                        metavar='X_RES', default=1280)

    parser.add_argument('--y-res', type=int,
                        dest='y_res', help='screen height in pixels',
                        metavar='Y_RES', default=720)

    parser.add_argument('--view', type=float, nargs=3,
                        dest='view', help='starting view; the imaginary maximum follows the screen aspect ratio',
                        metavar=('REAL_MIN', 'REAL_MAX', 'IMAG_MIN'), default=None)

    parser.add_argument('--zoom', type=float, nargs=3, action='append',
                        dest='zooms', help='zoom into the box of FRACTION of the screen centred on pixel X Y. May be repeated.',
                        metavar=('X', 'Y', 'FRACTION'), default=None)

    parser.add_argument('--unzoom', type=int, dest='unzoom', default=0, metavar='N',
                        help='pop N views from the zoom history after applying --zoom')

    parser.add_argument('--auto-zoom', type=int, dest='auto_zoom', default=0, metavar='N',
                        help='zoom N more times towards the set boundary nearest the screen centre')

    parser.add_argument('--zoom-fraction', type=float, dest='zoom_fraction', default=ZOOM_DEFAULT,
                        help='zoom box size used by --auto-zoom, as a fraction of the screen')

    parser.add_argument('--mode', dest='modes', action='append', metavar='MODE',
                        help='Output modes to generate. May be repeated. Choices: image, gif, frames.')

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination for single-file outputs (gif/image) or container directory when both are requested.')

    parser.add_argument('--frame-dir', dest='frame_dir', type=str,
                        help='Directory in which to store frame sequences.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for image-based outputs. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--gif-frame-duration', type=float, dest='gif_frame_duration', default=0.5,
                        help='seconds each frame stays on screen in GIF output')

    parser.add_argument('--backend', type=str, choices=BACKENDS, default=DEFAULT_BACKEND,
                        help='evaluation backend for plane fractals')

    parser.add_argument('--colormap', type=str,
                        dest='colormap', help='matplotlib colormap replacing the HSL coloring of plane fractals (e.g. "viridis")',
                        metavar='COLORMAP', default=None)

    parser.add_argument('--show-zoom-box', dest='show_zoom_box', action='store_true',
                        help='outline the next zoom box on each frame')

    parser.add_argument('--caption', dest='caption', action='store_true',
                        help='write the fractal parameters in the top-left corner')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def resolve_output_config(opt, parser: ArgumentParser) -> OutputConfig:
    valid_modes = {"image", "gif", "frames"}
    modes = opt.modes or ["image"]

    normalized_modes: list[str] = []
    for mode in modes:
        if mode not in valid_modes:
            parser.error(f"Unknown output mode '{mode}'. Valid choices: {', '.join(sorted(valid_modes))}.")
        if mode not in normalized_modes:
            normalized_modes.append(mode)
    modes_tuple = tuple(normalized_modes)

    image_format = (opt.format or "png").lower().lstrip(".") or "png"

    frame_dir_path: Path | None = None
    if "frames" in modes_tuple:
        frame_dir_path = Path(opt.frame_dir or "./frames").expanduser().resolve()
    elif opt.frame_dir is not None:
        parser.error("--frame-dir is only valid with the frames mode.")

    file_modes = [mode for mode in modes_tuple if mode in {"gif", "image"}]
    gif_path: Path | None = None
    image_path: Path | None = None

    if not file_modes:
        if opt.output:
            parser.error("--output is only valid when gif or image modes are requested.")
    elif len(file_modes) == 1:
        mode = file_modes[0]
        expected_suffix = ".gif" if mode == "gif" else f".{image_format}"
        default_name = "fractal.gif" if mode == "gif" else f"fractal.{image_format}"
        output_path = Path(opt.output or default_name).expanduser()
        if output_path.exists() and output_path.is_dir():
            parser.error("--output must point to a file, not a directory, when a single file mode is active.")
        if output_path.suffix:
            if output_path.suffix.lower() != expected_suffix:
                parser.error(f"--output extension {output_path.suffix} does not match {expected_suffix}.")
        else:
            output_path = output_path.with_suffix(expected_suffix)
        if mode == "gif":
            gif_path = output_path.resolve()
        else:
            image_path = output_path.resolve()
    else:
        base_dir = Path(opt.output).expanduser() if opt.output else Path.cwd()
        if base_dir.exists() and not base_dir.is_dir():
            parser.error("--output must be a directory when both gif and image modes are active.")
        gif_path = (base_dir / "fractal.gif").resolve()
        image_path = (base_dir / f"fractal.{image_format}").resolve()

    return OutputConfig(
        modes=modes_tuple,
        gif_path=gif_path,
        image_path=image_path,
        frame_dir=frame_dir_path,
        image_format=image_format,
    )


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def write_single_image(image: PIL.Image.Image, output_path: Path, image_format: str) -> None:
    """Write a single image to ``output_path`` using the provided format."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=_pil_format_name(image_format))


def write_frame_sequence(image: PIL.Image.Image, frame_dir: Path, index: int, digits: int, image_format: str) -> Path:
    """Persist a frame in a numbered sequence inside ``frame_dir``."""

    frame_path = frame_dir / f"frame{index:0{digits}d}.{image_format}"
    frame_dir.mkdir(parents=True, exist_ok=True)
    image.save(str(frame_path), format=_pil_format_name(image_format))
    return frame_path


def write_gif(writer: Any, image: PIL.Image.Image) -> None:
    """Append ``image`` to an active GIF writer."""

    writer.append_data(np.asarray(image.convert("RGB")))


@dataclass
class OutputWriters:
    config: OutputConfig
    frame_digits: int
    gif_frame_duration: float

    def __post_init__(self) -> None:
        self._gif_writer = None
        if self.config.gif_path is not None:
            self.config.gif_path.parent.mkdir(parents=True, exist_ok=True)
            self._gif_writer = imageio.get_writer(str(self.config.gif_path), mode='I',
                                                  duration=self.gif_frame_duration, loop=0)

    def write_frame(self, frame_index: int, image: PIL.Image.Image) -> None:
        if self._gif_writer is not None:
            write_gif(self._gif_writer, image)
        if self.config.frame_dir is not None:
            write_frame_sequence(image, self.config.frame_dir, frame_index, self.frame_digits, self.config.image_format)

    def finalize(self, final_image: PIL.Image.Image | None) -> None:
        if final_image is not None and self.config.image_path is not None:
            write_single_image(final_image, self.config.image_path, self.config.image_format)

    def close(self) -> None:
        if self._gif_writer is not None:
            self._gif_writer.close()
            self._gif_writer = None


def build_zoom_steps(opt) -> list[tuple]:
    """Navigation steps in the order they are applied after the first frame."""

    steps: list[tuple] = [("zoom", x, y, fraction) for x, y, fraction in (opt.zooms or [])]
    steps += [("unzoom",)] * max(opt.unzoom, 0)
    steps += [("auto", clamp_zoom_fraction(opt.zoom_fraction))] * max(opt.auto_zoom, 0)
    return steps


def colorize(result: RenderResult, fractal, cmap) -> np.ndarray:
    """Recolor a frame with a matplotlib colormap, keeping the background black."""

    if result.root_index is not None:
        values = result.root_index.astype(np.float64) / fractal.degree
    else:
        values = result.iterations.astype(np.float64) / result.params.iter_max
    rgba = np.array(cmap(np.clip(values, 0.0, 1.0)), copy=True)
    rgb = np.uint8(np.clip(rgba[..., :3] * 255, 0, 255))
    rgb[result.interior] = 0
    return rgb


def plane_caption(fractal, navigator: ZoomNavigator) -> str:
    if isinstance(fractal, Julia):
        text = f"c = {fractal.constant}"
    elif isinstance(fractal, Newton):
        text = f"z^{fractal.degree} - 1"
    else:
        text = fractal.name
    return f"{text}   zoom depth: {navigator.depth}"


def plane_frames(fractal, opt, device: str):
    """Yield one image per navigation state, starting with the initial view."""

    view = None
    if opt.view is not None:
        real_min, real_max, imag_min = opt.view
        view = ViewRect.fitted(real_min, real_max, imag_min, opt.x_res, opt.y_res)

    navigator = ZoomNavigator(fractal, opt.x_res, opt.y_res, iter_max=opt.max_iterations, view=view)
    cmap = get_colormap(opt.colormap) if opt.colormap else None
    steps = build_zoom_steps(opt)
    log("Rendering %s with %d iterations on %s (%s backend)" % (fractal.name, navigator.iter_max, device, opt.backend))

    for i in range(len(steps) + 1):
        print("frame {0} out of {1}".format(i, len(steps) + 1), end='\r')
        params = navigator.parameters()
        result = render_frame(fractal, params, backend=opt.backend, device=device)
        if cmap is not None:
            image = PIL.Image.fromarray(np.ascontiguousarray(np.flipud(colorize(result, fractal, cmap))))
        else:
            image = result_to_image(result)

        next_focus = None
        if i < len(steps):
            step = steps[i]
            if step[0] == "zoom":
                next_focus = step[1:]
            elif step[0] == "auto":
                row, col = select_zoom_center(edge_map(result.interior))
                next_focus = (float(col), float(row), step[1])

        if opt.show_zoom_box and next_focus is not None:
            x, y, fraction = next_focus
            draw_zoom_box(image, zoom_box(x, y, fraction, opt.x_res, opt.y_res))
        if opt.caption:
            draw_caption(image, plane_caption(fractal, navigator))
        yield image

        if i < len(steps):
            if steps[i][0] == "unzoom":
                if not navigator.zoom_out():
                    log("Zoom history is empty, staying at the outermost view")
            else:
                x, y, fraction = next_focus
                navigator.zoom_in(x, y, fraction)
                log("Zoomed to %s" % (navigator.view,))


def geometric_depths(opt, config: OutputConfig) -> list[int]:
    if config.modes == ("image",):
        return [opt.depth]
    return list(range(1 if opt.depth >= 1 else 0, opt.depth + 1))


def geometric_frames(opt, config: OutputConfig):
    """Yield one image per recursion depth up to the requested depth."""

    depths = geometric_depths(opt, config)
    for i, depth in enumerate(depths):
        print("frame {0} out of {1}".format(i, len(depths)), end='\r')
        fractal = fractal_from_name(opt.fractal, depth=depth)
        primitives = fractal.primitives(opt.x_res, opt.y_res)
        log("Depth %d: %d primitives" % (depth, len(primitives)))
        image = primitives_to_image(primitives, opt.x_res, opt.y_res)
        if opt.caption:
            draw_caption(image, f"{fractal.name}   depth: {depth}")
        yield image


def main():
    parser = build_parser()
    opt = parser.parse_args()

    output_config = resolve_output_config(opt, parser)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    try:
        fractal = fractal_from_name(
            opt.fractal,
            julia_index=opt.julia_constant,
            degree=opt.degree,
            depth=opt.depth,
        )
        if not is_plane_fractal(fractal):
            # Validate the depth before any file is opened.
            fractal.primitives(1, 1)
    except InvalidParameterError as exc:
        parser.error(str(exc))

    if output_config.frame_dir is not None:
        output_config.frame_dir.mkdir(parents=True, exist_ok=True)

    plane = is_plane_fractal(fractal)
    frame_count = len(build_zoom_steps(opt)) + 1 if plane else len(geometric_depths(opt, output_config))
    writers = OutputWriters(
        output_config,
        frame_digits=max(3, len(str(max(frame_count - 1, 0)))),
        gif_frame_duration=opt.gif_frame_duration,
    )

    final_image: PIL.Image.Image | None = None
    try:
        frames = plane_frames(fractal, opt, select_device()) if plane else geometric_frames(opt, output_config)
        for i, image in enumerate(frames):
            writers.write_frame(i, image)
            final_image = image
    except InvalidParameterError as exc:
        parser.error(str(exc))
    finally:
        writers.close()

    print()
    writers.finalize(final_image)


if __name__ == '__main__':
    main()
