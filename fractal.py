import os
import sys
import warnings

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


from argparse import ArgumentParser
from dataclasses import replace
from pathlib import Path

import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from escapetime import FractalSet, RenderSinkError, plot, reference_parameters


def select_device():
    """Use the first visible GPU when TensorFlow sees one, otherwise the CPU."""

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def build_parser():
    parser = ArgumentParser(description='Render the Mandelbrot and Julia sets as four-band escape-time images.')

    parser.add_argument('--set', dest='sets', action='append', metavar='SET',
                        choices=[fractal.value for fractal in FractalSet],
                        help='Fractal to render. May be repeated. Choices: mandelbrot, julia. Default: both.')

    parser.add_argument('--width', type=int,
                        dest='width', help='number of samples along the real axis (default: 800)',
                        metavar='WIDTH', default=None)

    parser.add_argument('--height', type=int,
                        dest='height', help='number of samples along the imaginary axis (default: 600)',
                        metavar='HEIGHT', default=None)

    parser.add_argument('--output', dest='output', type=str,
                        help='Destination file. Only valid when a single set is rendered. '
                             'Defaults to ./mandelbrot.png or ./julia.png.')

    parser.add_argument('--batched', dest='batched', action='store_true',
                        help='Evaluate the whole grid at once with TensorFlow instead of point by point.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def resolve_parameters(opt, parser):
    names = []
    for name in opt.sets or [fractal.value for fractal in FractalSet]:
        if name not in names:
            names.append(name)

    if opt.output and len(names) != 1:
        parser.error("--output requires exactly one --set.")
    for flag, value in (("--width", opt.width), ("--height", opt.height)):
        if value is not None and value <= 0:
            parser.error(f"{flag} must be a positive integer.")

    params = []
    for name in names:
        overrides = {}
        if opt.width is not None:
            overrides["width"] = opt.width
        if opt.height is not None:
            overrides["height"] = opt.height
        if opt.output:
            overrides["output_path"] = Path(opt.output).expanduser()
        params.append(replace(reference_parameters(FractalSet(name)), **overrides))
    return params


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    log("TensorFlow version: %s" % tf.__version__)
    device = select_device() if opt.batched else None

    for params in resolve_parameters(opt, parser):
        log("Rendering {0} at {1}x{2} over {3}".format(
            params.fractal.value, params.width, params.height, params.region))
        try:
            path = plot(params, batched=opt.batched, device=device)
        except RenderSinkError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print("Result has been saved to {0}".format(path))
    return 0


if __name__ == '__main__':
    sys.exit(main())
