#!/usr/bin/env python3
"""
easyblink - LED strip pattern animator

Command-line entry point. Builds the animation configuration from the
arguments, opens the strip and runs one frame after another until the frame
limit is reached or the process is interrupted.

Example:
    easyblink --pixels 120 --colorway rainbow --pattern chase --width 10 --delay-ms 20
    easyblink --pixels 60 --preset fireplace --delay-ms 40
"""

import argparse
import logging
import signal
import sys
import time
from typing import Any, Callable, Dict, List, Optional

import psutil

from led_system import Apa102Transport, PixelStripTransport, MockTransport
from led_system.errors import ConfigError, TransportInitError, TransportWriteError
from pattern_system import AnimationConfig, Controller, PatternKind
from pattern_system.config import COLORWAYS, TRANSPORTS
from pattern_system.presets import Preset
from utils import HybridLogger, ClassLogger, OnceInMs, describe_gpio
from utils.gpio_utils import SPI_GROUND_PIN

# CLI option -> pattern parameter, per pattern kind
PATTERN_OPTIONS = {
    PatternKind.CHASE: {"width": "width"},
    PatternKind.PULSE: {"period": "period_frames", "floor": "floor"},
    PatternKind.THEATER_CHASE: {"spacing": "spacing"},
    PatternKind.TWINKLE: {"probability": "probability", "decay": "decay"},
    PatternKind.KNIGHT_RIDER: {"tail": "tail_fraction"},
    PatternKind.BANDS: {"band_size": "band_size"},
}


def _terminate(sig, frame):
    """Turn SIGTERM/SIGHUP into SystemExit so the strip is blanked on the way out"""
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easyblink",
        description="Animate an addressable LED strip",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--pixels', '-n', type=int, required=True,
                        help='Number of LEDs on the strip')
    parser.add_argument('--colorway', '-c', choices=COLORWAYS, default='rainbow',
                        help='Color palette (default: rainbow)')
    parser.add_argument('--color', default='red',
                        help='Solid colorway color: red, orange, yellow, green, blue, purple, white, R,G,B or #RRGGBB')
    parser.add_argument('--stops', default='0:255,0,0;1:0,0,255',
                        help='Gradient stops as POS:R,G,B;POS:R,G,B (default: red to blue)')
    parser.add_argument('--rainbow-speed', type=int, default=2,
                        help='Rainbow hue rotation in degrees per frame (default: 2)')
    parser.add_argument('--pattern', '-p', choices=[k.value for k in PatternKind], default='chase',
                        help='Animation pattern (default: chase)')
    parser.add_argument('--preset', choices=[p.value for p in Preset],
                        help='Run a preset (pattern with its own colorway) instead of --colorway/--pattern')

    params = parser.add_argument_group('pattern parameters')
    params.add_argument('--width', type=int, help='Chase window width')
    params.add_argument('--period', type=int, help='Pulse period in frames')
    params.add_argument('--floor', type=float, help='Pulse minimum brightness (0-1)')
    params.add_argument('--spacing', type=int, help='Theater chase spacing')
    params.add_argument('--probability', type=float, help='Twinkle spark probability per pixel and frame')
    params.add_argument('--decay', type=float, help='Twinkle decay factor per frame')
    params.add_argument('--tail', type=float, help='Knight rider tail length as a fraction of the strip')
    params.add_argument('--band-size', type=int, help='Pixels per color band')

    parser.add_argument('--delay-ms', type=int, default=20,
                        help='Delay after each frame in milliseconds, 0 = as fast as possible (default: 20)')
    parser.add_argument('--frames', type=int, default=0,
                        help='Stop after this many frames, 0 = run until interrupted (default: 0)')

    hardware = parser.add_argument_group('hardware')
    hardware.add_argument('--transport', choices=TRANSPORTS, default='apa102',
                          help='LED driver: apa102 (SPI), ws281x (PWM/PCM) or mock (default: apa102)')
    hardware.add_argument('--spi-bus', type=int, default=0)
    hardware.add_argument('--spi-device', type=int, default=0)
    hardware.add_argument('--spi-speed-hz', type=int, default=8_000_000)
    hardware.add_argument('--color-order', default='BGR', help='APA102 color byte order (default: BGR)')
    hardware.add_argument('--gpio-pin', type=int, default=18, help='ws281x data GPIO (default: 18)')
    hardware.add_argument('--rgbw', action='store_true', help='ws281x strip is SK6812 RGBW')

    parser.add_argument('--seed', type=int, help='Seed for random colorways and patterns')
    parser.add_argument('--max-write-failures', type=int, default=10,
                        help='Abort after this many consecutive failed frame writes (default: 10)')
    parser.add_argument('--log-dir', default='logs', help='Directory for log files (default: logs)')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    return parser


def config_from_args(args: argparse.Namespace) -> AnimationConfig:
    """Translate parsed arguments into an AnimationConfig (not yet validated)"""
    config = AnimationConfig(
        pixel_count=args.pixels,
        colorway=args.colorway,
        color=args.color,
        stops=args.stops,
        rainbow_speed=args.rainbow_speed,
        pattern=args.pattern,
        pattern_params=_pattern_params(args),
        preset=args.preset,
        delay_ms=args.delay_ms,
        frames=args.frames,
        transport=args.transport,
        seed=args.seed,
        max_write_failures=args.max_write_failures,
    )
    config.spi.bus = args.spi_bus
    config.spi.device = args.spi_device
    config.spi.speed_hz = args.spi_speed_hz
    config.spi.color_order = args.color_order
    config.strip.gpio_pin = args.gpio_pin
    config.strip.rgbw = args.rgbw
    return config


def _pattern_params(args: argparse.Namespace) -> Dict[str, Any]:
    options = PATTERN_OPTIONS[PatternKind.parse(args.pattern)]
    return {param: getattr(args, option) for option, param in options.items()
            if getattr(args, option) is not None}


def make_transport_factory(config: AnimationConfig, logger: ClassLogger) -> Callable:
    """Callable opening the configured transport for a pixel count"""
    if config.transport == "apa102":
        return lambda count: Apa102Transport.open(config.spi, count)
    if config.transport == "ws281x":
        return lambda count: PixelStripTransport.open(config.strip, count)
    mock_logger = logger.create_class_logger("MockTransport", logger.level)
    return lambda count: MockTransport.open({"logger": mock_logger}, count)


def log_wiring(config: AnimationConfig, logger: ClassLogger) -> None:
    if config.transport == "apa102":
        logger.info(f"APA102 on {config.spi.device_path}: clock {describe_gpio(config.spi.clock_gpio)}, "
                    f"data {describe_gpio(config.spi.data_gpio)}, ground pin {SPI_GROUND_PIN}")
    elif config.transport == "ws281x":
        logger.info(f"WS281x data on {describe_gpio(config.strip.gpio_pin)}, DMA {config.strip.dma}")
    else:
        logger.info("Mock transport: frames are kept in memory only")


def log_system_usage(logger: ClassLogger, process: psutil.Process, frames: int, elapsed_s: float) -> None:
    """Log frame rate and current memory/CPU usage of the process"""
    fps = frames / elapsed_s if elapsed_s > 0 else 0.0
    try:
        process_mb = process.memory_info().rss / 1024 / 1024
        cpu_percent = process.cpu_percent(interval=None)
    except psutil.Error as e:
        logger.warning(f"Failed to read process usage: {e}")
        return
    logger.info(f"Frames: {frames} ({fps:.1f} FPS) | Memory: {process_mb:.1f}MB | CPU: {cpu_percent:.1f}%")


def run_animation(controller: Controller, config: AnimationConfig, logger: ClassLogger,
                  clock: Callable[[], float] = time.monotonic,
                  sleep: Callable[[float], None] = time.sleep) -> int:
    """
    Drive the controller frame after frame.

    Failed frame writes are logged and the loop moves on to the next frame
    after the usual frame delay. After `max_write_failures` consecutive
    failures the last error is raised.

    Returns:
        Number of frames rendered
    """
    colorway = None if config.preset else config.build_colorway(controller.rng)
    stats_timer = OnceInMs(config.stats_interval_ms, clock=clock)
    process = psutil.Process()
    started = clock()
    frames = 0
    consecutive_failures = 0

    while config.frames == 0 or frames < config.frames:
        try:
            if config.preset:
                controller.execute_preset(config.preset, config.delay_ms)
            else:
                controller.execute_pattern(colorway, config.pattern_kind, config.delay_ms,
                                           **config.pattern_params)
            consecutive_failures = 0
        except TransportWriteError:
            consecutive_failures += 1
            if consecutive_failures >= config.max_write_failures:
                logger.error(f"Giving up after {consecutive_failures} consecutive failed frame writes")
                raise
            # The controller skips its delay when the flush fails
            if config.delay_ms > 0:
                sleep(config.delay_ms / 1000.0)
        frames += 1

        if stats_timer.should_execute():
            log_system_usage(logger, process, frames, clock() - started)

    return frames


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - parses arguments, sets up logging and runs the animation.
    """
    args = build_parser().parse_args(argv)

    main_logger = HybridLogger("easyblink", log_dir=args.log_dir,
                               console_level=logging.DEBUG if args.debug else logging.INFO)
    level = logging.DEBUG if args.debug else logging.INFO
    app_logger = main_logger.get_class_logger("EasyBlink", level)

    signal.signal(signal.SIGTERM, _terminate)
    signal.signal(signal.SIGHUP, _terminate)

    controller = None
    try:
        config = config_from_args(args)
        config.validate()

        app_logger.info(f"Strip: {config.pixel_count} pixels, transport {config.transport}")
        if config.preset:
            app_logger.info(f"Preset: {config.preset}")
        else:
            app_logger.info(f"Colorway: {config.colorway}, pattern: {config.pattern} {config.pattern_params}")
        fps = f"{config.target_fps:.1f} FPS max" if config.target_fps else "unthrottled"
        app_logger.info(f"Frame delay: {config.delay_ms}ms ({fps})")
        log_wiring(config, app_logger)

        controller = Controller(
            config.pixel_count,
            transport_factory=make_transport_factory(config, app_logger),
            rng=config.make_rng(),
            logger=main_logger.get_class_logger("Controller", level),
        )

        frames = run_animation(controller, config, app_logger)
        app_logger.info(f"Finished after {frames} frames")
        return 0

    except KeyboardInterrupt:
        app_logger.info("Stopped by user (Ctrl+C)")
        return 0
    except (ConfigError, TransportInitError) as e:
        app_logger.error(f"Cannot start animation: {e}")
        return 2
    except TransportWriteError as e:
        app_logger.error(f"Strip stopped responding: {e}")
        return 1
    finally:
        if controller is not None:
            try:
                controller.close()
            except TransportWriteError as e:
                app_logger.warning(f"Could not blank the strip on exit: {e}")
        app_logger.info("easyblink shut down")
        main_logger.cleanup()


if __name__ == "__main__":
    sys.exit(main())
