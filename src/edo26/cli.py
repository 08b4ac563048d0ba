# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

import argparse
import logging
import yaml

from edo26.app_utils import Logger
from edo26.sonifier import WAVE_FORMS, SonifierError, SynthConfig, TextSonifier, print_quote

logger = Logger("CLI")

DEFAULT_OUTPUT = "26EDO.pcm"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edo26",
        description="Convert text into a 26-EDO melody written as raw 16-bit mono PCM.",
    )
    parser.add_argument("input", help="Path to the text file to sonify")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help=f"PCM output file, default {DEFAULT_OUTPUT}")
    parser.add_argument("--config", help="YAML file with pipeline settings; flags below override it")
    parser.add_argument("--sample-rate", type=int, help="Sample rate in Hz, default 44100")
    parser.add_argument("--gain-db", type=float, dest="output_gain_db", help="Output gain in dB, default 85")
    parser.add_argument("--tone-gain-db", type=float, help="Per-tone gain in dB, default 83")
    parser.add_argument("--overtones", type=int, help="Harmonics per tone, default 10")
    parser.add_argument("--tone-duration", type=float, help="Letter tone duration in seconds, default 0.1")
    parser.add_argument("--silence-duration", type=float, help="Silence duration for non-letters in seconds, default 0.2")
    parser.add_argument("--wave-form", choices=WAVE_FORMS, help="Wave form, default sawtooth")
    parser.add_argument("--workers", type=int, dest="max_workers", help="Threads used to synthesize tones, default 1")
    parser.add_argument("--quote", action="store_true", help="Print the Parmegiani quote when done")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_config(args: argparse.Namespace) -> SynthConfig:
    config = SynthConfig.from_yaml(args.config) if args.config else SynthConfig()
    return config.replace(
        sample_rate=args.sample_rate,
        output_gain_db=args.output_gain_db,
        tone_gain_db=args.tone_gain_db,
        overtones=args.overtones,
        tone_duration=args.tone_duration,
        silence_duration=args.silence_duration,
        wave_form=args.wave_form,
        max_workers=args.max_workers,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        Logger.set_level(logging.DEBUG)

    try:
        config = load_config(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        TextSonifier(config).sonify_file(args.input, args.output)
    except SonifierError as e:
        logger.error(str(e))
        return 1

    if args.quote:
        print_quote()
    return 0
