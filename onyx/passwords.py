#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence, Tuple

from .charsets import ALLOWED_CODES, EXCLUDE_CODES, resolve_alphabet, split_codes
from .engine import Exhaustive, RandomSample, RunConfig, generate
from .errors import ConfigurationError, SinkError
from .filters import parse_rules
from .progress import DEFAULT_EVERY, ProgressReporter
from .sink import open_sink, wrap_stream

FileName = os.path.basename(sys.argv[0])
if FileName in ("", "__main__.py"):
    FileName = "onyx"

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_IO = 2
EXIT_INTERRUPTED = 130


class PasswordMaker:
    """
    Generate password candidates over a chosen alphabet and length range,
    either every combination in order or a fixed number of random draws,
    dropping weak patterns and appending the survivors to a file.
    """

    # -------- Argument parsing --------
    def build_parser(self) -> argparse.ArgumentParser:
        epilog = fr"""
        Examples:
        # Every lowercase+digit password of length 4, appended to out.txt
        {FileName} -a l/d -l 4 -f out.txt

        # 1000 random passwords of length 8-12, no all-lower / all-digit ones
        {FileName} -a l/u/d/s -e x/z -l 8-12 -f passwords.txt -n 1000

        # Extra literal characters, gzip output
        {FileName} -a d -c "abc" -l 1-3 -f out.txt.gz

        # Code tables
        {FileName} --man
        """

        p = argparse.ArgumentParser(
            prog=FileName,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=(
                "Onyx password generator: enumerate every password over an alphabet, "
                "or sample random ones, with weak-pattern filters. Appends to a file."
            ),
            epilog=epilog,
        )

        # Inputs
        p.add_argument("-a", "--allowed", default="",
                       help="Alphabet codes separated by '/': l=a-z u=A-Z d=0-9 s=symbols (e.g. l/u/d/s).")
        p.add_argument("-c", "--chars", default="",
                       help="Extra literal characters appended to the alphabet.")
        p.add_argument("-e", "--exclude", default="",
                       help="Exclusion codes separated by '/': x=all-lower y=all-upper z=all-digits w=no-symbols.")
        p.add_argument("-l", "--length",
                       help="Password length N, or range MIN-MAX (e.g. 8-16).")
        p.add_argument("-n", "--count", type=int, default=None,
                       help="Number of random passwords. Omit to enumerate every combination.")
        p.add_argument("--seed", type=int, default=None,
                       help="Seed for random sampling (reproducible runs).")

        # Output & display
        p.add_argument("-f", "--file", help="Output file (appended). Use .gz to gzip, - for stdout.")
        p.add_argument("--progress-every", type=int, default=DEFAULT_EVERY,
                       help="Report progress every N written passwords (default: %(default)s).")
        p.add_argument("--no-progress", action="store_true", help="Do not print progress.")
        p.add_argument("--man", action="store_true", help="Show the full manual.")

        # Logging
        p.add_argument(
            "--log-level",
            default="info",
            choices=["debug", "info", "warning", "error"],
            help="Logging verbosity (default: info).",
        )
        return p

    # -------- Entry point --------
    def __init__(self, argv: Optional[Sequence[str]] = None):
        self.parser = self.build_parser()
        self.args = self.parser.parse_args(argv)
        self._configure_logging()

    def run(self) -> int:
        if self.args.man:
            self.show_man()
            return EXIT_OK
        if not (self.args.allowed or self.args.chars) or not self.args.length or not self.args.file:
            self.parser.print_help()
            return EXIT_OK

        try:
            config = self._build_config().validate()
        except ConfigurationError as e:
            logging.error("%s", e)
            return EXIT_CONFIG

        reporter = None
        if not self.args.no_progress:
            reporter = ProgressReporter(config.total, every=self.args.progress_every)

        try:
            sink = self._open_output(self.args.file)
            result = generate(config, sink, reporter)
        except SinkError as e:
            logging.error("Output error: %s", e)
            return EXIT_IO

        if result.interrupted:
            logging.warning("Stopped early: %d password(s) saved to %s", result.written, self.args.file)
            return EXIT_INTERRUPTED
        logging.info("%d password(s) saved to %s", result.written, self.args.file)
        return EXIT_OK

    # -------- Helpers: I/O, logging & manual --------
    def _configure_logging(self):
        level = getattr(logging, self.args.log_level.upper(), logging.INFO)
        logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    @staticmethod
    def _open_output(path: str):
        if path == "-":
            logging.info("Writing to stdout")
            return wrap_stream(sys.stdout)
        return open_sink(path)

    @staticmethod
    def show_man(out=None) -> None:
        out = out or sys.stdout
        lines = ["=== Onyx Password Generator MANUAL ===", "", "Allowed characters codes:"]
        lines += ["  %s = %s" % (code, chars) for code, chars in ALLOWED_CODES.items()]
        lines += ["", "Exclusion codes:"]
        lines += ["  %s = %s" % (code, name) for code, name in EXCLUDE_CODES.items()]
        lines += [
            "",
            "Password length: N or MIN-MAX, e.g. 8-16",
            "Output file: -f (appended; .gz for gzip; - for stdout)",
            "Random passwords: -n <number>; without -n every combination is written",
            "",
            "Full example:",
            "  %s -a l/u/d/s -e x/w -l 8-12 -f mypasswords.txt -n 500" % FileName,
        ]
        out.write("\n".join(lines) + "\n")

    # -------- Helpers: parsing options --------
    def _build_config(self) -> RunConfig:
        alphabet, unknown = resolve_alphabet(split_codes(self.args.allowed), self.args.chars)
        for code in unknown:
            logging.warning("Ignoring unknown alphabet code: %s", code)

        exclude_codes = self._known_exclusions(split_codes(self.args.exclude))
        min_len, max_len = self._parse_length(self.args.length)

        if self.args.count is None:
            mode = Exhaustive()
        else:
            mode = RandomSample(self.args.count)

        logging.debug("Alphabet: %s", alphabet)
        logging.debug("Exclusions: %s", exclude_codes)
        return RunConfig(
            alphabet=alphabet,
            min_length=min_len,
            max_length=max_len,
            mode=mode,
            exclusions=parse_rules(exclude_codes),
            seed=self.args.seed,
        )

    @staticmethod
    def _known_exclusions(codes: List[str]) -> List[str]:
        known: List[str] = []
        for code in codes:
            if code in EXCLUDE_CODES or code in EXCLUDE_CODES.values():
                known.append(code)
            else:
                logging.warning("Ignoring unknown exclusion code: %s", code)
        return known

    @staticmethod
    def _parse_length(spec: str) -> Tuple[int, int]:
        """
        "8" -> (8, 8); "8-16" -> (8, 16)
        """
        try:
            if "-" in spec:
                a, b = spec.split("-", 1)
                return int(a), int(b)
            n = int(spec)
            return n, n
        except ValueError:
            raise ConfigurationError("Invalid length: %r (use N or MIN-MAX)" % spec)


def main(argv: Optional[Sequence[str]] = None) -> int:
    return PasswordMaker(argv).run()


# -------- Main --------
if __name__ == "__main__":
    sys.exit(main())
