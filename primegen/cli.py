#!/usr/bin/env python3
import sys, argparse, logging

from . import config
from .errors import ConfigurationError, EntropySourceError
from .search import SearchCoordinator
from .sinks import ConsoleSink

USAGE = """Usage: prime-gen <bits> <count=1>
Must have the first parameter. The second is optional.
<bits>       The number of bits of each prime.
             (Must be a multiple of 8 and at least 32)
<count=1>    The number of prime numbers that will be found.
             (The default will be 1)"""


class _UsageParser(argparse.ArgumentParser):
    # bad arguments print usage and exit 0, same as invalid bit lengths
    def error(self, message):
        print(USAGE, flush=True)
        raise SystemExit(0)


def format_elapsed(seconds: float) -> str:
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    return f"{int(h):02d}:{int(m):02d}:{s:07.4f}"


def build_parser() -> argparse.ArgumentParser:
    ap = _UsageParser(prog="prime-gen", add_help=False)
    ap.add_argument("bits")
    ap.add_argument("count", nargs="?", default=str(config.DEFAULT_COUNT))
    ap.add_argument("--workers", type=int, default=None, help="worker threads (default: cpu count)")
    ap.add_argument("--rounds", type=int, default=None, help="Miller-Rabin rounds (default 10)")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = config.SearchConfig.build(args.bits, args.count, workers=args.workers, rounds=args.rounds)
    except ConfigurationError:
        print(USAGE, flush=True)
        return 0

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print(f"BitLength: {cfg.bits} bits", flush=True)
    coord = SearchCoordinator.from_config(cfg, sink=ConsoleSink())
    try:
        report = coord.run_timed()
    except EntropySourceError as e:
        print(f"error: {e}", file=sys.stderr, flush=True)
        return 1
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr, flush=True)
        return 130
    print(f"Time to Generate: {format_elapsed(report.elapsed_s)}", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
