#!/usr/bin/env python3
"""
Compute SHA-256 digests of files, sha256sum style.

Prints one "<digest>  <path>" line per file. Files are read in chunks,
so arbitrarily large files hash in constant memory.

Usage:
    filehash big.iso                      # software engine
    filehash --engine hashlib a.bin b.bin
    filehash --chunk-size 1048576 big.iso
    filehash --verify big.iso             # cross-check against hashlib
    filehash --self-test                  # run known test vectors
    cat file | filehash -                 # read stdin
"""

import argparse
import hashlib
import random
import sys

from pydantic import ValidationError

from . import __version__
from .config import HashConfig
from .constants import BLOCK_SIZE
from .engines import HashlibEngine, available_engines, create_engine
from .errors import HashError
from .hexenc import to_hex
from .logger import get_logger, setup_logging
from .padding import pad_message
from .reader import hash_file, hash_source

logger = get_logger(__name__)

# Known answers (FIPS 180-4 examples and common vectors)
TEST_VECTORS = [
    (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    (b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
     "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1"),
    (b"The quick brown fox jumps over the lazy dog",
     "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592"),
    (b"Hello, World!", "dffd6021bb2bd5b0af676290809ec3a53191dd81c7f70a4b28688a362182986f"),
    (bytes(range(10)), "1f825aa2f0020ef7cf91dfa30da4668d791c5d4824fc8e41354b89ec05795ab3"),
]


def digest_message(engine_name, message, chunk_size=None):
    """Hash an in-memory message with the named engine, optionally in chunks."""
    engine = create_engine(engine_name)
    if chunk_size is None:
        engine.update(message)
    else:
        for i in range(0, len(message), chunk_size):
            engine.update(message[i:i + chunk_size])
    return to_hex(engine.finalize())


def run_test(engine_name, message, expected, verbose=False):
    """Run a single test and return True if passed."""
    results = {
        "whole": digest_message(engine_name, message),
        "chunked": digest_message(engine_name, message, chunk_size=17),
    }
    passed = all(r == expected for r in results.values())

    if verbose or not passed:
        status = "PASS" if passed else "FAIL"
        shown = message if len(message) <= 64 else message[:61] + b"..."
        blocks = len(pad_message(message)) // BLOCK_SIZE
        print(f"  {status}: message={shown!r} ({len(message)} bytes, {blocks} blocks)")
        if not passed:
            for mode, result in results.items():
                print(f"    {mode + ':':11s}{result}")
            print(f"    Reference: {expected}")

    return passed


def self_test(engine_name, random_tests=5, verbose=False, seed=None):
    """Check an engine against known vectors and hashlib. Returns True if all pass."""
    rng = random.Random(seed)

    cases = list(TEST_VECTORS)

    # Lengths around the padding and block boundaries
    for length in (55, 56, 63, 64, 65, 119, 120, 128, 1000):
        msg = bytes(rng.randrange(256) for _ in range(length))
        cases.append((msg, hashlib.sha256(msg).hexdigest()))

    for _ in range(random_tests):
        length = rng.randint(0, 4096)
        msg = bytes(rng.randrange(256) for _ in range(length))
        cases.append((msg, hashlib.sha256(msg).hexdigest()))

    print(f"Running {len(cases)} tests against the {engine_name} engine...")
    passed = 0
    failed = 0

    for message, expected in cases:
        if run_test(engine_name, message, expected, verbose):
            passed += 1
        else:
            failed += 1

    print(f"\nResults: {passed} passed, {failed} failed")
    if failed == 0:
        print("All tests passed!")
    return failed == 0


def hash_path(path, engine, chunk_size):
    """Hash a path, treating '-' as standard input."""
    if path == "-":
        return to_hex(hash_source(sys.stdin.buffer, create_engine(engine), chunk_size))
    return hash_file(path, engine=engine, chunk_size=chunk_size)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="filehash",
        description="Compute SHA-256 digests of files in constant memory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  FILEHASH_ENGINE       default engine (software)
  FILEHASH_CHUNK_SIZE   default chunk size in bytes (65536)
  FILEHASH_LOG_LEVEL    default log level (INFO)
"""
    )

    parser.add_argument("files", nargs="*",
                        help="Files to hash ('-' reads standard input)")
    parser.add_argument("--engine", "-e", choices=available_engines(), default=None,
                        help="Digest engine (default: FILEHASH_ENGINE or software)")
    parser.add_argument("--chunk-size", "-c", type=int, default=None,
                        help="Bytes per read (default: FILEHASH_CHUNK_SIZE or 65536)")
    parser.add_argument("--verify", action="store_true",
                        help="Also hash each file with hashlib and report mismatches")
    parser.add_argument("--self-test", action="store_true",
                        help="Run known test vectors against the engine and exit")
    parser.add_argument("--tests", "-t", type=int, default=5,
                        help="Number of random self-test messages (default: 5)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show debug logging and every self-test result")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = HashConfig.from_env()
    except ValidationError as exc:
        print(f"Error: Invalid configuration:\n{exc}", file=sys.stderr)
        return 2

    if args.verbose:
        level = "DEBUG"
    elif args.quiet:
        level = "ERROR"
    else:
        level = config.LOG_LEVEL
    setup_logging(level)

    engine = args.engine or config.ENGINE
    chunk_size = config.CHUNK_SIZE
    if args.chunk_size is not None:
        try:
            chunk_size = HashConfig(CHUNK_SIZE=args.chunk_size).CHUNK_SIZE
        except ValidationError as exc:
            parser.error(f"--chunk-size: {exc.errors()[0]['msg']}")

    if args.self_test:
        return 0 if self_test(engine, args.tests, args.verbose) else 1

    if not args.files:
        parser.print_help()
        return 1

    exit_code = 0
    for path in args.files:
        try:
            digest = hash_path(path, engine, chunk_size)
        except HashError as exc:
            logger.error(str(exc))
            exit_code = max(exit_code, 1)
            continue

        if args.verify and path != "-" and engine != HashlibEngine.name:
            try:
                reference = hash_file(path, engine=HashlibEngine.name, chunk_size=chunk_size)
            except HashError as exc:
                logger.error(f"Verification of {path} failed: {exc}")
                exit_code = max(exit_code, 1)
                continue
            if reference != digest:
                logger.error(f"MISMATCH for {path}: {engine}={digest} hashlib={reference}")
                exit_code = 2
                continue
            logger.debug(f"Verified {path} against hashlib")

        print(f"{digest}  {path}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
