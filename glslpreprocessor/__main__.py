import argparse
import logging
import sys

from glslpreprocessor import Config, VirtualPathRegistry, preprocess
from glslpreprocessor.config import (DEFAULT_BASE_PATH, MAX_INCLUDE_DEPTH,
                                     MAX_OUTPUT_SIZE)
from glslpreprocessor.exceptions import RegistryFull


def _key_value(text, separator="="):
    name, _, value = text.partition(separator)
    return name, value


def _build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="glslpp",
        description="Expand includes, macros and conditionals in shader "
                    "source.",
    )
    parser.add_argument("input", help="shader source file, or - for stdin")
    parser.add_argument("-o", "--output", help="write result to this file")
    parser.add_argument("-B", "--base-path", default=DEFAULT_BASE_PATH,
                        help="directory for relative includes")
    parser.add_argument("-V", "--virtual-path", dest="virtual_paths",
                        action="append", default=[], metavar="NAME=DIR",
                        help="map <NAME/...> includes onto DIR")
    parser.add_argument("-D", dest="defines", action="append", default=[],
                        metavar="NAME[=VALUE]", help="predefine a macro")
    parser.add_argument("--keep-comments", action="store_true",
                        help="do not strip comments")
    parser.add_argument("--line-markers", action="store_true",
                        help="emit #line markers around included files")
    parser.add_argument("--max-include-depth", type=int,
                        default=MAX_INCLUDE_DEPTH)
    parser.add_argument("--max-output-size", type=int,
                        default=MAX_OUTPUT_SIZE)
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log include resolution and macro definitions")
    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None):
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    registry = VirtualPathRegistry()
    try:
        for item in args.virtual_paths:
            name, real_path = _key_value(item)
            registry.add(name, real_path)
    except (ValueError, RegistryFull) as e:
        parser.error(str(e))

    try:
        config = Config(
            base_path=args.base_path,
            remove_comments=not args.keep_comments,
            preserve_lines=args.line_markers,
            max_include_depth=args.max_include_depth,
            max_output_size=args.max_output_size,
            defines=dict(_key_value(item) for item in args.defines),
        )
    except ValueError as e:
        parser.error(str(e))

    if args.input == "-":
        filename, source = "<stdin>", stdin.read()
    else:
        filename = args.input
        try:
            with open(filename, encoding="utf-8", newline="") as f_obj:
                source = f_obj.read()
        except (OSError, UnicodeError) as e:
            print(f"glslpp: I/O error: {e}", file=stderr)
            return 1

    result = preprocess(source, filename, config=config,
                        virtual_paths=registry)
    if not result.success:
        print(result.error, file=stderr)
        return 1
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f_obj:
            f_obj.write(result.output)
    else:
        stdout.write(result.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
