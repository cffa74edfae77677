from __future__ import annotations
import argparse, json, os, sys
from corpus_analysis import Engine
from corpus_analysis.config import DEFAULT_INPUT_BUFFER, DEFAULT_OUT, SYMBOL_MAX
from corpus_analysis.errors import AnalysisError
from corpus_analysis.loader import load_char_list, parse_size, resolve_sources
from corpus_analysis.storage import save_alphabet, save_report

_SRC_HELP = """
Files that contain the corpus. Glob style paths are expanded by the
tool when quoted, for example:
    -s "/home/john/**/corpus" "source/**/*" "../another/dir/*.json"
Unquoted globs are expanded by your shell before the tool sees them.
Environment variables and "~" are only resolved by the shell.
"""


def _gram(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid NUMBER: {text!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError("NUMBER must be greater than 0")
    if n > SYMBOL_MAX:
        raise argparse.ArgumentTypeError(f"NUMBER must be at most {SYMBOL_MAX}")
    return n


def _confirm_overwrite(path: str) -> bool:
    print(f"The file to store output ({path}) already exist. Do you want to overwrite it (y/n) ?")
    try:
        answer = input()
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="corpus-analysis",
        description="Analyze BEST corpus by various factor specified in parameter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_SRC_HELP,
    )
    p.add_argument("-g", "--gram", type=_gram, required=True, metavar="NUMBER",
                   help="Number of gram to be analyzed. For example, 3")
    p.add_argument("-s", "--src", nargs="+", required=True, metavar="FILES",
                   help="Files storing corpus (glob patterns allowed, see below)")
    p.add_argument("-o", "--out", default=DEFAULT_OUT, metavar="FILE",
                   help="CSV file to store analyze result")
    p.add_argument("-ib", "--input-buffer", default=DEFAULT_INPUT_BUFFER, metavar="BUFFER_SIZE",
                   help="Buffer size in bytes for corpus file reader. Default is 16MB.")
    p.add_argument("-cl", "--char-list-file", default=None, metavar="FILE",
                   help="A text file that contains a non-Thai character per line. "
                        "These characters will be vectorized into unique numbers.")
    p.add_argument("--alphabet-out", default=None, metavar="FILE",
                   help="Also write the alphabet table (char -> code) as JSON")
    p.add_argument("--include-last-window", action="store_true",
                   help="Also count the window starting at offset N - gram")
    p.add_argument("--workers", type=int, default=None, help="Worker threads")
    p.add_argument("-y", "--yes", action="store_true", help="Overwrite --out without asking")
    p.add_argument("--json", action="store_true", help="Print the report as JSON")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    try:
        buf_size = parse_size(args.input_buffer)
    except ValueError as e:
        p.error(f"--input-buffer: {e}")

    if os.path.exists(args.out) and not args.yes and not _confirm_overwrite(args.out):
        p.error("The destination to store analyzed data already exist")

    try:
        char_list = load_char_list(args.char_list_file) if args.char_list_file else []
        sources = resolve_sources(args.src)
    except AnalysisError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.json:
        print(f"{args.gram}-gram")
        print(f"Total {len(sources)} source files")
        print(f"Input buffer: {buf_size} bytes")
        print(f"Total non-Thai characters to be included is {len(char_list)} chars")
        print(f"Store output to {args.out}")

    eng = Engine()
    try:
        eng.build(sources, char_include_list=char_list, buf_size=buf_size,
                  workers=args.workers, verbose=args.verbose)
        report = eng.analyze(args.gram, include_last=True if args.include_last_window else None)
        save_report(report, args.out)
        if args.alphabet_out:
            save_alphabet(eng.table, args.alphabet_out)
    except AnalysisError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        eng.shutdown()

    if args.json:
        print(json.dumps(report.as_row(), ensure_ascii=False, indent=2))
    else:
        print(f"Total parsing took {report.parse_seconds:.3f} s")
        print(f"Total {report.total_chars} characters in corpus")
        print(f"Total {report.unique_chars} unique characters")
        print(f"Total unique analysis time is {report.analysis_seconds:.3f}s")
        print(f"Total {report.unique_grams} unique {report.gram}-gram")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
