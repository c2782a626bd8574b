import sys
from pathlib import Path

EXIT_CONSISTENT = 0
EXIT_INCONSISTENT = 1
EXIT_UNREADABLE = 2

USAGE = (
    "Usage: poetry run check [--] <file> [<file> ...]\n"
    "Exit codes: 0 consistent, 1 inconsistent, 2 unreadable"
)


def _check_path(path: Path) -> int:
    from app.core.file_header import get_extension, read_path_header
    from app.core.file_validation import is_consistent_type, types_for_header

    result = read_path_header(path)
    if not result.ok:
        print(f"{path}: unreadable ({result.error})")
        return EXIT_UNREADABLE

    extension = get_extension(path.name)
    consistent = is_consistent_type(extension, result.header)
    status = "consistent" if consistent else "inconsistent"
    types = ",".join(sorted(types_for_header(result.header) or ())) or "-"
    print(f"{path}: {status} (extension={extension or '-'} header={result.header} types={types})")
    return EXIT_CONSISTENT if consistent else EXIT_INCONSISTENT


def run_check(paths: list[str]) -> int:
    """Check every path; unreadable beats inconsistent beats consistent."""
    codes = [_check_path(Path(p)) for p in paths]
    return max(codes, default=EXIT_CONSISTENT)


def check():
    """Check that each file's header matches its extension - usage: poetry run check <file> [...]."""
    args = sys.argv[1:]
    if args and args[0] in ("-h", "--help"):
        print(USAGE)
        sys.exit(EXIT_CONSISTENT)
    # "--" ends options so file names starting with "-" can be checked
    if args and args[0] == "--":
        args = args[1:]
    if not args:
        print(USAGE)
        sys.exit(EXIT_UNREADABLE)
    sys.exit(run_check(args))


def start():
    """Run the API server."""
    from app.main import start as start_server

    start_server()
