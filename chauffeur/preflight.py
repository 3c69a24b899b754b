"""Pre-flight checks for installed driver binaries."""

import argparse
import subprocess
import sys
from dataclasses import dataclass

from .probe import PlatformProbe
from .service import Service


@dataclass
class CheckResult:
    kind: str
    ok: bool
    message: str
    path: str | None = None
    version: str | None = None


def check_kind(kind: str, with_version: bool = False) -> CheckResult:
    """Check if the driver binary for a kind is available."""
    service_class = Service._kinds.get(kind)
    if service_class is None:
        return CheckResult(kind, False, "unknown driver kind")

    path = PlatformProbe.find_binary(service_class.executable)
    if not path:
        return CheckResult(kind, False, f"{service_class.executable} not found in PATH")

    if not with_version:
        return CheckResult(kind, True, "ok", path)

    try:
        result = subprocess.run(
            [path, "--version"],
            capture_output=True,
            timeout=10,
        )
    except subprocess.TimeoutExpired:
        return CheckResult(kind, False, "timeout", path)
    except OSError as e:
        return CheckResult(kind, False, str(e)[:60], path)

    output = result.stdout.decode().strip() or result.stderr.decode().strip()
    version = output.split("\n")[0][:60] if output else None
    if result.returncode != 0 and not version:
        return CheckResult(kind, False, f"exited with code {result.returncode}", path)

    return CheckResult(kind, True, "ok", path, version)


def run_preflight(kinds: list[str], verbose: bool = False) -> bool:
    """Run preflight checks for given kinds. Returns True if all pass."""
    all_ok = True

    for kind in kinds:
        result = check_kind(kind, with_version=verbose)

        if result.ok:
            symbol = "✓"
            detail = result.version or result.path if verbose else "ok"
        else:
            symbol = "✗"
            detail = result.message
            all_ok = False

        print(f"{symbol} {kind}: {detail}")

    return all_ok


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="chauffeur-preflight",
        description="Check which WebDriver executables are installed"
    )
    parser.add_argument(
        "--kinds", "-k",
        help="Comma-separated driver kinds to check (default: chrome,firefox)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show path and version info"
    )
    parser.add_argument(
        "--all", "-a",
        action="store_true",
        help="Check all known driver kinds"
    )

    args = parser.parse_args(argv)

    if args.kinds:
        kinds = [k.strip() for k in args.kinds.split(",")]
    elif args.all:
        kinds = sorted(Service._kinds)
    else:
        kinds = ["chrome", "firefox"]

    ok = run_preflight(kinds, verbose=args.verbose)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
