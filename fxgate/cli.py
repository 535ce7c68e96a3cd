#!/usr/bin/env python3
import argparse
import json
import sys

from fxgate.analyzers.location import find_installed_tool
from fxgate.core.containers import build_configuration, build_run_service
from fxgate.core.logging import setup_logging
from fxgate.domain.errors import ConfigurationError
from fxgate.domain.models import format_message
from fxgate.services.run_service import RunService

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def print_error(error_code, file, line, message):
    print(format_message("error", error_code, file, line, message))


def print_warning(error_code, file, line, message):
    print(format_message("warning", error_code, file, line, message))


def build_parser():
    ap = argparse.ArgumentParser(prog="fxgate", description="Run FxCop as a build gate.")
    ap.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL (default INFO).")
    ap.add_argument(
        "--log-format", choices=("json", "text"), default=None, help="Overrides LOG_FORMAT (default json)."
    )
    sub = ap.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Analyze assemblies and exit non-zero when the gate fails.")
    run.add_argument("assemblies", nargs="+", metavar="ASSEMBLY")
    run.add_argument("--exe", dest="executable", help="Path to FxCopCmd.exe.")
    run.add_argument("--ruleset", help="Ruleset file name, e.g. AllRules.ruleset.")
    run.add_argument("--ruleset-dir", help="Directory holding the ruleset.")
    run.add_argument("--rule", dest="rules", action="append", help="Rule assembly; repeatable.")
    run.add_argument("--dictionary", help="Custom dictionary XML.")
    run.add_argument("--output", dest="output_path", help="Keep the XML report at this path.")
    run.add_argument("--fail-on-warning", action="store_true", default=None)
    run.add_argument("--no-fail-on-error", dest="fail_on_error", action="store_false", default=None)
    run.add_argument("--timeout", dest="timeout_sec", type=float, default=None)
    run.add_argument("--json", action="store_true", help="Print the outcome as JSON.")

    sub.add_parser("locate", help="Show the FxCop installation that would be used.")

    serve = sub.add_parser("serve", help="Start the HTTP API.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    return ap


def cmd_run(args):
    config = build_configuration(
        args.assemblies,
        executable=args.executable,
        ruleset=args.ruleset,
        ruleset_dir=args.ruleset_dir,
        rules=args.rules,
        dictionary=args.dictionary,
        output_path=args.output_path,
        fail_on_error=args.fail_on_error,
        fail_on_warning=args.fail_on_warning,
        timeout_sec=args.timeout_sec,
    )
    try:
        RunService.validate(config)
    except ConfigurationError as e:
        print(f"[gate] configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    if args.json:
        service = build_run_service(error_sink=None, warning_sink=None)
    else:
        service = build_run_service(error_sink=print_error, warning_sink=print_warning)

    outcome = service.run(config)

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2))
    else:
        if outcome.failure:
            print(f"[gate] {outcome.failure['message']}", file=sys.stderr)
            if outcome.output:
                print(outcome.output, file=sys.stderr)
        print(f"[gate] errors={len(outcome.errors)} warnings={len(outcome.warnings)}")
        print("[gate] PASSED" if outcome.succeeded else "[gate] FAILED")

    return EXIT_PASSED if outcome.succeeded else EXIT_FAILED


def cmd_locate(args):
    location = find_installed_tool()
    print(json.dumps(location.to_dict(), indent=2))
    return EXIT_PASSED if location.found else EXIT_FAILED


def cmd_serve(args):
    import uvicorn

    uvicorn.run("fxgate.main:app", host=args.host, port=args.port)
    return EXIT_PASSED


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, stream=sys.stderr, fmt=args.log_format)

    if args.command == "run":
        return cmd_run(args)
    if args.command == "locate":
        return cmd_locate(args)
    return cmd_serve(args)


if __name__ == "__main__":
    sys.exit(main())
