"""CLI that resolves the prebuilt binary download URL for an extension release."""

from __future__ import annotations

import argparse
import json
import platform
from pathlib import Path

from pie_core import configure_logging, load_config

from .auth import GithubTokenAuth
from .exceptions import CouldNotFindReleaseAsset, NoMatchingAsset, ReleaseAssetError
from .http import UrllibHttpClient
from .models import Package
from .resolver import GithubPackageReleaseAssets, resolve_target


EXIT_NOT_FOUND = 2
EXIT_FAILURE = 3


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _print_error(exc: Exception) -> None:
    payload: dict[str, object] = {"error": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, NoMatchingAsset):
        payload["acceptable_names"] = list(exc.expected_names)
    _print_json(payload)


def cmd_resolve(args: argparse.Namespace) -> int:
    cfg = load_config(Path(args.config) if args.config else None)
    configure_logging(level=cfg.log_level)
    api_base = (args.api_base or cfg.github.api_base_url).rstrip("/")

    try:
        target = resolve_target(
            system="Windows",
            machine=args.arch or platform.machine(),
            php_version=args.php,
            thread_safety=args.thread_safety,
            compiler=args.compiler,
        )
        package = Package.from_repo(args.repo, name=args.extension, version=args.version)
    except ValueError as exc:
        _print_error(exc)
        return EXIT_FAILURE

    assets = GithubPackageReleaseAssets(api_base)
    http = UrllibHttpClient(timeout_s=cfg.http.timeout_s, user_agent=cfg.http.user_agent)

    try:
        url = assets.find_windows_download_url_for_package(target, package, GithubTokenAuth.from_env(), http)
    except ReleaseAssetError as exc:
        _print_error(exc)
        return EXIT_NOT_FOUND if isinstance(exc, CouldNotFindReleaseAsset) else EXIT_FAILURE

    _print_json(
        {
            "package": package.github_org_and_repository,
            "version": package.version,
            "target": {
                "arch": target.architecture.value,
                "php": target.php_version,
                "thread_safety": target.thread_safety.value,
                "compiler": target.windows_compiler.value if target.windows_compiler else None,
            },
            "acceptable_names": list(assets.naming.acceptable_names(target, package)),
            "url": url,
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pie-assets", description="Resolve prebuilt extension binaries")
    sub = parser.add_subparsers(dest="command", required=True)

    resolve_cmd = sub.add_parser("resolve", help="Print the download URL for a Windows binary")
    resolve_cmd.add_argument("--repo", required=True, help="GitHub owner/repo")
    resolve_cmd.add_argument("--extension", required=True, help="Extension name, e.g. xdebug")
    resolve_cmd.add_argument("--version", required=True, help="Release tag")
    resolve_cmd.add_argument("--php", default="8.3", help="PHP major.minor version")
    ts = resolve_cmd.add_mutually_exclusive_group()
    ts.add_argument("--ts", dest="thread_safety", action="store_const", const="ts")
    ts.add_argument("--nts", dest="thread_safety", action="store_const", const="nts")
    resolve_cmd.add_argument("--compiler", default="vs16", choices=["vc14", "vc15", "vs16", "vs17"])
    resolve_cmd.add_argument("--arch", default=None, help="Target architecture (default: this machine)")
    resolve_cmd.add_argument("--api-base", default=None, help="GitHub API base URL")
    resolve_cmd.add_argument("--config", default=None, help="Optional settings JSON path")
    resolve_cmd.set_defaults(func=cmd_resolve, thread_safety="nts")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
