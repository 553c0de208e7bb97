# SPDX-License-Identifier: AGPL-3.0-only OR LicenseRef-Fullbleed-Commercial
"""pageassets command line entrypoint.

Renders the assets declared in a ``pageassets.toml`` project file, previews
URL construction and wildcard resolution, inspects cache-buster manifests and
manages the persistent version-lookup cache.
"""
import argparse
import json
import sys
from pathlib import Path

from pageassets import AssetRegistry, Config
from pageassets import cache as cache_module
from pageassets import watcher as watcher_module
from pageassets.cachebuster import read_manifest
from pageassets.config import CONFIG_FILENAME
from pageassets.versioning import resolve_wildcard

from . import __version__

RENDER_KINDS = ["css", "less", "js", "styles", "scripts", "all"]
RAW_KINDS = {"css", "less", "js"}


def _emit(args, payload, text):
    if getattr(args, "json", False):
        sys.stdout.write(json.dumps(payload, ensure_ascii=True) + "\n")
    else:
        sys.stdout.write(text)


def _load_registry(args, required=True):
    """Build a registry from --config, ./pageassets.toml, or defaults."""
    config_path = Path(args.config) if getattr(args, "config", None) else None
    if config_path is None and not required and not (Path.cwd() / CONFIG_FILENAME).exists():
        return AssetRegistry(), None
    config = Config.load(config_path)
    return config.apply(AssetRegistry()), config


def _render_kind(registry, kind, section, raw, separator):
    if raw:
        if kind not in RAW_KINDS:
            raise ValueError(f"--raw is only supported for {', '.join(sorted(RAW_KINDS))}")
        if kind == "js":
            return registry.js_raw(separator, section or "footer")
        return registry.css_raw(separator) if kind == "css" else registry.less_raw(separator)
    if kind == "css":
        return registry.css()
    if kind == "less":
        return registry.less()
    if kind == "js":
        return registry.js(section or "footer")
    if kind == "styles":
        return registry.styles("header" if section is None else section)
    return registry.scripts("footer" if section is None else section)


def cmd_render(args):
    """CLI handler for `pageassets render`."""
    registry, config = _load_registry(args)
    if args.kind == "all":
        if args.raw:
            raise ValueError("--raw cannot be combined with --kind all")
        output = "".join([
            registry.css(),
            registry.less(),
            registry.styles(""),
            "".join(registry.js(name) for name in registry.js_files.names()),
            registry.scripts(""),
        ])
    else:
        output = _render_kind(registry, args.kind, args.section, args.raw, args.separator)

    payload = {
        "schema": "pageassets.render.v1",
        "ok": True,
        "config": str(config.path),
        "kind": args.kind,
        "section": args.section,
        "raw": bool(args.raw),
        "output": output,
    }
    text = output if output.endswith("\n") or not output else output + "\n"
    _emit(args, payload, text)


def cmd_url(args):
    """CLI handler for `pageassets url`."""
    registry, _ = _load_registry(args, required=False)
    registry.check_env()
    url = registry.url(args.identifier)
    payload = {
        "schema": "pageassets.url.v1",
        "ok": True,
        "identifier": args.identifier,
        "environment": registry.environment,
        "url": url,
    }
    _emit(args, payload, url + "\n")


def cmd_resolve(args):
    """CLI handler for `pageassets resolve`."""
    resolved = resolve_wildcard(args.pattern)
    payload = {
        "schema": "pageassets.resolve.v1",
        "ok": True,
        "pattern": args.pattern,
        "resolved": resolved,
        "matched": resolved != args.pattern,
    }
    if resolved == args.pattern and "*" in args.pattern:
        if not getattr(args, "json", False):
            sys.stderr.write(f"[warn] no file matches {args.pattern}\n")
    _emit(args, payload, resolved + "\n")


def cmd_manifest(args):
    """CLI handler for `pageassets manifest`."""
    table = read_manifest(args.path)
    if table is None:
        raise FileNotFoundError(f"Manifest not found: {args.path}")
    payload = {
        "schema": "pageassets.manifest.v1",
        "ok": True,
        "path": str(args.path),
        "count": len(table),
        "entries": table,
    }
    lines = [f"[ok] {len(table)} entries in {args.path}\n"]
    lines.extend(f"  {name} -> {token}\n" for name, token in sorted(table.items()))
    _emit(args, payload, "".join(lines))


def _build_parser():
    parser = argparse.ArgumentParser(prog="pageassets")
    parser.add_argument("--version", action="version", version="pageassets " + __version__)
    parser.add_argument("--json", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_render = sub.add_parser("render", help="Render configured assets as HTML tags or raw lists")
    p_render.add_argument("--config", help=f"Path to {CONFIG_FILENAME} (default: ./{CONFIG_FILENAME})")
    p_render.add_argument("--kind", choices=RENDER_KINDS, default="all")
    p_render.add_argument("--section", help="Section name for js/styles/scripts ('' renders every section)")
    p_render.add_argument("--raw", action="store_true", help="Emit resolved URLs instead of tags")
    p_render.add_argument("--separator", default="\n", help="Separator for --raw output")
    p_render.add_argument("--json", action="store_true")
    p_render.set_defaults(func=cmd_render)

    p_url = sub.add_parser("url", help="Show the URL an identifier renders to")
    p_url.add_argument("identifier")
    p_url.add_argument("--config")
    p_url.add_argument("--json", action="store_true")
    p_url.set_defaults(func=cmd_url)

    p_resolve = sub.add_parser("resolve", help="Resolve a '*' wildcard to the latest matching file")
    p_resolve.add_argument("pattern", help="Path pattern, e.g. js/lib-*.min.js")
    p_resolve.add_argument("--json", action="store_true")
    p_resolve.set_defaults(func=cmd_resolve)

    p_manifest = sub.add_parser("manifest", help="Show the entries of a cache-buster manifest")
    p_manifest.add_argument("path")
    p_manifest.add_argument("--json", action="store_true")
    p_manifest.set_defaults(func=cmd_manifest)

    # ===== Cache management commands =====
    p_cache = sub.add_parser("cache", help="Manage the persistent version-lookup cache")
    cache_sub = p_cache.add_subparsers(dest="cache_command", required=True)

    p_cache_dir = cache_sub.add_parser("dir", help="Print cache directory path")
    p_cache_dir.add_argument("--json", action="store_true")
    p_cache_dir.set_defaults(func=cache_module.cmd_cache_dir)

    p_cache_clear = cache_sub.add_parser("clear", help="Remove cached version lookups")
    p_cache_clear.add_argument("--path", help="Cache file (default: <cache dir>/versions.json)")
    p_cache_clear.add_argument("--json", action="store_true")
    p_cache_clear.set_defaults(func=cache_module.cmd_cache_clear)

    p_watch = sub.add_parser("watch", help="Reload the cache-buster manifest on change")
    p_watch.add_argument("--config")
    p_watch.set_defaults(func=watcher_module.cmd_watch)

    return parser


def main(argv=None):
    """Execute CLI command dispatch and standardized error handling."""
    argv = list(sys.argv[1:] if argv is None else argv)
    force_json = "--json" in argv
    parser = _build_parser()
    args = parser.parse_args(argv)
    if force_json:
        args.json = True
    try:
        args.func(args)
    except Exception as exc:
        if getattr(args, "json", False):
            err = {
                "schema": "pageassets.error.v1",
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
