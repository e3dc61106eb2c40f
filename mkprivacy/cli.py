from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import List, Optional

from mkprivacy.core.config import ConfigFsPaths, ConfigManager
from mkprivacy.core.config.models import AppConfig
from mkprivacy.core.error_reporter import ErrorReporter, ErrorReporterConfig, normalize_exception
from mkprivacy.core.errors import MkPrivacyError
from mkprivacy.core.events import EventLogger
from mkprivacy.core.logger import setup_logging
from mkprivacy.core.manifest.models import PrivacyManifest
from mkprivacy.core.plist_io import load_manifest, manifest_as_plist_bytes, save_manifest
from mkprivacy.core.store import ManifestStore
from mkprivacy.core.summarizer import summary_lines


@dataclass
class Session:
    config: AppConfig
    logger: object
    error_reporter: ErrorReporter
    store: ManifestStore


def _bootstrap(root: str) -> Session:
    # Log under <root>/logs until config says otherwise, so config recovery is recorded.
    logger = setup_logging(os.path.join(root, "logs"))
    cfg = ConfigManager(fs=ConfigFsPaths(root), logger=logger).load_all()
    log_dir = cfg.logging.log_dir if os.path.isabs(cfg.logging.log_dir) else os.path.join(root, cfg.logging.log_dir)
    logger = setup_logging(log_dir, cfg.logging.level)
    reporter = ErrorReporter(path=os.path.join(log_dir, "errors.jsonl"), cfg=ErrorReporterConfig(include_tracebacks=cfg.logging.include_tracebacks), logger=logger)
    events = EventLogger(path=os.path.join(log_dir, "session.jsonl")) if cfg.logging.event_log_enabled else None
    store = ManifestStore(logger=logger.getChild("store"), event_logger=events, sort_keys=cfg.export.sort_keys)
    return Session(config=cfg, logger=logger, error_reporter=reporter, store=store)


def _emit(manifest: PrivacyManifest, output: Optional[str], session: Session) -> None:
    sort_keys = session.config.export.sort_keys
    try:
        if output:
            save_manifest(manifest, output, sort_keys=sort_keys)
        else:
            data = manifest_as_plist_bytes(manifest, sort_keys=sort_keys)
    except (TypeError, ValueError, OverflowError) as e:
        raise normalize_exception(e, subsystem="export", context={"output": output or "-"}) from e
    if output:
        print(f"Wrote {output}")
    else:
        sys.stdout.write(data.decode("utf-8"))


def cmd_check(args: argparse.Namespace, session: Session) -> int:
    session.store.import_manifest(load_manifest(args.file))
    for line in summary_lines(session.store.manifest, session.store.warnings):
        print(line)
    if args.strict and session.store.warnings.is_active:
        return 1
    return 0


def cmd_export(args: argparse.Namespace, session: Session) -> int:
    session.store.import_manifest(load_manifest(args.file))
    session.store.export_text()
    _emit(session.store.manifest, args.output, session)
    return 0


def cmd_new(args: argparse.Namespace, session: Session) -> int:
    session.store.clear()
    _emit(session.store.manifest, args.output, session)
    return 0


def cmd_ui(args: argparse.Namespace, session: Session) -> int:
    from mkprivacy.ui.app import run_desktop_ui

    run_desktop_ui(store=session.store, config=session.config, logger=session.logger, error_reporter=session.error_reporter, path=args.file)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="mkprivacy", description="Edit and check Apple privacy manifests (PrivacyInfo.xcprivacy).")
    ap.add_argument("--root", default=".", help="Directory holding config/ and logs/ (default: current directory).")
    sub = ap.add_subparsers(dest="command")

    p_ui = sub.add_parser("ui", help="Open the desktop editor (default).")
    p_ui.add_argument("file", nargs="?", help="Privacy manifest to open.")
    p_ui.set_defaults(func=cmd_ui)

    p_check = sub.add_parser("check", help="Print the summary and warnings for a manifest.")
    p_check.add_argument("file")
    p_check.add_argument("--strict", action="store_true", help="Exit with status 1 when any warning is active.")
    p_check.set_defaults(func=cmd_check)

    p_export = sub.add_parser("export", help="Re-export a manifest as an XML property list.")
    p_export.add_argument("file")
    p_export.add_argument("-o", "--output", help="Output file (default: stdout).")
    p_export.set_defaults(func=cmd_export)

    p_new = sub.add_parser("new", help="Write an empty privacy manifest.")
    p_new.add_argument("-o", "--output", help="Output file (default: stdout).")
    p_new.set_defaults(func=cmd_new)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if getattr(args, "func", None) is None:
        args = ap.parse_args(["--root", args.root, "ui"])

    try:
        session = _bootstrap(args.root)
    except MkPrivacyError as e:
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 2

    try:
        return int(args.func(args, session))
    except MkPrivacyError as e:
        session.error_reporter.write_error(e, subsystem=args.command or "ui", internal_exc=e)
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 2
    except OSError as e:
        err = session.error_reporter.report_exception(e, subsystem="export", context={"command": args.command})
        print(f"Error: {err.user_message}", file=sys.stderr)
        return 2
