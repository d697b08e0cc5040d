from __future__ import annotations

import argparse
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

from bizdash.config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, load_config
from bizdash.ingest.reader import UploadRejectedError, parse_csv, read_upload
from bizdash.ingest.schema import DatasetKind, resolve_dataset_kind
from bizdash.logging.init import enable_debug, log_summary, setup_logging
from bizdash.services.dashboard import compute_kpis, export_dashboard
from bizdash.services.orchestrator import ProcessingError, scan_csv_files, validate_all
from bizdash.services.summary import render_summary_line
from bizdash.services.templates import write_templates

"""CLI entrypoint.

Default run: validate every .csv file of ``source_directory`` and print a
SUMMARY line. Other modes write the sample templates, export the dashboard
JSON, inspect headers / KPIs, or serve the web API.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="bizdash", description="Small-business analytics data tool")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config file path")
    p.add_argument(
        "--kind",
        choices=[k.value for k in DatasetKind],
        help="Validate every file as this dataset kind instead of inferring it",
    )
    p.add_argument("--inspect-data", action="store_true", help="Print headers, sample rows and KPIs then exit")
    p.add_argument("--templates", type=Path, metavar="DIR", help="Write sample CSV templates to DIR and exit")
    p.add_argument("--export", type=Path, metavar="DIR", help="Export dashboard JSON to DIR and exit")
    p.add_argument("--serve", action="store_true", help="Run the web API")
    return p.parse_args(argv)


def _inspect_data(cfg: AppConfig, kind: str | None) -> int:
    directory = Path(cfg.source_directory)
    files = scan_csv_files(directory)
    if not files:
        print("inspect: no .csv files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            table = parse_csv(read_upload(f, cfg.max_upload_bytes))
        except UploadRejectedError as e:
            print(f"  rejected: {e}")
            continue
        resolved = resolve_dataset_kind(f.name, table.headers, explicit=kind, strategy=cfg.inference)  # type: ignore[arg-type]
        print(f"  kind={resolved.value} headers={table.headers}")
        print("    sample_rows=", [r.values for r in table.rows[:3]])
        print("    kpis=", compute_kpis(table, resolved, cfg.low_stock_threshold))
    return EXIT_SUCCESS_ALL


def _serve(cfg: AppConfig) -> int:  # pragma: no cover (blocking server loop)
    from bizdash.auth.store import InMemoryUserStore, PostgresUserStore
    from bizdash.db.connection import connect
    from bizdash.web.app import create_app

    logger = setup_logging()
    store = None
    # DISABLE_DB_CONNECT=1 keeps users in memory (tests / demo)
    if os.getenv("DISABLE_DB_CONNECT") != "1":
        try:
            pg_store = PostgresUserStore(connect(cfg.database))
            pg_store.ensure_schema()
            store = pg_store
        except Exception as e:
            logger.info(f"DB connection failed -> in-memory user store: {e}")
    app = create_app(cfg, user_store=store or InMemoryUserStore())
    logger.info(f"serving on http://{cfg.server.host}:{cfg.server.port}")
    app.run(host=cfg.server.host, port=cfg.server.port)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # argv=[] must not fall back to sys.argv (pytest flags would leak in)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug()

    if args.templates is not None:
        write_templates(args.templates)
        return EXIT_SUCCESS_ALL
    if args.export is not None:
        export_dashboard(args.export, today=date.today())
        return EXIT_SUCCESS_ALL

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.serve:
        return _serve(cfg)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Validating files from: {directory}")

    try:
        if args.inspect_data:
            return _inspect_data(cfg, args.kind)
        result = validate_all(cfg, kind=args.kind)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.invalid_files or result.rejected_files:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
