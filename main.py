# main.py
import argparse, logging, os, sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from app import App
from config import AppConfig, DecodeConfig, LogConfig, ReportConfig
from utils.crashlog import log_dir, setup_crashlog

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(cfg: LogConfig):
    if logging.getLogger().handlers:
        return
    logs = cfg.log_dir or log_dir()
    os.makedirs(logs, exist_ok=True)

    logging.basicConfig(level=cfg.level, format=LOG_FORMAT, stream=sys.stderr)
    try:
        fh = RotatingFileHandler(os.path.join(logs, "app.log"), maxBytes=2*1024*1024,
                                 backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("file logging disabled: %s", e)

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="smf-notes", description="Decode a Standard MIDI File into notes per track.")
    ap.add_argument("path", help="MIDI file (.mid)")
    ap.add_argument("--events", action="store_true", help="dump every decoded event")
    ap.add_argument("--no-notes", action="store_true", help="do not list notes")
    ap.add_argument("--seconds", action="store_true", help="show note times in seconds (ticks/beat files only)")
    ap.add_argument("--raw-keys", action="store_true", help="print key numbers without note names")
    ap.add_argument("--keep-going", action="store_true", help="skip a broken track instead of aborting the file")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--log-dir", default=None)
    ap.add_argument("--no-crash-files", action="store_true", help="do not write crash/error-*.txt files")
    return ap

def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        decode=DecodeConfig(abort_on_track_error=not args.keep_going),
        report=ReportConfig(
            show_events=args.events,
            show_notes=not args.no_notes,
            seconds=args.seconds,
            note_names=not args.raw_keys,
        ),
        log=LogConfig(level=args.log_level, log_dir=args.log_dir, crash_files=not args.no_crash_files),
    )

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args)
    _init_logging(cfg.log)
    if cfg.log.crash_files:
        setup_crashlog(cfg.log.log_dir)
    logging.info("smf-notes start: %s", args.path)
    return App(cfg).run(args.path)

if __name__ == '__main__':
    sys.exit(main())
