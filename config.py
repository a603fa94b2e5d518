# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional

@dataclass
class DecodeConfig:
    abort_on_track_error: bool = True   # False: record the error on the track and move to the next chunk
    keep_events: bool = True            # keep raw events on each Track for dumps

@dataclass
class ReportConfig:
    show_header: bool = True
    show_events: bool = False
    show_notes: bool = True
    seconds: bool = False       # add wall-clock columns (metrical files only)
    note_names: bool = True

@dataclass
class LogConfig:
    level: str = "INFO"
    log_dir: Optional[str] = None   # None -> utils.crashlog.log_dir()
    crash_files: bool = True

@dataclass
class AppConfig:
    decode: DecodeConfig = field(default_factory=DecodeConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    log: LogConfig = field(default_factory=LogConfig)
