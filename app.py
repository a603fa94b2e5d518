# app.py
import logging, sys
from typing import Optional, TextIO
from config import AppConfig
from midi.errors import MidiDecodeError
from midi.parser import Song, load_smf
from render.report import render_song
from utils.crashlog import log_exception

log = logging.getLogger(__name__)

class App:
    """Loads one MIDI file, reduces it to notes and prints the report."""
    def __init__(self, cfg: AppConfig, out: Optional[TextIO] = None):
        self.cfg = cfg
        self.out = out or sys.stdout
        self.song: Optional[Song] = None

    def load(self, path: str) -> Song:
        self.song = load_smf(path, self.cfg.decode)
        return self.song

    def run(self, path: str) -> int:
        try:
            song = self.load(path)
        except OSError as e:
            log.error("cannot open %s: %s", path, e)
            print(f"Error: cannot open {path}: {e.strerror or e}", file=sys.stderr)
            return 1
        except MidiDecodeError as e:
            log.error("failed to decode %s: %s", path, e)
            if self.cfg.log.crash_files:
                log_exception(f"decode {path}", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1

        self.out.write(render_song(song, self.cfg.report))
        failed = [t.index for t in song.tracks if t.error is not None]
        if failed:
            log.warning("%d track(s) failed to decode: %s", len(failed), failed)
            return 2
        return 0
