# SPDX-License-Identifier: AGPL-3.0-only
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .cli import run_audit
from .sources import EXTRACTORS


class AuditEventHandler(FileSystemEventHandler):
    def __init__(self, args, delay=0.5):
        self.args = args
        self.delay = delay
        self.last_run = 0.0

    def should_handle(self, src_path):
        path = str(src_path)
        # Ignore hidden files and build artifacts
        if "/." in path or "\\." in path:
            return False
        if "dist" in Path(path).parts or "node_modules" in Path(path).parts:
            return False
        return Path(path).suffix.lower() in EXTRACTORS

    def on_modified(self, event):
        if event.is_directory or not self.should_handle(event.src_path):
            return

        # Debounce
        now = time.time()
        if now - self.last_run < self.delay:
            return

        print(f"[watch] Change detected in {event.src_path}...")
        try:
            run_audit(self.args)
        except Exception as e:
            print(f"[error] Audit failed: {e}")

        self.last_run = now

    on_created = on_modified


def _watch_roots(args):
    if args.paths:
        roots = [Path(p) for p in args.paths]
    elif args.config:
        roots = [Path(args.config).parent]
    else:
        roots = [Path.cwd()]
    return [p if p.is_dir() else p.parent for p in roots]


def watch(args):
    """Watch project directories and re-run the audit on change."""
    roots = _watch_roots(args)
    for root in roots:
        print(f"[watch] Watching {root} for changes...")

    # Initial audit
    try:
        run_audit(args)
    except Exception as e:
        print(f"[error] Initial audit failed: {e}")

    event_handler = AuditEventHandler(args, delay=getattr(args, "delay", 0.5))
    observer = Observer()
    for root in roots:
        observer.schedule(event_handler, str(root), recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
