import argparse
import faulthandler
import os
import sys
import traceback
from typing import Optional

from PyQt6.QtWidgets import QApplication

from .ui.main_window import MainWindow

_FAULT_LOG_HANDLE = None


def _install_exception_logging() -> None:
    log_path = os.path.join(os.path.dirname(__file__), "exception.log")
    def _hook(exc_type, exc_value, exc_tb):
        try:
            with open(log_path, "a", encoding="utf-8") as handle:
                handle.write("\n=== Unhandled Exception ===\n")
                traceback.print_exception(exc_type, exc_value, exc_tb, file=handle)
        except OSError:
            pass
        sys.__excepthook__(exc_type, exc_value, exc_tb)
    sys.excepthook = _hook
    import threading
    def _thread_hook(args):
        _hook(args.exc_type, args.exc_value, args.exc_traceback)
    threading.excepthook = _thread_hook


def _enable_faulthandler() -> None:
    try:
        log_path = os.path.join(os.path.dirname(__file__), "faulthandler.log")
        # Keep the handle alive for the process lifetime; faulthandler may write later.
        global _FAULT_LOG_HANDLE
        _FAULT_LOG_HANDLE = open(log_path, "w", encoding="utf-8")
        _FAULT_LOG_HANDLE.write(f"pid={os.getpid()}\n")
        _FAULT_LOG_HANDLE.flush()
        faulthandler.enable(_FAULT_LOG_HANDLE, all_threads=True)
    except OSError:
        faulthandler.enable(all_threads=True)


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Candlestick chart demo.")
    ap.add_argument("--export", metavar="PATH", help="Render the sample chart to a PNG and exit")
    ap.add_argument("--width", type=int, default=1000, help="Export width in pixels (default: 1000)")
    ap.add_argument("--height", type=int, default=1000, help="Export height in pixels (default: 1000)")
    ap.add_argument("--zoomed", action="store_true", help="Export with the zoom flag set")
    args = ap.parse_args(argv)

    _enable_faulthandler()
    _install_exception_logging()
    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = MainWindow()
    if args.export:
        view = window.chart_view
        view.resize(args.width, args.height)
        view.is_zoomed = args.zoomed
        if not view.export_png(args.export):
            raise SystemExit(f"Could not write {args.export}")
        print(f"exported {args.export} ({args.width}x{args.height})")
        return 0
    window.show()
    return app.exec()


if __name__ == '__main__':
    raise SystemExit(main())
