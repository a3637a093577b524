"""
Dex Search – Desktop Application
================================
Run with:  python app.py

Dark-themed window around the dexsearch engine.

Features:
  - Modern dark UI via customtkinter
  - Comma-separated query entry (Enter or the Search button runs it)
  - Broadcast toggle: mirrors the chat rule that 'all' cannot be broadcast
  - Result pane plus a live log pane fed from the logging module
  - Persistent settings (settings.json): catalog path, window geometry
"""

from __future__ import annotations

import logging
import queue
import sys
from pathlib import Path

# ── Ensure project root is importable ────────────────────────────────────────
ROOT_DIR = Path(__file__).resolve().parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import customtkinter as ctk

from dexsearch.app_utils import C, load_settings, resolve_catalog_path, save_settings
from dexsearch.catalog_loader import load_catalog
from dexsearch.commands import HELP_TEXT, run_command
from dexsearch.errors import CatalogError

# ── Logging ──────────────────────────────────────────────────────────────────

# Thread-safe queue that feeds the log pane
_log_queue: queue.Queue = queue.Queue(maxsize=5000)


class _QueueHandler(logging.Handler):
    """Logging handler that pushes records into _log_queue for the GUI."""
    def emit(self, record: logging.LogRecord) -> None:
        try:
            _log_queue.put_nowait(self.format(record))
        except queue.Full:
            pass  # pane is behind; drop the line


_queue_handler = _QueueHandler()
_queue_handler.setFormatter(
    logging.Formatter("%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
                      datefmt="%H:%M:%S")
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logging.getLogger().addHandler(_queue_handler)
logger = logging.getLogger("app")

MAX_LOG_LINES = 500


class App(ctk.CTk):
    def __init__(self):
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("dark-blue")

        self.settings = load_settings()
        catalog_path = resolve_catalog_path(self.settings)
        try:
            self.catalog = load_catalog(catalog_path)
        except CatalogError as exc:
            logger.error("Could not load catalog: %s", exc.message)
            raise SystemExit(2) from exc

        self.title("Dex Search")
        self.geometry(self.settings.get("window_geometry", "900x600"))
        self.minsize(640, 420)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self._build_ui()
        self._show(HELP_TEXT)
        self.after(200, self._poll_log)

    # ─────────────────────────────────────────────────────────────────────
    #  UI
    # ─────────────────────────────────────────────────────────────────────

    def _build_ui(self):
        # ── Title bar ────────────────────────────────────────────────────
        title_bar = ctk.CTkFrame(self, fg_color=C["bg_card"], corner_radius=0, height=56)
        title_bar.pack(fill="x")
        title_bar.pack_propagate(False)

        ctk.CTkLabel(
            title_bar, text="DEX SEARCH",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=C["accent"],
        ).pack(side="left", padx=20)
        ctk.CTkLabel(
            title_bar, text=f"{len(self.catalog)} species loaded",
            font=ctk.CTkFont(size=11), text_color=C["text_dim"],
        ).pack(side="right", padx=20)

        # ── Query row ────────────────────────────────────────────────────
        row = ctk.CTkFrame(self, fg_color="transparent")
        row.pack(fill="x", padx=12, pady=(12, 6))

        self._query_var = ctk.StringVar()
        entry = ctk.CTkEntry(
            row, textvariable=self._query_var,
            placeholder_text="fire type, !uber, flamethrower",
            fg_color=C["bg_input"], border_color=C["border"], height=36,
        )
        entry.pack(side="left", fill="x", expand=True, padx=(0, 8))
        entry.bind("<Return>", lambda e: self._run_search())

        self._broadcast_var = ctk.BooleanVar(value=bool(self.settings.get("broadcast", False)))
        ctk.CTkCheckBox(
            row, text="Broadcast", variable=self._broadcast_var,
            text_color=C["text"], fg_color=C["accent"], hover_color=C["accent_h"],
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            row, text="Search", width=100, height=36,
            font=ctk.CTkFont(size=13, weight="bold"),
            fg_color=C["green"], hover_color="#16a34a", text_color="#000000",
            command=self._run_search,
        ).pack(side="left")

        # ── Results / log ────────────────────────────────────────────────
        self._result_box = ctk.CTkTextbox(
            self, fg_color=C["bg_card"], text_color=C["text"],
            font=ctk.CTkFont(size=13), wrap="word", height=260,
        )
        self._result_box.pack(fill="both", expand=True, padx=12, pady=6)

        self._log_box = ctk.CTkTextbox(
            self, fg_color=C["bg_dark"], text_color=C["text_dim"],
            font=ctk.CTkFont(family="Consolas", size=11), height=120,
        )
        self._log_box.pack(fill="x", padx=12, pady=(0, 12))
        self._log_box.configure(state="disabled")
        self._log_lines = 0

    def _show(self, text: str) -> None:
        self._result_box.configure(state="normal")
        self._result_box.delete("1.0", "end")
        self._result_box.insert("end", text)
        self._result_box.configure(state="disabled")

    def _run_search(self) -> None:
        query = self._query_var.get()
        reply = run_command(self.catalog, "dexsearch", query,
                            broadcast=self._broadcast_var.get())
        self._show(reply)

    def _poll_log(self) -> None:
        self._log_box.configure(state="normal")
        try:
            for _ in range(200):
                self._log_box.insert("end", _log_queue.get_nowait() + "\n")
                self._log_lines += 1
        except queue.Empty:
            pass
        if self._log_lines > MAX_LOG_LINES:
            self._log_box.delete("1.0", f"{self._log_lines - MAX_LOG_LINES}.0")
            self._log_lines = MAX_LOG_LINES
        self._log_box.see("end")
        self._log_box.configure(state="disabled")
        self.after(200, self._poll_log)

    def _on_close(self):
        self.settings["window_geometry"] = self.geometry()
        self.settings["broadcast"] = bool(self._broadcast_var.get())
        save_settings(self.settings)
        self.destroy()


# ═══════════════════════════════════════════════════════════════════════════════

def main():
    app = App()
    app.mainloop()


if __name__ == "__main__":
    main()
