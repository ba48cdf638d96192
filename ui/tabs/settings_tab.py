import logging
import customtkinter as ctk
from tkinter import filedialog
from database.db_manager import DatabaseManager
from utils.app_config import get_db_folder, set_db_folder, get_log_level, set_log_level, LOG_LEVELS
from utils.constants import BUDGET_ALERT_THRESHOLD, UPCOMING_REMINDER_DAYS
from utils.date_helpers import DATE_FORMAT_OPTIONS

logger = logging.getLogger(__name__)

_APPEARANCES = ["System", "Light", "Dark"]
_RESTART_NOTE = "Restart the app for the change to take effect."


class SettingsTab(ctk.CTkFrame):
    """Storage location, logging and display preferences."""

    def __init__(self, master, db: DatabaseManager, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_storage_section(scroll)
        self._build_preferences_section(scroll)
        self.refresh()

    def refresh(self):
        appearance = self._db.get_setting("appearance_mode", "system")
        self._appearance_var.set(appearance.title())
        self._currency_var.set(self._db.get_setting("currency_symbol", "$"))
        date_fmt = self._db.get_setting("date_format", "MM/DD/YYYY")
        if date_fmt in DATE_FORMAT_OPTIONS:
            self._date_fmt_var.set(date_fmt)
        threshold = self._db.get_float_setting("budget_alert_threshold", BUDGET_ALERT_THRESHOLD)
        self._threshold_var.set(f"{threshold * 100:g}")
        days = self._db.get_float_setting("reminder_days", UPCOMING_REMINDER_DAYS)
        self._days_var.set(f"{days:g}")

    def _make_section(self, parent, title: str, row: int) -> ctk.CTkFrame:
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            outer, text=title, font=ctk.CTkFont(size=14, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w", padx=12, pady=(10, 4))
        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        inner.grid_columnconfigure(1, weight=1)
        return inner

    def _setting_row(self, section, row: int, label: str, widget):
        ctk.CTkLabel(section, text=label, anchor="e", width=150).grid(
            row=row, column=0, padx=(8, 4), pady=6, sticky="e"
        )
        widget.grid(row=row, column=1, padx=4, pady=6, sticky="w")

    # ── Storage ──────────────────────────────────────────────────────────────

    def _build_storage_section(self, parent):
        section = self._make_section(parent, "Storage & Logging", row=0)

        self._db_folder_var = ctk.StringVar(value=get_db_folder() or "(default: app folder)")
        folder_row = ctk.CTkFrame(section, fg_color="transparent")
        ctk.CTkEntry(folder_row, textvariable=self._db_folder_var, state="readonly", width=320).pack(
            side="left"
        )
        ctk.CTkButton(folder_row, text="Browse…", width=90, command=self._browse_db_folder).pack(
            side="left", padx=4
        )
        ctk.CTkButton(
            folder_row, text="Reset", width=70,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._change_db_folder(None),
        ).pack(side="left")
        self._setting_row(section, 0, "Database folder:", folder_row)

        self._log_level_var = ctk.StringVar(value=get_log_level())
        self._setting_row(section, 1, "Log level:", ctk.CTkComboBox(
            section, values=list(LOG_LEVELS), variable=self._log_level_var,
            width=140, state="readonly", command=self._change_log_level,
        ))

        self._storage_note = ctk.CTkLabel(
            section, text="", text_color="#FF9800", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._storage_note.grid(row=2, column=0, columnspan=2, sticky="w", padx=8)

    def _browse_db_folder(self):
        path = filedialog.askdirectory(title="Choose database folder")
        if path:
            self._change_db_folder(path)

    def _change_db_folder(self, path: str | None):
        try:
            set_db_folder(path)
        except OSError as e:
            self._storage_note.configure(text=f"Could not save config: {e}")
            return
        self._db_folder_var.set(path or "(default: app folder)")
        self._storage_note.configure(text=_RESTART_NOTE)

    def _change_log_level(self, level: str):
        try:
            set_log_level(level)
        except OSError as e:
            self._storage_note.configure(text=f"Could not save config: {e}")
            return
        logging.getLogger().setLevel(level)
        logger.info("Log level set to %s", level)

    # ── Preferences ──────────────────────────────────────────────────────────

    def _build_preferences_section(self, parent):
        section = self._make_section(parent, "Preferences", row=1)

        self._appearance_var = ctk.StringVar()
        self._setting_row(section, 0, "Appearance:", ctk.CTkComboBox(
            section, values=_APPEARANCES, variable=self._appearance_var,
            width=180, state="readonly",
        ))
        self._currency_var = ctk.StringVar()
        self._setting_row(section, 1, "Currency symbol:", ctk.CTkEntry(
            section, textvariable=self._currency_var, width=60,
        ))
        self._date_fmt_var = ctk.StringVar(value="MM/DD/YYYY")
        self._setting_row(section, 2, "Date format:", ctk.CTkComboBox(
            section, values=DATE_FORMAT_OPTIONS, variable=self._date_fmt_var,
            width=180, state="readonly",
        ))
        self._threshold_var = ctk.StringVar()
        self._setting_row(section, 3, "Budget warning at (%):", ctk.CTkEntry(
            section, textvariable=self._threshold_var, width=60,
        ))
        self._days_var = ctk.StringVar()
        self._setting_row(section, 4, "Remind days ahead:", ctk.CTkEntry(
            section, textvariable=self._days_var, width=60,
        ))

        ctk.CTkButton(section, text="Save Preferences", width=140, command=self._save).grid(
            row=5, column=0, columnspan=2, pady=(10, 4)
        )
        self._status = ctk.CTkLabel(section, text="", font=ctk.CTkFont(size=11))
        self._status.grid(row=6, column=0, columnspan=2, pady=(0, 8))

    def _save(self):
        try:
            threshold = float(self._threshold_var.get()) / 100
            days = int(self._days_var.get())
        except ValueError:
            self._status.configure(text="Threshold and days must be numbers.", text_color="#F44336")
            return
        if not 0 < threshold <= 1 or days < 0:
            self._status.configure(
                text="Threshold must be 1-100 and days zero or more.", text_color="#F44336"
            )
            return

        appearance = self._appearance_var.get().lower()
        self._db.set_setting("appearance_mode", appearance)
        self._db.set_setting("currency_symbol", self._currency_var.get().strip() or "$")
        self._db.set_setting("date_format", self._date_fmt_var.get())
        self._db.set_setting("budget_alert_threshold", str(threshold))
        self._db.set_setting("reminder_days", str(days))
        ctk.set_appearance_mode(appearance)
        logger.info("Preferences saved")
        self._status.configure(text="Saved. Formats and thresholds apply after restart.",
                               text_color="#4CAF50")
