import customtkinter as ctk
import tkinter as tk
from datetime import date
from tkinter import ttk
from tkcalendar import Calendar
from utils.date_helpers import (
    parse_date, format_date, format_display_date, parse_display_date, today,
)

_CAL_THEMES = {
    "Dark":  {"bg": "#2b2b2b", "fg": "#ffffff"},
    "Light": {"bg": "#ffffff", "fg": "#000000"},
}
_SELECT_BG = "#1f6aa5"


class DatePickerWidget(ctk.CTkFrame):
    """Date entry in the user's display format with a calendar popup.

    get() returns YYYY-MM-DD for storage; set() accepts YYYY-MM-DD.
    """

    def __init__(
        self,
        master,
        initial_date: str | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._date_format = date_format
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(
            value=format_display_date(initial_date, date_format) if initial_date else ""
        )
        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._normalize_entry)
        self._entry.bind("<Return>", self._normalize_entry)

        ctk.CTkButton(
            self, text="📅", width=32, command=self._toggle_popup
        ).grid(row=0, column=1, padx=(4, 0))

    def get(self) -> str:
        d = self._parse_entry()
        if d is None:
            return self._var.get().strip()
        return format_date(d)

    def set(self, date_str: str):
        d = parse_date(date_str) if date_str else None
        if d:
            self._show(d)
        else:
            self._var.set(date_str or "")
        self._mark_valid(True)

    def is_valid(self) -> bool:
        return self._parse_entry() is not None

    def _parse_entry(self) -> date | None:
        raw = self._var.get().strip()
        if not raw:
            return None
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def _show(self, d: date):
        self._var.set(format_display_date(format_date(d), self._date_format))

    def _mark_valid(self, ok: bool):
        self._entry.configure(border_color=("gray65", "gray35") if ok else "#F44336")

    def _normalize_entry(self, _event=None):
        if not self._var.get().strip():
            self._mark_valid(True)
            return
        d = self._parse_entry()
        if d:
            self._show(d)
        self._mark_valid(d is not None)

    def _toggle_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        theme = _CAL_THEMES.get(ctk.get_appearance_mode(), _CAL_THEMES["Light"])
        bg, fg = theme["bg"], theme["fg"]
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self._parse_entry() or today()
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground=_SELECT_BG,
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda _e: self._on_pick(cal.get_date()))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")
        popup.bind("<FocusOut>", lambda _e: self._close_if_unfocused())

    def _on_pick(self, iso: str):
        d = parse_date(iso)
        if d:
            self._show(d)
        self._mark_valid(True)
        self._close_popup()

    def _close_if_unfocused(self):
        if not self._popup:
            return
        try:
            focused = self._popup.focus_get()
        except KeyError:
            # focus moved to a tk-internal popdown widget
            focused = None
        if focused is None or not str(focused).startswith(str(self._popup)):
            self._close_popup()

    def _close_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
        self._popup = None
