import customtkinter as ctk
from services.reminder_service import Reminder
from ui.components.dialog import center_on_master
from utils.constants import SEVERITY_ICONS, SEVERITY_COLORS


class ReminderDialog(ctk.CTkToplevel):
    """Startup list of budget, debt and recurring reminders."""

    def __init__(self, master, reminders: list[Reminder], on_open_recurring=None, **kwargs):
        super().__init__(master, **kwargs)
        self._on_open_recurring = on_open_recurring

        self.title("Reminders")
        self.geometry("560x420")
        self.resizable(False, True)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        count = len(reminders)
        ctk.CTkLabel(
            self,
            text=f"{count} reminder{'s' if count != 1 else ''}",
            font=ctk.CTkFont(size=16, weight="bold"),
            pady=12,
        ).grid(row=0, column=0, sticky="ew", padx=16)

        scroll = ctk.CTkScrollableFrame(self)
        scroll.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 8))
        scroll.grid_columnconfigure(0, weight=1)
        for i, reminder in enumerate(reminders):
            self._add_row(scroll, reminder, i)

        ctk.CTkButton(self, text="OK", command=self.destroy).grid(
            row=2, column=0, pady=(0, 16), padx=60, sticky="ew"
        )

        self.transient(master)
        self.grab_set()
        center_on_master(self)

    def _add_row(self, parent, reminder: Reminder, index: int):
        color = SEVERITY_COLORS.get(reminder.severity, "#888888")
        row = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=6)
        row.grid(row=index, column=0, sticky="ew", pady=3, padx=2)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=SEVERITY_ICONS.get(reminder.severity, "·"), text_color=color,
            font=ctk.CTkFont(size=18), width=30,
        ).grid(row=0, column=0, rowspan=2, padx=(8, 4), pady=6)
        ctk.CTkLabel(
            row, text=reminder.title, text_color=color, anchor="w",
            font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, sticky="ew", padx=(0, 4), pady=(6, 0))
        ctk.CTkLabel(
            row, text=reminder.detail, text_color=("gray40", "gray70"),
            font=ctk.CTkFont(size=11), anchor="w", wraplength=380,
        ).grid(row=1, column=1, sticky="ew", padx=(0, 4), pady=(0, 6))

        if reminder.type == "pending_recurring" and self._on_open_recurring:
            ctk.CTkButton(
                row, text="Review", width=70, height=26,
                command=self._open_recurring,
            ).grid(row=0, column=2, rowspan=2, padx=(4, 8), pady=6)

    def _open_recurring(self):
        self.destroy()
        self._on_open_recurring()
