import customtkinter as ctk

ERROR_COLOR = "#F44336"
ERROR_HOVER = "#D32F2F"


def center_on_master(win: ctk.CTkToplevel):
    win.update_idletasks()
    mw = win.master.winfo_x() + win.master.winfo_width() // 2
    mh = win.master.winfo_y() + win.master.winfo_height() // 2
    w, h = win.winfo_reqwidth(), win.winfo_reqheight()
    win.geometry(f"+{mw - w//2}+{mh - h//2}")


def parse_amount(text: str) -> float:
    """Parse a user-typed amount; tolerates currency symbols and thousands separators."""
    cleaned = text.strip().replace(",", "").lstrip("$€£")
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError("Invalid amount.") from None


class FormDialog(ctk.CTkToplevel):
    """Modal label/field form. Subclasses add rows then call _finish()."""

    def __init__(self, master, title: str, **kwargs):
        super().__init__(master, **kwargs)
        self.saved = False
        self._row = 0
        self.title(title)
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

    def _field(self, label: str, widget):
        top = 16 if self._row == 0 else 4
        ctk.CTkLabel(self, text=label).grid(
            row=self._row, column=0, padx=(16, 8), pady=(top, 4), sticky="e"
        )
        widget.grid(row=self._row, column=1, padx=(0, 16), pady=(top, 4), sticky="ew")
        self._row += 1
        return widget

    def _entry(self, label: str, value: str = "") -> ctk.StringVar:
        var = ctk.StringVar(value=value)
        self._field(label, ctk.CTkEntry(self, textvariable=var, width=220))
        return var

    def _combo(self, label: str, values: list[str], value: str, **kwargs) -> ctk.StringVar:
        var = ctk.StringVar(value=value)
        kwargs.setdefault("state", "readonly")
        self._field(label, ctk.CTkComboBox(self, values=values, variable=var, width=220, **kwargs))
        return var

    def _finish(self, save_text: str = "Save", on_delete=None):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color=ERROR_COLOR, wraplength=300, anchor="w",
        ).grid(row=self._row, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        self._row += 1

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=self._row, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        if on_delete:
            ctk.CTkButton(
                btn_frame, text="Delete", width=80,
                fg_color=ERROR_COLOR, hover_color=ERROR_HOVER,
                command=lambda: self._run(on_delete),
            ).pack(side="left", padx=8)
        ctk.CTkButton(
            btn_frame, text=save_text, width=100,
            command=lambda: self._run(self._on_save),
        ).pack(side="right")

        self.transient(self.master)
        self.grab_set()
        center_on_master(self)

    def _run(self, action):
        """Call action; a ValueError is shown inline, success closes the dialog."""
        try:
            action()
        except ValueError as e:
            self._error_var.set(str(e))
            return
        self.saved = True
        self.destroy()

    def _on_save(self):
        raise NotImplementedError
