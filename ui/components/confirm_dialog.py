import customtkinter as ctk
from ui.components.dialog import ERROR_COLOR, ERROR_HOVER, center_on_master


class ConfirmDialog(ctk.CTkToplevel):
    """Blocking yes/no prompt; read .result after construction returns."""

    def __init__(self, master, title: str, message: str, confirm_text: str = "Confirm", **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", padx=20, pady=16
        ).grid(row=0, column=0, sticky="ew")

        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=1, column=0, pady=(0, 16), padx=20, sticky="e")
        ctk.CTkButton(
            btn_frame, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            btn_frame, text=confirm_text, width=90,
            fg_color=ERROR_COLOR, hover_color=ERROR_HOVER,
            command=self._on_confirm,
        ).pack(side="left")

        self.transient(master)
        self.grab_set()
        center_on_master(self)
        self.wait_window()

    def _on_confirm(self):
        self.result = True
        self.destroy()
